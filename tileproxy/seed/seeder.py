# This file is part of the TileProxy project.
# Copyright (C) 2026 TileProxy contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Pre-populate the tile cache for offline use.
"""
import queue
import threading
from collections import Counter

from tileproxy.cache.tile import CACHE, ORIGIN, PLACEHOLDER

import logging
log = logging.getLogger('tileproxy.seed')

SKIPPED = 'skipped'


class SeedError(Exception):
    pass


def level_tile_count(level):
    """
    >>> level_tile_count(0)
    1
    >>> level_tile_count(3)
    64
    """
    return 4 ** level


def iter_level_coords(level):
    """
    Yield all ``(x, y, z)`` tile coordinates of `level`.

    >>> list(iter_level_coords(1))
    [(0, 0, 1), (0, 1, 1), (1, 0, 1), (1, 1, 1)]
    """
    n = 2 ** level
    for x in range(n):
        for y in range(n):
            yield x, y, level


class TileWorker(threading.Thread):
    def __init__(self, tile_manager, tiles_queue, results):
        threading.Thread.__init__(self)
        self.daemon = True
        self.tile_manager = tile_manager
        self.tiles_queue = tiles_queue
        self.results = results

    def run(self):
        while True:
            tile_coord = self.tiles_queue.get()
            try:
                if tile_coord is None:
                    break
                tile = self.tile_manager.load_tile_coord(tile_coord)
                self.results.add(tile.provenance)
            except Exception:
                log.exception('unable to seed tile %r', tile_coord)
                self.results.add(PLACEHOLDER)
            finally:
                self.tiles_queue.task_done()


class SeedResults(object):
    """
    Thread-safe counter for the provenance of all seeded tiles.
    """
    def __init__(self):
        self._counter = Counter()
        self._lock = threading.Lock()

    def add(self, key):
        with self._lock:
            self._counter[key] += 1

    def as_dict(self):
        with self._lock:
            return {
                'fetched': self._counter[ORIGIN],
                'cached': self._counter[CACHE] + self._counter[SKIPPED],
                'failed': self._counter[PLACEHOLDER],
            }


class TileWorkerPool(object):
    """
    Manages multiple TileWorker.
    """
    def __init__(self, tile_manager, results, size=2):
        self.tiles_queue = queue.Queue(size * 4)
        self.procs = []
        for _ in range(size):
            worker = TileWorker(tile_manager, self.tiles_queue, results)
            worker.start()
            self.procs.append(worker)

    def process(self, tile_coord):
        self.tiles_queue.put(tile_coord)

    def stop(self):
        for _ in self.procs:
            self.tiles_queue.put(None)
        for proc in self.procs:
            proc.join()


def seed_levels(tile_manager, levels, concurrency=2, max_tiles=None, dry_run=False):
    """
    Load all tiles of the given zoom `levels` through the `tile_manager`.
    Tiles that are already cached are skipped, missing tiles are fetched
    from the origin and stored.

    :returns: dictionary with the number of ``fetched``, ``cached``
        and ``failed`` tiles
    :raise SeedError: if the levels contain more than `max_tiles` tiles
    """
    levels = sorted(set(levels))
    total = sum(level_tile_count(level) for level in levels)
    if max_tiles is not None and total > max_tiles:
        raise SeedError('levels %s contain %d tiles, limit is %d' % (
            ','.join(map(str, levels)), total, max_tiles))

    results = SeedResults()
    pool = None if dry_run else TileWorkerPool(tile_manager, results, size=concurrency)
    try:
        for level in levels:
            log.info('seeding level %d (%d tiles)', level, level_tile_count(level))
            for tile_coord in iter_level_coords(level):
                if tile_manager.is_cached(tile_coord):
                    results.add(SKIPPED)
                elif dry_run:
                    results.add(ORIGIN)
                else:
                    pool.process(tile_coord)
    finally:
        if pool is not None:
            pool.stop()

    summary = results.as_dict()
    log.info('seeding finished: %(fetched)d fetched, %(cached)d cached, %(failed)d failed', summary)
    return summary
