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
Cache statistics.
"""
import os
from collections import namedtuple

import logging
log = logging.getLogger('tileproxy.cache.stats')


class CacheStatistics(namedtuple('CacheStatistics', ['tile_count', 'total_bytes'])):
    """
    Point-in-time statistics of a tile cache directory.

    >>> CacheStatistics(3, 1572864).size_mb
    1.5
    >>> CacheStatistics(1, 5000).size_mb
    0.0
    """
    __slots__ = ()

    @property
    def size_mb(self):
        return round(self.total_bytes / 1024.0 / 1024.0, 2)


def scan_cache(cache_dir, file_ext='png'):
    """
    Walk through `cache_dir` and count all tiles and their total size.

    Directories and files that can't be read are skipped. The result
    is always computed from the actual files, this walks the whole tree
    and should not be called for each tile request.

    :rtype: `CacheStatistics`
    """
    suffix = '.' + file_ext
    tile_count = 0
    total_bytes = 0

    def log_error(ex):
        log.debug('skipping unreadable directory %s: %s', ex.filename, ex)

    for dirpath, _dirnames, filenames in os.walk(cache_dir, onerror=log_error):
        for filename in filenames:
            if not filename.endswith(suffix):
                continue
            try:
                size = os.stat(os.path.join(dirpath, filename)).st_size
            except OSError as ex:
                log.debug('skipping %s: %s', filename, ex)
                continue
            tile_count += 1
            total_bytes += size

    return CacheStatistics(tile_count, total_bytes)
