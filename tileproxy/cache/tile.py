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
Tile caching (retrieval of tiles from the cache or the origin).

.. digraph:: Schematic Call Graph

    ranksep = 0.1;
    node [shape="box", height="0", width="0"]

    ts  [label="TileServer" href="<tileproxy.service.tile.TileServer>"]
    tm  [label="TileManager",  href="<TileManager>"];
    fc  [label="FileCache", href="<tileproxy.cache.file.FileCache>"];
    s   [label="OriginTileSource", href="<tileproxy.source.tile.OriginTileSource>"];
    p   [label="PlaceholderImage", href="<tileproxy.image.PlaceholderImage>"];

    {
        ts -> tm [label="load_tile_coord"];
        tm -> fc [label="load\\nstore"];
        tm -> s  [label="get_tile"];
        tm -> p  [label="as_buffer"]
    }

"""
import time

from tileproxy.cache.base import CacheBackendError
from tileproxy.source import SourceError

import logging
log = logging.getLogger('tileproxy.cache.tile')

CACHE = 'cache'
ORIGIN = 'origin'
PLACEHOLDER = 'placeholder'


class TileManager(object):
    """
    Loads tiles from the cache, fetches missing tiles from the origin
    and stores them into the cache. Falls back to the placeholder image
    if the origin is not available.

    There is no locking: concurrent requests for the same uncached tile
    can fetch the tile multiple times. The cache writes are atomic.
    """
    def __init__(self, cache, source, placeholder):
        self.cache = cache
        self.source = source
        self.placeholder = placeholder

    def is_cached(self, tile_coord):
        return self.cache.is_cached(Tile(tile_coord))

    def load_tile_coord(self, tile_coord, with_metadata=False):
        """
        Return the `Tile` for `tile_coord`. Never raises for
        unavailable origins, ``Tile.provenance`` reflects which path
        delivered the tile data.

        :param tile_coord: tuple with ``(x, y, z)``
        """
        tile = Tile(tile_coord)

        try:
            if self.cache.load_tile(tile, with_metadata=with_metadata):
                tile.provenance = CACHE
                return tile
        except CacheBackendError as ex:
            log.warning('unable to load tile %r from cache, refetching: %s', tile_coord, ex)

        try:
            tile.source = self.source.get_tile(tile_coord)
        except SourceError:
            # already logged by the source
            return self._placeholder_tile(tile_coord)

        tile.provenance = ORIGIN
        tile.timestamp = time.time()
        tile.size = len(tile.source)
        self._store(tile)
        return tile

    def _store(self, tile):
        try:
            self.cache.store_tile(tile)
        except CacheBackendError as ex:
            log.warning('tile %r not cached: %s', tile.coord, ex)

    def _placeholder_tile(self, tile_coord):
        tile = Tile(tile_coord, self.placeholder.as_buffer())
        tile.provenance = PLACEHOLDER
        return tile


class Tile(object):
    """
    One map tile on its way through the `TileManager`.

    :ivar coord: ``(x, y, z)`` tuple
    :ivar source: encoded image data, ``None`` until loaded or fetched
    :ivar provenance: `CACHE`, `ORIGIN` or `PLACEHOLDER`
    :ivar location: file name in the cache, set by the `FileCache`
    :ivar stored: ``True`` once the data is in the cache
    :ivar timestamp: modification time of the cached file
    :ivar size: size of `source` in bytes
    """
    def __init__(self, coord, source=None):
        self.coord = coord
        self.source = source
        self.provenance = None
        self.location = None
        self.stored = False
        self.timestamp = None
        self.size = None

    def source_buffer(self):
        return self.source

    def is_missing(self):
        """
        ``True`` if the data of this tile still needs to be loaded.
        Tiles without coord are never missing.

        >>> Tile((1, 2, 3)).is_missing()
        True
        >>> Tile((1, 2, 3), b'PNG').is_missing()
        False
        >>> Tile(None).is_missing()
        False
        """
        return self.coord is not None and self.source is None

    def __repr__(self):
        return 'Tile(%r, source=%r, provenance=%r)' % (
            self.coord, None if self.source is None else '<%d bytes>' % len(self.source),
            self.provenance)
