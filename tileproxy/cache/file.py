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
import os

from tileproxy.cache.tile import Tile
from tileproxy.util.fs import write_atomic
from tileproxy.cache import path
from tileproxy.cache.base import TileCacheBase, CacheBackendError

import logging
log = logging.getLogger('tileproxy.cache.file')

# errors of tiles that are simply not cached (yet)
_NOT_CACHED = (FileNotFoundError, NotADirectoryError)


class FileCache(TileCacheBase):
    """
    Tile cache in a ``{cache_dir}/{z}/{x}/{y}.{file_ext}`` directory tree.

    Each tile is written once with `write_atomic`, readers never see
    partially written tiles.
    """

    def __init__(self, cache_dir, file_ext='png'):
        super(FileCache, self).__init__()
        self.cache_dir = cache_dir
        self.file_ext = file_ext

    def tile_location(self, tile, create_dir=False):
        return path.tile_location(tile, self.cache_dir, self.file_ext, create_dir=create_dir)

    def load_tile_metadata(self, tile):
        location = self.tile_location(tile)
        try:
            st = os.stat(location)
        except _NOT_CACHED:
            tile.timestamp = tile.size = 0
        except OSError as ex:
            raise CacheBackendError('unable to stat %s: %s' % (location, ex))
        else:
            tile.timestamp = st.st_mtime
            tile.size = st.st_size

    def is_cached(self, tile):
        if not tile.is_missing():
            return True
        return os.path.exists(self.tile_location(tile))

    def load_tile(self, tile: Tile, with_metadata=False) -> bool:
        """
        Read the cached data into ``tile.source``. Returns ``False`` for
        tiles that are not in the cache.

        :raise CacheBackendError: if the tile file exists but can't be read
        """
        if not tile.is_missing():
            return True

        location = self.tile_location(tile)
        try:
            with open(location, 'rb') as f:
                tile.source = f.read()
        except _NOT_CACHED:
            log.debug('cache miss for %r (%s)', tile.coord, location)
            return False
        except OSError as ex:
            raise CacheBackendError('unable to read %s: %s' % (location, ex))

        tile.stored = True
        if with_metadata:
            self.load_tile_metadata(tile)
        else:
            tile.size = len(tile.source)
        return True

    def store_tile(self, tile: Tile) -> bool:
        """
        Write ``tile.source`` to the `tile_location`, creating missing
        directories. Tiles without data are not stored (returns ``False``).

        :raise CacheBackendError: if the tile could not be written
        """
        if tile.stored:
            return True
        if tile.source is None:
            return False

        try:
            location = self.tile_location(tile, create_dir=True)
            log.debug('writing %r to %s', tile.coord, location)
            write_atomic(location, tile.source)
        except OSError as ex:
            raise CacheBackendError('unable to store tile %r: %s' % (tile.coord, ex))

        tile.stored = True
        tile.size = len(tile.source)
        return True

    def __repr__(self):
        return 'FileCache(%r, %r)' % (self.cache_dir, self.file_ext)
