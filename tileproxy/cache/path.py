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
from tileproxy.util.fs import ensure_directory


def tile_location(tile, cache_dir, file_ext, create_dir=False):
    """
    Return the location of the `tile` in the ``{z}/{x}/{y}.{ext}`` layout.
    Caches the result as ``location`` property of the `tile`.

    :param tile: the tile object
    :param create_dir: if True, create all necessary directories
    :return: the full filename of the tile

    >>> from tileproxy.cache.tile import Tile
    >>> tile_location(Tile((3, 4, 2)), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/2/3/4.png'
    >>> tile_location(Tile((12345, 0, 17)), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/17/12345/0.png'
    """
    if tile.location is None:
        x, y, z = tile.coord
        tile.location = os.path.join(cache_dir, str(z), str(x), '%d.%s' % (y, file_ext))
    if create_dir:
        ensure_directory(tile.location)
    return tile.location
