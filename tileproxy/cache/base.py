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

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tileproxy.cache.tile import Tile


class CacheBackendError(Exception):
    pass


class TileCacheBase(ABC):
    """
    Base implementation of a tile cache.

    Tiles are immutable once stored, there is no API to update or
    remove single tiles.
    """

    @abstractmethod
    def load_tile(self, tile: Tile, with_metadata: bool = False) -> bool:
        """
        Fill ``tile.source`` if the tile is cached.
        Return ``True`` on a hit.
        """

    @abstractmethod
    def store_tile(self, tile: Tile) -> bool:
        pass

    @abstractmethod
    def is_cached(self, tile: Tile) -> bool:
        """
        Return ``True`` if the tile is cached.
        """

    @abstractmethod
    def load_tile_metadata(self, tile: Tile):
        """
        Fill the metadata attributes of `tile`.
        Sets ``.timestamp`` and ``.size``.
        """
