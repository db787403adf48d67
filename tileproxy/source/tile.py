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
Retrieve tiles from remote tile servers.
"""

from tileproxy.source import SourceError
from tileproxy.client.http import HTTPClientError

import logging
log = logging.getLogger('tileproxy.source.tile')


class OriginTileSource(object):
    """
    Tile source for the remote origin. All client errors (timeouts,
    connection errors, non-success status codes, non-image responses)
    are collapsed into a `SourceError`.
    """
    def __init__(self, client):
        self.client = client

    def get_tile(self, tile_coord):
        """
        :return: the encoded tile data
        :rtype: bytes
        :raise SourceError: if the tile could not be retrieved
        """
        try:
            return self.client.get_tile(tile_coord)
        except HTTPClientError as e:
            log.warning('could not retrieve tile: %s', e)
            raise SourceError(e.args[0]) from e

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.client)
