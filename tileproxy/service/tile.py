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

import re

from tileproxy.response import Response
from tileproxy.service.base import Server
from tileproxy.request.tile import tile_request
from tileproxy.cache.tile import PLACEHOLDER

TILE_SOURCE_HEADER = 'X-Tile-Source'


class TileServer(Server):
    """
    Serves ``/{z}/{x}/{y}.png`` tiles from the `TileManager`.

    Every valid request results in an image response, the
    ``X-Tile-Source`` header tells whether the tile came from the
    cache, the origin or if it is the placeholder.
    """
    names = ('tiles',)
    path_re = re.compile(r'^/[^/]+/[^/]+/[^/]+$')

    def __init__(self, tile_manager, max_zoom, file_ext='png', check_bounds=True,
                 max_tile_age=None, access_control_allow_origin=None):
        Server.__init__(self)
        self.tile_manager = tile_manager
        self.file_ext = file_ext
        self.max_zoom = max_zoom
        self.check_bounds = check_bounds
        self.max_tile_age = max_tile_age
        self.access_control_allow_origin = access_control_allow_origin

    def parse_request(self, req):
        return tile_request(req, self.max_zoom, format=self.file_ext,
                            check_bounds=self.check_bounds)

    def map(self, tile_request):
        """
        :return: the requested tile
        :rtype: Response
        """
        tile = self.tile_manager.load_tile_coord(tile_request.tile, with_metadata=True)

        resp = Response(tile.source_buffer(), content_type='image/' + self.mime_subtype)
        resp.headers[TILE_SOURCE_HEADER] = tile.provenance
        if self.access_control_allow_origin:
            resp.headers['Access-Control-Allow-Origin'] = self.access_control_allow_origin

        if tile.provenance == PLACEHOLDER:
            resp.cache_headers(no_cache=True)
        else:
            resp.cache_headers(tile.timestamp, etag_data=(tile.timestamp, tile.size),
                               max_age=self.max_tile_age)
            resp.make_conditional(tile_request.http)
        return resp

    @property
    def mime_subtype(self):
        if self.file_ext == 'jpg':
            return 'jpeg'
        return self.file_ext
