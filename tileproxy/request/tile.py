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

from tileproxy.exception import RequestError, PlainExceptionHandler

class TileRequest(object):
    """
    Class for ``/{z}/{x}/{y}.{format}`` tile requests.

    :raise RequestError: for malformed requests, unsupported formats
        and tile coordinates outside the tile pyramid (HTTP 400)
    """
    request_handler_name = 'map'
    tile_req_re = re.compile(r'''^/
            (?P<z>[^/]+)/
            (?P<x>[^/]+)/
            (?P<y>[^/]+?)\.(?P<format>\w+)$''', re.VERBOSE)
    int_re = re.compile(r'^-?\d+$')

    def __init__(self, request, max_zoom, format='png', check_bounds=True):
        self.tile = None
        self.format = None
        self.http = request
        self.max_zoom = max_zoom
        self.check_bounds = check_bounds
        self._init_request(format)

    def _init_request(self, format):
        """
        Initialize tile request. Sets ``tile`` and ``format``.
        """
        match = self.tile_req_re.search(self.http.path)
        if not match:
            raise RequestError('invalid request (%s)' % (self.http.path, ), request=self)

        values = {}
        for v in ('z', 'x', 'y'):
            value = match.group(v)
            if not self.int_re.match(value):
                raise RequestError('invalid tile coordinates', request=self)
            values[v] = int(value)

        self.format = match.group('format').lower()
        if self.format != format:
            raise RequestError('invalid format (%s), only %s is supported' % (
                self.format, format), request=self)

        z = values['z']
        if z < 0 or z > self.max_zoom:
            raise RequestError('invalid zoom level', request=self)

        x, y = values['x'], values['y']
        if self.check_bounds and not (0 <= x < 2**z and 0 <= y < 2**z):
            raise RequestError('tile coordinates outside of zoom level %d' % z, request=self)

        self.tile = (x, y, z)

    @property
    def exception_handler(self):
        return PlainExceptionHandler()

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.tile)


def tile_request(req, max_zoom, format='png', check_bounds=True):
    return TileRequest(req, max_zoom, format=format, check_bounds=check_bounds)
