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
Cache statistics service.
"""
import json
import re

from tileproxy.response import Response
from tileproxy.service.base import Server
from tileproxy.cache.stats import scan_cache


class StatsRequest(object):
    request_handler_name = 'stats'

    def __init__(self, request):
        self.http = request


class StatsServer(Server):
    """
    Reports the number and the total size of all cached tiles
    as JSON.
    """
    names = ('stats',)
    path_re = re.compile(r'^/stats/?$')

    def __init__(self, cache):
        Server.__init__(self)
        self.cache = cache

    def parse_request(self, req):
        return StatsRequest(req)

    def stats(self, stats_request):
        stats = scan_cache(self.cache.cache_dir, self.cache.file_ext)
        result = {
            'cached_tiles': stats.tile_count,
            'cache_size_mb': stats.size_mb,
            'cache_location': self.cache.cache_dir,
        }
        resp = Response(json.dumps(result), mimetype='application/json')
        resp.cache_headers(no_cache=True)
        return resp
