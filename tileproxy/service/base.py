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
Base class of the HTTP services (tiles, stats).
"""
import re

from tileproxy.exception import RequestError


class Server(object):
    """
    A service answers all requests whose path (below the mount prefix)
    matches `path_re`.

    Subclasses turn the `Request` into a parsed request object with
    `parse_request`. The parsed request names the server method that
    builds the `Response` in its ``request_handler_name``.
    """
    names = ()
    path_re = re.compile(r'(?!)')

    def handles(self, path):
        return self.path_re.match(path) is not None

    def handle(self, req):
        try:
            parsed = self.parse_request(req)
            return getattr(self, parsed.request_handler_name)(parsed)
        except RequestError as ex:
            return ex.render()

    def parse_request(self, req):
        raise NotImplementedError()
