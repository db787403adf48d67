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
WSGI responses of the tile and stats services.
"""

import hashlib
from tileproxy.util.times import format_httpdate, parse_httpdate

# all status codes the services answer with
_reasons = {
    200: 'OK',
    304: 'Not Modified',
    400: 'Bad Request',
    404: 'Not Found',
    405: 'Method Not Allowed',
    500: 'Internal Server Error',
}


def status_code(code):
    return '%d %s' % (code, _reasons[code])


class Response(object):
    """
    Response body with status and headers.

    `response` is either ``bytes``, ``str`` (encoded with `charset`) or
    an iterable of chunks.
    """
    charset = 'utf-8'

    def __init__(self, response, status=200, content_type=None, mimetype=None):
        self.response = response
        self.status = status
        self.headers = {}
        self._timestamp = None
        if mimetype:
            content_type = mimetype
            if mimetype.startswith('text/') or mimetype == 'application/json':
                content_type += '; charset=' + self.charset
        self.headers['Content-type'] = content_type or 'text/plain'

    @property
    def status(self):
        return self._status

    @status.setter
    def status(self, value):
        if isinstance(value, int):
            value = status_code(value)
        self._status = value

    @property
    def status_int(self):
        return int(self._status.partition(' ')[0])

    @property
    def etag(self):
        return self.headers.get('ETag')

    @property
    def content_type(self):
        return self.headers['Content-type']

    def cache_headers(self, timestamp=None, etag_data=None, max_age=None, no_cache=False):
        """
        Add the caching headers for a tile response.

        :param timestamp: modification time of the tile (``Last-modified``)
        :param etag_data: values that identify the tile content, the
            ``ETag`` is the MD5 of their concatenated ``str`` values
        :param max_age: seconds clients and proxies may keep the tile
        :param no_cache: forbid any caching (placeholder and stats
            responses), not combinable with `timestamp` or `max_age`
        """
        if etag_data:
            src = ''.join(str(v) for v in etag_data).encode('ascii')
            self.headers['ETag'] = hashlib.md5(src, usedforsecurity=False).hexdigest()

        if no_cache:
            assert not timestamp and not max_age
            self.headers.update({
                'Cache-Control': 'no-cache, no-store',
                'Pragma': 'no-cache',
                'Expires': '-1',
            })

        if timestamp:
            self._timestamp = int(timestamp)
            self.headers['Last-modified'] = format_httpdate(self._timestamp)
        if max_age is not None and (timestamp or etag_data):
            self.headers['Cache-Control'] = 'public, max-age=%d, s-maxage=%d' % (max_age, max_age)

    def make_conditional(self, req):
        """
        Turn this response into a ``304 Not Modified`` if the client
        already has the tile, either by a matching ``If-None-Match`` ETag
        or by an ``If-Modified-Since`` date not older than the tile.
        """
        if req is None:
            return
        environ = req.environ

        if self.etag is not None:
            if environ.get('HTTP_IF_NONE_MATCH', '').strip('"') == self.etag:
                return self._not_modified()
        if self._timestamp is not None:
            since = parse_httpdate(environ.get('HTTP_IF_MODIFIED_SINCE'))
            if since is not None and self._timestamp <= since:
                return self._not_modified()

    def _not_modified(self):
        self.status = 304
        self.response = []
        self.headers.pop('Content-type', None)

    @property
    def data(self):
        return b''.join(self._chunks())

    def _chunks(self):
        body = self.response
        if isinstance(body, (bytes, str)):
            body = [body]
        for chunk in body:
            if isinstance(chunk, str):
                chunk = chunk.encode(self.charset)
            yield chunk

    def __call__(self, environ, start_response):
        if isinstance(self.response, str):
            self.response = self.response.encode(self.charset)
        if isinstance(self.response, bytes):
            self.headers['Content-length'] = str(len(self.response))
        start_response(self.status, [(k, str(v)) for k, v in self.headers.items()])
        return self._chunks()
