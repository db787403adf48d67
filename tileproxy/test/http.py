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
Mock tile origin for tests.

`mock_httpd` serves a list of expected ``(request, response)`` pairs
in order and fails the test if the actual requests differ::

    with mock_httpd(('localhost', 42423), [
        ({'path': '/0/0/0.png', 'headers': {'User-Agent': 'TileProxy-Test'}},
         {'body': png_data, 'headers': {'content-type': 'image/png'}}),
    ]):
        ...

Responses can set ``status``, ``headers`` and a ``duration`` in seconds
to wait before answering.
"""

import threading
import time
from contextlib import contextmanager
from http.server import HTTPServer, BaseHTTPRequestHandler


class UnexpectedRequests(AssertionError):
    def __init__(self, problems):
        AssertionError.__init__(self, 'mock origin got unexpected requests:\n' +
                                '\n'.join(' - ' + p for p in problems))
        self.problems = problems


class MockOriginHandler(BaseHTTPRequestHandler):

    def do_GET(self):
        expected = self.server.expected
        if not expected:
            self.server.problems.append('unexpected request: %s' % self.path)
            self.send_error(500)
            return

        req, resp = expected.pop(0)
        if req['path'] != self.path:
            self.server.problems.append('expected %s, got %s' % (req['path'], self.path))
        for name, value in req.get('headers', {}).items():
            if self.headers.get(name) != value:
                self.server.problems.append('expected header %s: %s, got %r' % (
                    name, value, self.headers.get(name)))

        if resp.get('duration'):
            time.sleep(resp['duration'])

        self.send_response(int(resp.get('status', 200)))
        for name, value in resp.get('headers', {}).items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(resp.get('body', b''))

    def log_message(self, format, *args):
        pass


class MockHTTPServer(HTTPServer):
    allow_reuse_address = True

    def handle_error(self, request, client_address):
        # clients that gave up (timeouts) close the connection early
        pass


class MockOrigin(threading.Thread):
    """
    HTTP server thread that answers until all expected requests are
    served or until it is stopped.
    """
    def __init__(self, address, requests_responses):
        threading.Thread.__init__(self)
        self.daemon = True
        self.httpd = MockHTTPServer(address, MockOriginHandler)
        self.httpd.timeout = 0.5
        self.httpd.expected = list(requests_responses)
        self.httpd.problems = []
        self.stopped = False

    def run(self):
        try:
            while self.httpd.expected and not self.stopped:
                self.httpd.handle_request()
        finally:
            self.httpd.server_close()

    def problems(self):
        missing = ['missing request: %s' % req['path'] for req, _ in self.httpd.expected]
        return self.httpd.problems + missing


@contextmanager
def mock_httpd(address, requests_responses):
    origin = MockOrigin(address, requests_responses)
    origin.start()
    try:
        yield origin
    finally:
        origin.stopped = True
        origin.join(30)
    problems = origin.problems()
    if problems:
        raise UnexpectedRequests(problems)


def make_wsgi_env(query_string, extra_environ=None):
    env = {
        'QUERY_STRING': query_string,
        'REQUEST_METHOD': 'GET',
        'wsgi.url_scheme': 'http',
        'HTTP_HOST': 'localhost',
    }
    env.update(extra_environ or {})
    return env


def assert_no_cache(resp):
    assert resp.headers['Pragma'] == 'no-cache'
    assert resp.headers['Expires'] == '-1'
    assert resp.cache_control.no_store
