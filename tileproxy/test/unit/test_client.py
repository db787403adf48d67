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

import logging
import time

import pytest

from tileproxy.client.http import HTTPClient, HTTPClientError
from tileproxy.cache.file import FileCache
from tileproxy.cache.tile import TileManager, PLACEHOLDER
from tileproxy.client.tile import MirrorTileClient
from tileproxy.image import PlaceholderImage
from tileproxy.source import SourceError
from tileproxy.source.tile import OriginTileSource
from tileproxy.test.helper import assert_re
from tileproxy.test.http import mock_httpd
from tileproxy.test.image import create_tmp_image_buf


TESTSERVER_ADDRESS = ('127.0.0.1', 56413)
TESTSERVER_URL = 'http://%s:%s' % TESTSERVER_ADDRESS

tile_image = create_tmp_image_buf((256, 256), color=(0, 0, 255))


class TestHTTPClient(object):
    def setup_method(self):
        self.client = HTTPClient()

    def test_open(self):
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/0/0/0.png'},
                                              {'status': '200', 'body': b'tile'})]):
            resp = self.client.open(TESTSERVER_URL + '/0/0/0.png')
            assert resp.read() == b'tile'

    def test_headers(self):
        client = HTTPClient(headers={'User-Agent': 'TileProxy/1.0'})
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/0/0/0.png',
                                               'headers': {'User-Agent': 'TileProxy/1.0'}},
                                              {'status': '200', 'body': b'tile'})]):
            client.open(TESTSERVER_URL + '/0/0/0.png')

    def client_error(self, url, client=None, method='open'):
        with pytest.raises(HTTPClientError) as excinfo:
            getattr(client or self.client, method)(url)
        return excinfo.value

    def test_server_error_response(self):
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/'},
                                              {'status': '500', 'body': b''})]):
            err = self.client_error(TESTSERVER_URL + '/')
        assert_re(err.args[0], r'HTTP Error ".*": 500')
        assert err.response_code == 500

    def test_no_content_response(self):
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/'},
                                              {'status': '204', 'body': b''})]):
            err = self.client_error(TESTSERVER_URL + '/')
        assert err.response_code == 204

    def test_unknown_url_scheme(self):
        err = self.client_error('htp://example.org')
        assert_re(err.args[0], r'No response .* "htp://example.*": unknown url type')

    def test_malformed_url(self):
        err = self.client_error('this is not a url')
        assert_re(err.args[0], r'URL not correct "this is not.*": unknown url type')

    def test_connection_refused(self):
        err = self.client_error('http://localhost:53871')
        assert_re(err.args[0], r'No response .* "http://localhost.*": Connection refused')
        assert err.response_code is None

    def test_timeout(self):
        client = HTTPClient(timeout=0.2)
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/'},
                                              {'body': b'nothing', 'duration': 1.0})]):
            start = time.time()
            err = self.client_error(TESTSERVER_URL + '/', client=client)
            duration = time.time() - start
        assert 'timed out' in err.args[0]
        assert 0.2 <= duration < 1.0, duration

    def test_open_image(self):
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/0/0/0.png'},
                                              {'body': tile_image,
                                               'headers': {'content-type': 'image/png'}})]):
            assert self.client.open_image(TESTSERVER_URL + '/0/0/0.png') == tile_image

    def test_open_image_truncated(self):
        # origin announces more bytes than it sends
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/0/0/0.png'},
                                              {'body': tile_image[:9],
                                               'headers': {'content-type': 'image/png',
                                                           'content-length': '5000'}})]):
            err = self.client_error(TESTSERVER_URL + '/0/0/0.png', method='open_image')
        assert_re(err.args[0], r'Incomplete response from URL ".*/0/0/0.png"')

    def test_open_image_no_image(self):
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/0/0/0.png'},
                                              {'body': b'<html>error</html>',
                                               'headers': {'content-type': 'text/html'}})]):
            err = self.client_error(TESTSERVER_URL + '/0/0/0.png', method='open_image')
        assert_re(err.args[0], r'response is not an image')


class TestMirrorTileClient(object):

    def test_no_mirrors(self):
        with pytest.raises(ValueError):
            MirrorTileClient([])

    def test_tile_url(self):
        client = MirrorTileClient(['http://a.example.org', 'http://b.example.org'])
        for _ in range(20):
            url = client.tile_url((3, 2, 5))
            assert url in ('http://a.example.org/5/3/2.png', 'http://b.example.org/5/3/2.png')

    def test_all_mirrors_used(self):
        mirrors = ['http://a.example.org', 'http://b.example.org', 'http://c.example.org']
        client = MirrorTileClient(mirrors)
        used = set(client.choose_mirror() for _ in range(200))
        assert used == set(mirrors)

    def test_get_tile(self):
        client = MirrorTileClient([TESTSERVER_URL])
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/5/3/2.png'},
                                              {'body': tile_image,
                                               'headers': {'content-type': 'image/png'}})]):
            assert client.get_tile((3, 2, 5)) == tile_image


class TestOriginTileSource(object):

    def test_get_tile(self):
        source = OriginTileSource(MirrorTileClient([TESTSERVER_URL]))
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/1/0/1.png'},
                                              {'body': tile_image,
                                               'headers': {'content-type': 'image/png'}})]):
            assert source.get_tile((0, 1, 1)) == tile_image

    def test_not_found(self):
        source = OriginTileSource(MirrorTileClient([TESTSERVER_URL]))
        with mock_httpd(TESTSERVER_ADDRESS, [({'path': '/1/0/1.png'},
                                              {'body': b'not found', 'status': 404})]):
            with pytest.raises(SourceError) as excinfo:
                source.get_tile((0, 1, 1))
        assert '404' in str(excinfo.value)

    def test_no_connect(self):
        source = OriginTileSource(MirrorTileClient(['http://localhost:53871']))
        with pytest.raises(SourceError):
            source.get_tile((0, 0, 0))

    def test_failure_logged_once(self, tmpdir, caplog):
        caplog.set_level(logging.INFO)
        source = OriginTileSource(MirrorTileClient(['http://localhost:53871']))
        tm = TileManager(FileCache(tmpdir.strpath), source, PlaceholderImage())
        assert tm.load_tile_coord((0, 0, 0)).provenance == PLACEHOLDER
        records = [r for r in caplog.records if r.name != 'tileproxy.source.request']
        assert len(records) == 1
        assert records[0].name == 'tileproxy.source.tile'
        assert records[0].levelname == 'WARNING'
        assert 'could not retrieve tile' in records[0].getMessage()
