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
HTTP client for tile retrieval.
"""
import http.client
import ssl
import time

from urllib import request as urllib_request
from urllib.error import URLError, HTTPError

from tileproxy.client.log import log_request


class HTTPClientError(Exception):
    def __init__(self, arg, response_code=None):
        Exception.__init__(self, arg)
        self.response_code = response_code


def build_https_handler(ssl_ca_certs, insecure):
    if ssl_ca_certs and not insecure:
        ctx = ssl.create_default_context(cafile=ssl_ca_certs)
    else:
        ctx = ssl.create_default_context()
    if insecure:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return urllib_request.HTTPSHandler(context=ctx)


class HTTPClient(object):
    """
    Blocking HTTP client with a fixed timeout.

    All failures (connection errors, timeouts, non-success status
    codes, truncated bodies) are raised as `HTTPClientError`.
    """
    def __init__(self, insecure=False, ssl_ca_certs=None, timeout=None, headers=None):
        self._timeout = timeout
        self.opener = urllib_request.build_opener(build_https_handler(ssl_ca_certs, insecure))
        self.headers = dict(headers or {})

    def open(self, url):
        status = None
        resp = None
        start = time.time()
        try:
            req = urllib_request.Request(url, headers=self.headers)
        except ValueError as ex:
            raise self.url_error(url, 'URL not correct', ex.args[0]) from ex
        try:
            if self._timeout is None:
                resp = self.opener.open(req)
            else:
                resp = self.opener.open(req, timeout=self._timeout)
        except HTTPError as ex:
            status = ex.code
            raise self.url_error(url, 'HTTP Error', status, status=status) from ex
        except URLError as ex:
            if isinstance(ex.reason, ssl.SSLError):
                raise self.url_error(url, 'Could not verify connection to URL', ex.reason) from ex
            # socket errors carry (errno, message)
            reason = getattr(ex.reason, 'strerror', None) or ex.reason
            raise self.url_error(url, 'No response from URL', reason) from ex
        except (OSError, http.client.HTTPException) as ex:
            raise self.url_error(url, 'No response from URL', ex) from ex
        except ValueError as ex:
            raise self.url_error(url, 'URL not correct', ex.args[0]) from ex
        else:
            status = resp.status
        finally:
            log_request(url, status, resp, time.time() - start)

        if status == 204:
            resp.close()
            raise HTTPClientError('HTTP Error "204 No Content"', response_code=204)
        return resp

    def open_image(self, url):
        """
        Open `url` and return the response body.

        :raise HTTPClientError: if the request failed, if the body is
            incomplete or if the response is not an image
        """
        resp = self.open(url)
        with resp:
            try:
                content_type = resp.headers.get('content-type')
                if content_type and not content_type.lower().startswith('image'):
                    raise HTTPClientError('response is not an image: (%s)' % (resp.read(1024), ))
                return resp.read()
            except (OSError, http.client.HTTPException) as ex:
                raise self.url_error(url, 'Incomplete response from URL', ex) from ex

    def url_error(self, url, message, reason, status=None):
        return HTTPClientError('%s "%s": %s' % (message, url, reason), response_code=status)
