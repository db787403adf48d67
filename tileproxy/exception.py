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
Errors for invalid client requests.
"""
from tileproxy.response import Response


class RequestError(Exception):
    """
    Raised while parsing a request the services can't answer.

    The ``exception_handler`` of the parsed `request` renders the
    error response. Without a request it is a plain ``400 Bad Request``.
    """
    def __init__(self, message, request=None):
        Exception.__init__(self, message)
        self.msg = message
        self.request = request

    def render(self):
        """
        :rtype: `Response`
        """
        handler = getattr(self.request, 'exception_handler', None) or PlainExceptionHandler()
        return handler.render(self)

    def __repr__(self):
        return '%s(%r, request=%r)' % (self.__class__.__name__, self.msg, self.request)


class PlainExceptionHandler(object):
    """
    Renders the error message as ``text/plain`` response.
    """
    status = 400

    def render(self, request_error):
        return Response(request_error.msg, mimetype='text/plain', status=self.status)
