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
Incoming WSGI requests.
"""


class Request(object):
    """
    Thin wrapper around the WSGI `environ` of one request.
    """
    def __init__(self, environ):
        self.environ = environ
        environ['tileproxy.request'] = self

    @property
    def method(self):
        return self.environ.get('REQUEST_METHOD', 'GET').upper()

    @property
    def path(self):
        return self.environ.get('PATH_INFO', '')

    def pop_prefix(self, prefix):
        """
        Strip the mount `prefix` from ``PATH_INFO`` and append it to
        ``SCRIPT_NAME``. Returns ``False`` if the path is outside of
        `prefix`, e.g. ``/api/tilesfoo`` for ``/api/tiles``.
        """
        if not prefix:
            return True
        path = self.path
        if path != prefix and not path.startswith(prefix + '/'):
            return False
        self.environ['PATH_INFO'] = path[len(prefix):]
        self.environ['SCRIPT_NAME'] = self.environ.get('SCRIPT_NAME', '').rstrip('/') + prefix
        return True

    def __repr__(self):
        return '%s(%s %r)' % (self.__class__.__name__, self.method, self.path)
