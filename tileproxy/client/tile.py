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

import random

from tileproxy.client.http import HTTPClient


class MirrorTileClient(object):
    """
    Client for a set of equivalent tile servers that follow the
    ``{mirror}/{z}/{x}/{y}.{format}`` URL scheme. Each request goes to
    a randomly chosen mirror. Failed requests are not retried on other
    mirrors.
    """
    def __init__(self, mirrors, format='png', http_client=None):
        if not mirrors:
            raise ValueError('at least one mirror required')
        self.mirrors = list(mirrors)
        self.format = format
        self.http_client = http_client or HTTPClient()

    def choose_mirror(self):
        return random.choice(self.mirrors)

    def tile_url(self, tile_coord, mirror=None, format=None):
        """
        >>> c = MirrorTileClient(['http://a.example.org'])
        >>> c.tile_url((7, 4, 3))
        'http://a.example.org/3/7/4.png'
        >>> c.tile_url((7, 4, 3), mirror='http://b.example.org/tiles', format='jpeg')
        'http://b.example.org/tiles/3/7/4.jpeg'
        """
        x, y, z = tile_coord
        if mirror is None:
            mirror = self.choose_mirror()
        return '%s/%d/%d/%d.%s' % (mirror, z, x, y, format or self.format)

    def get_tile(self, tile_coord, format=None):
        url = self.tile_url(tile_coord, format=format)
        return self.http_client.open_image(url)

    def __repr__(self):
        return '%s(%r, %r)' % (self.__class__.__name__, self.mirrors, self.format)
