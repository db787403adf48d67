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

server = dict(
    # mount point of the tile and stats services, e.g. '/api/tiles'
    prefix = '',
)
debug_mode = False

cache = dict(
    base_dir = './cache_data/tiles',
    file_ext = 'png',
)

origin = dict(
    mirrors = [
        'https://a.tile.openstreetmap.org',
        'https://b.tile.openstreetmap.org',
        'https://c.tile.openstreetmap.org',
    ],
)

http = dict(
    client_timeout = 10,
    user_agent = None,
    ssl_ca_certs = None,
    ssl_no_cert_checks = False,
    access_control_allow_origin = '*',
)

tiles = dict(
    max_zoom = 19,
    check_bounds = True,
    expires_hours = 72,
)

placeholder = dict(
    color = '#cccccc',
    tile_size = (256, 256),
)

seed = dict(
    max_tiles = 100000,
    concurrency = 2,
)
