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

from tileproxy.config.validator import validate


class TestValidator(object):

    def test_empty(self):
        assert validate({}) == []

    def test_valid(self):
        conf = {
            'server': {'prefix': '/api/tiles'},
            'cache': {'base_dir': '/var/cache/tiles', 'file_ext': 'png'},
            'origin': {'mirrors': ['https://a.tile.example.org', 'https://b.tile.example.org']},
            'http': {'client_timeout': 10, 'user_agent': 'Foo/1.0',
                     'access_control_allow_origin': None},
            'tiles': {'max_zoom': 18, 'check_bounds': True, 'expires_hours': 24},
            'placeholder': {'color': '#eeeeee', 'tile_size': [256, 256]},
            'seed': {'max_tiles': 1000, 'concurrency': 4},
            'debug_mode': False,
        }
        assert validate(conf) == []

    def test_unknown_section(self):
        errors = validate({'layers': []})
        assert len(errors) == 1
        assert "'layers' was unexpected" in errors[0]

    def test_unknown_option(self):
        errors = validate({'cache': {'directory': '/tmp'}})
        assert len(errors) == 1
        assert 'root.cache' in errors[0]

    def test_empty_mirrors(self):
        errors = validate({'origin': {'mirrors': []}})
        assert len(errors) == 1
        assert 'root.origin.mirrors' in errors[0]

    def test_invalid_mirror_url(self):
        errors = validate({'origin': {'mirrors': ['ftp://tiles.example.org']}})
        assert len(errors) == 1
        assert 'root.origin.mirrors[0]' in errors[0]

    def test_duplicate_mirrors(self):
        errors = validate({'origin': {'mirrors': ['http://a.example.org', 'http://a.example.org']}})
        assert errors == ['duplicate entries in root.origin.mirrors']

    def test_invalid_timeout(self):
        errors = validate({'http': {'client_timeout': 0}})
        assert len(errors) == 1
        assert 'root.http.client_timeout' in errors[0]

    def test_invalid_max_zoom(self):
        errors = validate({'tiles': {'max_zoom': -1}})
        assert len(errors) == 1
        errors = validate({'tiles': {'max_zoom': 'high'}})
        assert len(errors) == 1

    def test_invalid_tile_size(self):
        errors = validate({'placeholder': {'tile_size': [256]}})
        assert len(errors) == 1
