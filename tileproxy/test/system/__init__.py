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

import os
import shutil

import pytest

from webtest import TestApp

from tileproxy.wsgiapp import make_wsgi_app

FIXTURE_DIR = os.path.join(os.path.dirname(__file__), 'fixture')


@pytest.mark.usefixtures('cache_dir')
class SysTest(object):
    """
    Base class for system tests against a complete TileProxy app.

    Subclasses (or their module) provide the `config_file` fixture, the
    name of a configuration in ``fixture/``. The file is copied into a
    temporary directory, the tile cache is ``cache_data`` next to it and
    is emptied before and after each test.
    """

    @pytest.fixture(scope='class')
    def config_overrides(self):
        return None

    @pytest.fixture(scope='class')
    def base_dir(self, tmpdir_factory, config_file):
        base_dir = tmpdir_factory.mktemp('base_dir')
        shutil.copy(os.path.join(FIXTURE_DIR, config_file), base_dir.strpath)
        return base_dir

    @pytest.fixture(scope='class')
    def app(self, base_dir, config_file, config_overrides):
        app = make_wsgi_app(base_dir.join(config_file).strpath, overrides=config_overrides)
        # errors propagate to the test instead of a 500 response
        app.base_config.debug_mode = True
        return TestApp(app, use_unicode=False)

    @pytest.fixture
    def cache_dir(self, base_dir):
        cache_dir = base_dir.join('cache_data')
        shutil.rmtree(cache_dir.strpath, ignore_errors=True)
        yield cache_dir
        shutil.rmtree(cache_dir.strpath, ignore_errors=True)
