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
The base configuration of TileProxy.

The configuration is a tree of `Options`, built from the values in
`tileproxy.config.defaults` and updated with the user configuration.
"""
import copy
import itertools
import os


class Options(dict):
    """
    Configuration dictionary, values are also accessible as attributes.
    `update` merges nested dictionaries instead of replacing them.

    >>> o = Options(cache=Options(file_ext='png'))
    >>> o.cache.file_ext
    'png'
    >>> o.update({'cache': {'base_dir': '/tmp'}})
    >>> sorted(o.cache.keys())
    ['base_dir', 'file_ext']
    """
    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(name)

    __setattr__ = dict.__setitem__

    def __delattr__(self, name):
        try:
            del self[name]
        except KeyError:
            raise AttributeError(name)

    def update(self, other=(), **kw):
        pairs = other.items() if hasattr(other, 'items') else other
        for key, value in itertools.chain(pairs, kw.items()):
            if isinstance(self.get(key), Options) and isinstance(value, dict):
                self[key].update(value)
            else:
                self[key] = to_options(value)

    def __deepcopy__(self, memo):
        return to_options(copy.deepcopy(dict(self), memo))

    def __repr__(self):
        return 'Options(%s)' % dict.__repr__(self)


def to_options(value):
    """
    Convert all (nested) dictionaries in `value` to `Options`.
    """
    if isinstance(value, dict):
        return Options((k, to_options(v)) for k, v in value.items())
    if isinstance(value, list):
        return [to_options(v) for v in value]
    return value


def abspath(path, base_path):
    """
    Convert path to absolute path, relative paths are joined
    to `base_path`.

    >>> abspath('tiles', '/srv/tileproxy')
    '/srv/tileproxy/tiles'
    >>> abspath('/var/cache/tiles', '/srv/tileproxy')
    '/var/cache/tiles'
    """
    return os.path.abspath(os.path.join(base_path, os.path.expanduser(path)))


def load_default_config():
    """
    Return a fresh `Options` tree with all default values.
    """
    from tileproxy.config import defaults
    default_conf = Options()
    load_config(default_conf, config_dict=dict(
        (k, copy.deepcopy(v)) for k, v in vars(defaults).items() if not k.startswith('_')
    ))
    return default_conf


def load_config(config, config_dict):
    """
    Merge the configuration values of `config_dict` into `config`.
    """
    config.update(config_dict or {})


def finish_base_config(bc):
    """
    Resolve paths and normalize values after all configuration
    sources are loaded.
    """
    if 'conf_base_dir' not in bc:
        bc.conf_base_dir = os.getcwd()
    bc.cache.base_dir = abspath(bc.cache.base_dir, bc.conf_base_dir)
    bc.cache.file_ext = bc.cache.file_ext.lstrip('.')
    bc.server.prefix = (bc.server.prefix or '').rstrip('/')
    if bc.server.prefix and not bc.server.prefix.startswith('/'):
        bc.server.prefix = '/' + bc.server.prefix
    bc.placeholder.tile_size = tuple(bc.placeholder.tile_size)
    bc.origin.mirrors = [m.rstrip('/') for m in bc.origin.mirrors]
    return bc
