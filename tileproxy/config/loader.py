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
Configuration loading and system initializing.
"""
import json
import os
import re

from tileproxy.config.config import load_default_config, load_config, finish_base_config, abspath
from tileproxy.config.validator import validate
from tileproxy.util.yaml import load_yaml_file, YAMLError

import logging
log = logging.getLogger('tileproxy.config')


class ConfigurationError(Exception):
    pass


_hex_color_re = re.compile(r'^(?:#|0x)?((?:[0-9a-fA-F]{2}){3,4})$')


def parse_color(color):
    """
    Parse a color as ``(r, g, b)`` or ``(r, g, b, a)`` tuple, either from
    a list with 3 or 4 values or from a ``#rrggbb(aa)`` or
    ``0xrrggbb(aa)`` string.

    >>> parse_color((100, 12, 55))
    (100, 12, 55)
    >>> parse_color('0xff0530')
    (255, 5, 48)
    >>> parse_color('#FF053080')
    (255, 5, 48, 128)
    """
    if isinstance(color, (list, tuple)) and len(color) in (3, 4):
        return tuple(color)
    match = _hex_color_re.match(color) if isinstance(color, str) else None
    if match is None:
        raise ValueError('expected #rrggbb(aa) or 0xrrggbb(aa), got %r' % (color, ))
    digits = match.group(1)
    return tuple(int(digits[i:i + 2], 16) for i in range(0, len(digits), 2))


class ProxyConfiguration(object):
    """
    Builds all TileProxy objects (cache, origin source, placeholder,
    services) from a finished base configuration.
    """
    def __init__(self, base_config, config_files=None):
        self.base_config = base_config
        self.config_files = config_files or {}

    def cache(self):
        from tileproxy.cache.file import FileCache
        cache_dir = self.base_config.cache.base_dir
        try:
            os.makedirs(cache_dir, exist_ok=True)
        except OSError as ex:
            raise ConfigurationError('unable to create cache directory %s: %s' % (cache_dir, ex))
        return FileCache(cache_dir, self.base_config.cache.file_ext)

    def http_client(self):
        from tileproxy.client.http import HTTPClient
        from tileproxy.version import version
        http_conf = self.base_config.http
        user_agent = http_conf.user_agent or 'TileProxy/%s' % (version, )
        ssl_ca_certs = http_conf.ssl_ca_certs
        if ssl_ca_certs:
            ssl_ca_certs = abspath(ssl_ca_certs, self.base_config.conf_base_dir)
        return HTTPClient(timeout=http_conf.client_timeout,
                          headers={'User-Agent': user_agent},
                          insecure=http_conf.ssl_no_cert_checks,
                          ssl_ca_certs=ssl_ca_certs)

    def origin_source(self):
        from tileproxy.client.tile import MirrorTileClient
        from tileproxy.source.tile import OriginTileSource
        client = MirrorTileClient(self.base_config.origin.mirrors,
                                  format=self.base_config.cache.file_ext,
                                  http_client=self.http_client())
        return OriginTileSource(client)

    def placeholder(self):
        from tileproxy.image import PlaceholderImage
        conf = self.base_config.placeholder
        try:
            color = parse_color(conf.color)
        except ValueError as ex:
            raise ConfigurationError('invalid placeholder color: %s' % ex)
        return PlaceholderImage(conf.tile_size, color=color,
                                format=self.base_config.cache.file_ext)

    def tile_manager(self, cache=None):
        from tileproxy.cache.tile import TileManager
        return TileManager(cache or self.cache(), self.origin_source(), self.placeholder())

    def configured_services(self):
        from tileproxy.service.tile import TileServer
        from tileproxy.service.stats import StatsServer
        bc = self.base_config
        cache = self.cache()
        expires_hours = bc.tiles.expires_hours
        tile_server = TileServer(
            self.tile_manager(cache),
            bc.tiles.max_zoom,
            file_ext=bc.cache.file_ext,
            check_bounds=bc.tiles.check_bounds,
            max_tile_age=int(expires_hours * 60 * 60) if expires_hours else None,
            access_control_allow_origin=bc.http.access_control_allow_origin,
        )
        stats_server = StatsServer(cache)
        return [tile_server, stats_server]


def load_configuration(conf_file=None, overrides=None):
    """
    Load the TileProxy configuration.

    Starts with the built-in defaults, merges the YAML `conf_file` (if any)
    and the `overrides` dictionary and validates the result.

    :param conf_file: the file name of the tileproxy.yaml configuration
    :param overrides: dictionary with configuration values, e.g.
        ``{'cache': {'base_dir': '/tmp/tiles'}}``
    :raise ConfigurationError: for unreadable or invalid configurations
    """
    base_config = load_default_config()
    config_files = {}
    conf_dict = {}

    if conf_file is not None:
        conf_file = os.path.abspath(conf_file)
        log.info('reading: %s', conf_file)
        try:
            conf_dict = load_yaml_file(conf_file)
        except (YAMLError, OSError) as ex:
            log.error('unable to load configuration %s: %s', conf_file, ex)
            raise ConfigurationError(ex)
        config_files[conf_file] = os.path.getmtime(conf_file)
        base_config.conf_base_dir = os.path.dirname(conf_file)

    if overrides:
        conf_dict = _merge_dict(overrides, conf_dict)

    errors = validate(conf_dict)
    for error in errors:
        log.error(error)
    if errors:
        raise ConfigurationError('invalid configuration')

    log.debug('loaded configuration: %s', json.dumps(conf_dict, indent=2, default=str))
    load_config(base_config, config_dict=conf_dict)
    finish_base_config(base_config)

    return ProxyConfiguration(base_config, config_files=config_files)


def _merge_dict(conf, base):
    """
    Return `base` dict with values from `conf` merged in.

    >>> _merge_dict({'a': {'b': 2}}, {'a': {'b': 1, 'c': 3}})
    {'a': {'b': 2, 'c': 3}}
    """
    base = dict(base)
    for k, v in conf.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            base[k] = _merge_dict(v, base[k])
        else:
            base[k] = v
    return base
