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
The WSGI application.
"""
import os
import sys
import traceback

from tileproxy.request import Request
from tileproxy.response import Response
from tileproxy.config.loader import load_configuration, ConfigurationError

import logging
log = logging.getLogger('tileproxy.config')
log_wsgiapp = logging.getLogger('tileproxy.wsgiapp')


def init_logging_system(log_conf, base_dir):
    """
    Configure logging with the `log_conf` ini file, see
    `logging.config.fileConfig`. ``%(here)s`` in the file is `base_dir`.
    """
    import logging.config
    if not os.path.isfile(log_conf):
        print('ERROR: log configuration %s not found.' % log_conf, file=sys.stderr)
        return
    logging.config.fileConfig(log_conf, {'here': base_dir}, disable_existing_loggers=False)


def make_wsgi_app(services_conf=None, debug=False, overrides=None):
    """
    Create a TileProxyApp with the given services conf.

    :param services_conf: the file name of the tileproxy.yaml configuration,
        ``None`` for the built-in defaults
    :param overrides: dictionary with configuration values that take
        precedence over `services_conf`
    """
    try:
        conf = load_configuration(services_conf, overrides=overrides)
        services = conf.configured_services()
    except ConfigurationError as ex:
        log.critical('unable to start TileProxy: %s', ex)
        raise

    if debug:
        conf.base_config.debug_mode = True
    app = TileProxyApp(services, conf.base_config)
    # watched by the development server for reloads
    app.config_files = conf.config_files
    return app


class TileProxyApp(object):
    """
    The TileProxy WSGI application.

    Strips the configured ``server.prefix`` and dispatches the request
    to the first service that handles the remaining path.
    """
    allowed_methods = ('GET', 'HEAD')

    def __init__(self, services, base_config):
        self.base_config = base_config
        self.config_files = {}
        self.handlers = dict((name, service) for service in services for name in service.names)

    def handler_for_path(self, path):
        for name, service in self.handlers.items():
            if service.handles(path):
                return name, service
        return None, None

    def dispatch(self, req):
        if not req.pop_prefix(self.base_config.server.prefix):
            return None
        name, service = self.handler_for_path(req.path)
        if service is None:
            return None

        if req.method not in self.allowed_methods:
            resp = Response('method not allowed', mimetype='text/plain', status=405)
            resp.headers['Allow'] = ', '.join(self.allowed_methods)
            return resp

        try:
            return service.handle(req)
        except Exception:
            if self.base_config.debug_mode:
                raise
            log_wsgiapp.error('unhandled error in %s service for %s', name, req.path, exc_info=True)
            errors = req.environ.get('wsgi.errors')
            if errors is not None:
                traceback.print_exc(file=errors)
            return Response('internal error', status=500)

    def __call__(self, environ, start_response):
        req = Request(environ)
        resp = self.dispatch(req)
        if resp is None:
            resp = Response('not found', mimetype='text/plain', status=404)
        body = resp(environ, start_response)
        if req.method == 'HEAD':
            return []
        return body
