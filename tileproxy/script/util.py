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
The ``tileproxy-util`` command line tool.
"""
import optparse
import os
import sys
import logging

from tileproxy.version import version

LOG_FORMAT = '%(asctime)s %(levelname)-7s [%(name)s] %(message)s'


def setup_logging(level=logging.INFO):
    """
    Log all ``tileproxy.*`` messages of `level` and above to stdout.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    tileproxy_log = logging.getLogger('tileproxy')
    tileproxy_log.setLevel(level)
    tileproxy_log.addHandler(handler)


def command_parser(name, options=()):
    """
    Option parser for the `name` sub-command. All commands take a
    ``--log-conf`` option and the configuration file as argument.
    """
    parser = optparse.OptionParser('usage: %%prog %s [options] tileproxy.yaml' % name)
    for flags, kw in options:
        parser.add_option(*flags, **kw)
    parser.add_option('--log-conf', dest='log_conf', default=None,
                      help='logging configuration (logging.config.fileConfig ini)')
    return parser


def usage_error(parser, message):
    parser.print_help()
    print('\nERROR: ' + message)
    sys.exit(1)


def parse_command_args(parser, args):
    """
    Return the parsed options and the configuration file.
    """
    options, args = parser.parse_args(args)
    if len(args) != 2:
        usage_error(parser, 'TileProxy configuration required.')
    return options, args[1]


def init_logging(options, conf_file, level=logging.INFO):
    if options.log_conf:
        from tileproxy.wsgiapp import init_logging_system
        init_logging_system(options.log_conf, os.path.dirname(os.path.abspath(conf_file)))
    else:
        setup_logging(level)


def load_configuration_or_exit(conf_file):
    from tileproxy.config.loader import load_configuration, ConfigurationError
    try:
        return load_configuration(conf_file)
    except ConfigurationError as ex:
        print('ERROR: %s' % (ex, ), file=sys.stderr)
        sys.exit(2)


def serve_develop_command(args):
    parser = command_parser('serve-develop', [
        (('-b', '--bind'), dict(dest='address', default='127.0.0.1:8080',
            help='listen on HOST:PORT, HOST or :PORT [127.0.0.1:8080]')),
        (('--debug', ), dict(dest='debug', default=False, action='store_true',
            help='show tracebacks in the browser (localhost only!)')),
    ])
    options, conf_file = parse_command_args(parser, args)

    host, port = parse_bind_address(options.address)
    if options.debug and host not in ('localhost', '127.0.0.1'):
        print('WARNING: the debugger allows code execution, never bind it to %s\n' % host)

    init_logging(options, conf_file, logging.DEBUG if options.debug else logging.INFO)

    from werkzeug.serving import run_simple
    from tileproxy.wsgiapp import make_wsgi_app
    from tileproxy.config.loader import ConfigurationError
    try:
        app = make_wsgi_app(conf_file, debug=options.debug)
    except ConfigurationError:
        sys.exit(2)

    # restart when the configuration file changes
    run_simple(host, port, app, use_reloader=True, use_debugger=options.debug,
               threaded=True, passthrough_errors=True,
               extra_files=list(app.config_files))


def stats_command(args):
    options, conf_file = parse_command_args(command_parser('stats'), args)
    init_logging(options, conf_file, logging.WARNING)
    cache_conf = load_configuration_or_exit(conf_file).base_config.cache

    from tileproxy.cache.stats import scan_cache
    stats = scan_cache(cache_conf.base_dir, cache_conf.file_ext)
    print('cached tiles:   %d' % stats.tile_count)
    print('cache size:     %.2f MB' % stats.size_mb)
    print('cache location: %s' % cache_conf.base_dir)


def parse_levels(levels):
    """
    Parse a comma separated list of zoom levels and level ranges.

    >>> parse_levels('0-3')
    [0, 1, 2, 3]
    >>> parse_levels('5,2,7-8')
    [2, 5, 7, 8]
    """
    result = set()
    for part in filter(None, (p.strip() for p in levels.split(','))):
        first, _, last = part.partition('-')
        result.update(range(int(first), int(last or first) + 1))
    return sorted(result)


def seed_command(args):
    parser = command_parser('seed', [
        (('-l', '--levels'), dict(dest='levels', default=None,
            help='zoom levels to seed, e.g. 0-5 or 3,7,9')),
        (('-c', '--concurrency'), dict(dest='concurrency', type='int', default=None,
            help='number of parallel seed workers')),
        (('-n', '--dry-run'), dict(dest='dry_run', action='store_true', default=False,
            help='only count the tiles, do not fetch them')),
    ])
    options, conf_file = parse_command_args(parser, args)
    if not options.levels:
        usage_error(parser, '--levels required.')

    try:
        levels = parse_levels(options.levels)
    except ValueError:
        print('ERROR: invalid --levels %s' % options.levels, file=sys.stderr)
        sys.exit(1)

    init_logging(options, conf_file)
    conf = load_configuration_or_exit(conf_file)

    max_zoom = conf.base_config.tiles.max_zoom
    if not levels or levels[0] < 0 or levels[-1] > max_zoom:
        print('ERROR: levels need to be between 0 and %d' % max_zoom, file=sys.stderr)
        sys.exit(1)

    from tileproxy.seed.seeder import seed_levels, SeedError
    seed_conf = conf.base_config.seed
    try:
        summary = seed_levels(conf.tile_manager(), levels,
            concurrency=options.concurrency or seed_conf.concurrency,
            max_tiles=seed_conf.max_tiles,
            dry_run=options.dry_run)
    except SeedError as ex:
        print('ERROR: %s' % ex, file=sys.stderr)
        sys.exit(2)

    print('fetched: %(fetched)d  cached: %(cached)d  failed: %(failed)d' % summary)
    if summary['failed']:
        sys.exit(3)


def parse_bind_address(address, default=('localhost', 8080)):
    """
    Split ``HOST:PORT``, ``HOST`` or ``PORT`` into a ``(host, port)``
    tuple, missing parts are taken from `default`.

    >>> parse_bind_address('80')
    ('localhost', 80)
    >>> parse_bind_address('0.0.0.0')
    ('0.0.0.0', 8080)
    >>> parse_bind_address('0.0.0.0:8081')
    ('0.0.0.0', 8081)
    """
    host, sep, port = address.rpartition(':')
    if not sep:
        if address.isdigit():
            return default[0], int(address)
        return address, default[1]
    return host, int(port)


commands = [
    ('serve-develop', serve_develop_command, 'Run the TileProxy development server.'),
    ('stats', stats_command, 'Display number and size of cached tiles.'),
    ('seed', seed_command, 'Pre-populate the cache for offline use.'),
]


def print_commands():
    width = max(len(name) for name, _, _ in commands)
    print('Commands:')
    for name, _, help in commands:
        print('  %s  %s' % (name.ljust(width), help))


def main(argv=None):
    if argv is None:
        argv = sys.argv
    args = argv[1:]

    if not args or args[0] in ('--help', '-h'):
        print('usage: tileproxy-util COMMAND [options]\n')
        print_commands()
        sys.exit(1)

    if args == ['--version']:
        print('TileProxy ' + version)
        sys.exit(1)

    funcs = dict((name, func) for name, func, _ in commands)
    if args[0] not in funcs:
        print_commands()
        print('\nERROR: unknown command %s' % (args[0], ))
        sys.exit(1)

    funcs[args[0]](argv[:1] + args[1:])


if __name__ == '__main__':
    main()
