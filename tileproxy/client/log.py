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

import logging
log = logging.getLogger('tileproxy.source.request')


def log_request(url, status, resp=None, duration=None):
    """
    Log one origin request as ``GET <url> <status> <kB> <ms>``.
    Unknown values are logged as ``-``.
    """
    if not log.isEnabledFor(logging.INFO):
        return

    length = resp.headers.get('Content-Length') if resp is not None else None
    kbytes = '%.1f' % (int(length) / 1024.0) if length else '-'
    millis = '%d' % (duration * 1000) if duration is not None else '-'
    log.info('GET %s %s %s %s', url, status or '-', kbytes, millis)
