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
Date and time utilities.
"""
import calendar
from email.utils import parsedate
from wsgiref.handlers import format_date_time


def parse_httpdate(date):
    """
    >>> parse_httpdate('Tue, 15 Nov 1994 12:45:26 GMT')
    784903526
    >>> parse_httpdate('no date') is None
    True
    """
    if not date:
        return None
    date = parsedate(date)
    if date is None:
        return None
    if date[0] < 1970:
        date = (date[0] + 2000,) + date[1:]
    return calendar.timegm(date)


def format_httpdate(timestamp):
    """
    >>> format_httpdate(784903526)
    'Tue, 15 Nov 1994 12:45:26 GMT'
    """
    return format_date_time(timestamp)
