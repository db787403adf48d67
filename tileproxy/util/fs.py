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
Helpers for the tile files in the cache directory.
"""
import os
import random


def ensure_directory(file_name):
    """
    Create all missing parent directories of `file_name`.
    Other processes may create the same directories at the same time.
    """
    os.makedirs(os.path.dirname(file_name), exist_ok=True)


def write_atomic(filename, data):
    """
    Write `data` to `filename` without exposing partial files to
    readers.

    The data goes to a uniquely named ``<filename>.tmp-<random>`` file
    in the same directory first, which then replaces `filename`. The
    temporary file is removed if writing fails.
    """
    tmp_name = '%s.tmp-%08x' % (filename, random.getrandbits(32))
    fd = os.open(tmp_name, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o666)
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_name, filename)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
