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
Image helpers.
"""
from io import BytesIO

from PIL import Image

_pil_formats = {
    'png': 'PNG',
    'jpeg': 'JPEG',
    'jpg': 'JPEG',
    'webp': 'WEBP',
}


def create_image(size, color):
    """
    Create a new solid-color image. Colors with an alpha value
    result in an RGBA image.

    >>> create_image((4, 4), (200, 200, 200)).mode
    'RGB'
    >>> create_image((4, 4), (200, 200, 200, 128)).mode
    'RGBA'
    """
    mode = 'RGBA' if len(color) == 4 else 'RGB'
    return Image.new(mode, tuple(size), tuple(color))


def img_to_buf(img, format='png'):
    pil_format = _pil_formats.get(format.lower())
    if pil_format is None:
        raise ValueError('unsupported image format: %s' % format)
    if pil_format == 'JPEG' and img.mode != 'RGB':
        img = img.convert('RGB')
    buf = BytesIO()
    img.save(buf, pil_format)
    return buf.getvalue()


class PlaceholderImage(object):
    """
    Fixed fallback tile for requests that can't be served from
    the cache or the origin.

    The image is encoded once on creation, `as_buffer` always returns
    the same bytes.
    """
    def __init__(self, size=(256, 256), color=(204, 204, 204), format='png'):
        self.size = tuple(size)
        self.color = tuple(color)
        self.format = format
        self._buf = img_to_buf(create_image(self.size, self.color), format=format)

    def as_buffer(self):
        return self._buf

    def __repr__(self):
        return '%s(%r, color=%r, format=%r)' % (
            self.__class__.__name__, self.size, self.color, self.format)
