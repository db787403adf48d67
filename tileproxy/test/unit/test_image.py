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

import pytest

from tileproxy.image import PlaceholderImage, create_image, img_to_buf
from tileproxy.test.image import img_from_buf, is_png, is_jpeg


class TestPlaceholderImage(object):

    def test_default(self):
        placeholder = PlaceholderImage()
        buf = placeholder.as_buffer()
        assert is_png(buf)
        img = img_from_buf(buf)
        assert img.size == (256, 256)
        assert img.getpixel((0, 0)) == (204, 204, 204)
        assert img.getpixel((255, 255)) == (204, 204, 204)

    def test_same_bytes(self):
        placeholder = PlaceholderImage()
        assert placeholder.as_buffer() is placeholder.as_buffer()
        assert PlaceholderImage().as_buffer() == placeholder.as_buffer()

    def test_transparent(self):
        placeholder = PlaceholderImage((512, 512), color=(255, 255, 255, 0))
        img = img_from_buf(placeholder.as_buffer())
        assert img.mode == 'RGBA'
        assert img.size == (512, 512)
        assert img.getpixel((10, 10)) == (255, 255, 255, 0)

    def test_jpeg(self):
        placeholder = PlaceholderImage(color=(255, 255, 255, 0), format='jpeg')
        assert is_jpeg(placeholder.as_buffer())

    def test_unsupported_format(self):
        with pytest.raises(ValueError):
            PlaceholderImage(format='tiff')


def test_img_to_buf_formats():
    img = create_image((16, 16), (0, 0, 255))
    assert is_png(img_to_buf(img, 'png'))
    assert is_jpeg(img_to_buf(img, 'jpg'))
    assert img_to_buf(img, 'webp')[8:12] == b'WEBP'
