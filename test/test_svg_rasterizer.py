# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import io
import os
import re
import sys

import pytest
from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.error_handling import RasterizationError
from common.utils import data_url_to_bytes, to_data_url
from models.svg_rasterizer import (
    export_data_url_png,
    export_svg_png,
    fit_contain,
    parse_view_box,
    prepare_svg_for_render,
    rasterize_svg,
    rasterize_svg_to_image,
    resolve_content_size,
)

WIDE_BLACK = '<svg viewBox="0 0 400 300"><rect x="0" y="0" width="400" height="300" fill="black"/></svg>'


def test_parse_view_box():
    assert parse_view_box('<svg viewBox="0 0 400 300">') == (0, 0, 400, 300)
    assert parse_view_box('<svg viewBox="0,0,10,20"></svg>') == (0, 0, 10, 20)
    assert parse_view_box('<svg viewBox="0 0 0 300"></svg>') is None
    assert parse_view_box('<svg width="10"></svg>') is None
    assert parse_view_box("not svg") is None


def test_prepare_adds_namespace_and_size_from_view_box():
    prepared = prepare_svg_for_render(WIDE_BLACK)
    root = prepared[: prepared.index(">") + 1]

    assert 'xmlns="http://www.w3.org/2000/svg"' in root
    assert 'width="400"' in root
    assert 'height="300"' in root
    # Child elements are untouched.
    assert '<rect x="0" y="0" width="400" height="300" fill="black"/>' in prepared


def test_prepare_replaces_percentage_size_once():
    markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100" width="100%" stroke-width="4"></svg>'
    root = prepare_svg_for_render(markup).split(">")[0]

    assert root.count(" width=") == 1
    assert 'width="200"' in root
    assert 'height="100"' in root
    assert 'stroke-width="4"' in root


def test_prepare_keeps_pixel_size():
    markup = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100" width="50" height="25px"></svg>'
    assert prepare_svg_for_render(markup) == markup


def test_resolve_content_size_fallbacks():
    assert resolve_content_size((640, 480), (0, 0, 10, 10)) == (640, 480)
    assert resolve_content_size((0, 0), (0, 0, 400, 300)) == (400, 300)
    assert resolve_content_size(None, None) == (1024, 1024)


def test_fit_contain_centers_content():
    assert fit_contain((400, 300), (1024, 1024)) == pytest.approx((2.56, 0, 128))
    assert fit_contain((100, 200), (1024, 1024)) == pytest.approx((5.12, 256, 0))


def test_wide_drawing_is_letterboxed_on_white():
    image = rasterize_svg_to_image(WIDE_BLACK, 1024)

    assert image.size == (1024, 1024)
    assert image.mode == "RGB"
    assert image.getpixel((512, 100)) == (255, 255, 255)
    assert image.getpixel((512, 200)) == (0, 0, 0)
    assert image.getpixel((512, 900)) == (255, 255, 255)
    assert image.getpixel((0, 384)) == (0, 0, 0)


def test_transparent_areas_become_white():
    markup = '<svg viewBox="0 0 10 10"><rect x="0" y="0" width="5" height="10" fill="black"/></svg>'
    image = rasterize_svg_to_image(markup, 100)

    assert image.getpixel((20, 50)) == (0, 0, 0)
    assert image.getpixel((80, 50)) == (255, 255, 255)


def test_rasterize_svg_returns_png_data_url():
    data_url = rasterize_svg(WIDE_BLACK, 64)

    assert data_url.startswith("data:image/png;base64,")
    with Image.open(io.BytesIO(data_url_to_bytes(data_url))) as img:
        assert img.size == (64, 64)


@pytest.mark.parametrize("markup", ["", "<div>no drawing</div>", "<svg viewBox='0 0 10 10'><rect"])
def test_undecodable_markup_raises(markup):
    with pytest.raises(RasterizationError):
        rasterize_svg_to_image(markup, 64)


def test_export_svg_png_is_a_named_png_download():
    download = export_svg_png(WIDE_BLACK, size=128)

    assert re.fullmatch(r"blueprint-\d+\.png", download.filename)
    assert download.data_url.startswith("data:image/png;base64,")
    with Image.open(io.BytesIO(data_url_to_bytes(download.data_url))) as img:
        assert img.format == "PNG"
        assert img.size == (128, 128)


def test_export_data_url_png_converts_to_png():
    buffer = io.BytesIO()
    Image.new("RGB", (8, 4), "red").save(buffer, format="JPEG")
    data_url = to_data_url(buffer.getvalue(), "image/jpeg")

    download = export_data_url_png(data_url, subject="isometric-cutaway")

    assert re.fullmatch(r"isometric-cutaway-\d+\.png", download.filename)
    with Image.open(io.BytesIO(data_url_to_bytes(download.data_url))) as img:
        assert img.format == "PNG"
        assert img.size == (8, 4)


def test_export_data_url_png_rejects_garbage():
    with pytest.raises(RasterizationError):
        export_data_url_png("data:image/png;base64,bm90IGFuIGltYWdl")
