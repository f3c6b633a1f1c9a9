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

"""SVG to PNG conversion for model inputs and user downloads."""

import io
import re
from dataclasses import dataclass

import cairosvg
from PIL import Image

from common.analytics import get_logger
from common.error_handling import RasterizationError
from common.utils import data_url_to_bytes, timestamped_filename, to_data_url
from config.default import Default

logger = get_logger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Model inputs are rendered at 1024, downloads at 2048.
SNAPSHOT_SIZE = 1024
EXPORT_SIZE = 2048
DEFAULT_CONTENT_SIZE = (1024, 1024)

_ROOT_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_VIEW_BOX = re.compile(r"""\bviewBox\s*=\s*["']([^"']*)["']""", re.IGNORECASE)
_XMLNS = re.compile(r"""\sxmlns\s*=\s*["']""", re.IGNORECASE)
_PIXEL_VALUE = re.compile(r"^\s*\d+(\.\d+)?\s*(px)?\s*$")


def _attribute_pattern(name: str) -> re.Pattern:
    # The lookbehind keeps `stroke-width` from matching `width`.
    return re.compile(rf"""(?<![\w:-]){name}\s*=\s*(["'])(.*?)\1""", re.IGNORECASE)


def parse_view_box(markup: str) -> tuple[float, float, float, float] | None:
    """Returns (min_x, min_y, width, height) of the root element's viewBox."""
    root = _ROOT_TAG.search(markup or "")
    if not root:
        return None
    match = _VIEW_BOX.search(root.group(0))
    if not match:
        return None
    try:
        parts = [float(p) for p in re.split(r"[\s,]+", match.group(1).strip())]
    except ValueError:
        return None
    if len(parts) != 4 or parts[2] <= 0 or parts[3] <= 0:
        return None
    return parts[0], parts[1], parts[2], parts[3]


def prepare_svg_for_render(markup: str) -> str:
    """Makes model-generated SVG safe to decode as a standalone image.

    Adds the SVG namespace when it is missing, and gives the root element
    pixel width/height from its viewBox when it has no numeric size, which
    would otherwise decode to a zero-size image.
    """
    root = _ROOT_TAG.search(markup or "")
    if not root:
        return markup

    tag = root.group(0)
    if not _XMLNS.search(tag):
        tag = f'{tag[:4]} xmlns="{SVG_NAMESPACE}"{tag[4:]}'

    view_box = parse_view_box(tag)
    if view_box:
        for name, value in (("width", view_box[2]), ("height", view_box[3])):
            attribute = f'{name}="{value:g}"'
            existing = _attribute_pattern(name).search(tag)
            if existing is None:
                tag = f"{tag[:4]} {attribute}{tag[4:]}"
            elif not _PIXEL_VALUE.match(existing.group(2)):
                # Replace percentages and the like instead of adding a duplicate.
                tag = tag[: existing.start()] + attribute + tag[existing.end():]

    return markup[: root.start()] + tag + markup[root.end():]


def resolve_content_size(
    natural_size: tuple[float, float] | None,
    view_box: tuple[float, float, float, float] | None,
    default: tuple[float, float] = DEFAULT_CONTENT_SIZE,
) -> tuple[float, float]:
    """Picks the drawing size: natural size, then viewBox size, then default."""
    if natural_size and natural_size[0] > 0 and natural_size[1] > 0:
        return natural_size
    if view_box:
        return view_box[2], view_box[3]
    return default


def fit_contain(
    content_size: tuple[float, float], canvas_size: tuple[int, int]
) -> tuple[float, float, float]:
    """Returns (scale, offset_x, offset_y) to center content inside the canvas."""
    content_w, content_h = content_size
    canvas_w, canvas_h = canvas_size
    scale = min(canvas_w / content_w, canvas_h / content_h)
    offset_x = (canvas_w - content_w * scale) / 2
    offset_y = (canvas_h - content_h * scale) / 2
    return scale, offset_x, offset_y


def _natural_size(svg_bytes: bytes) -> tuple[int, int] | None:
    try:
        png = cairosvg.svg2png(bytestring=svg_bytes)
        with Image.open(io.BytesIO(png)) as img:
            return img.size
    except Exception as e:
        # The sized render below reports the real failure, if any.
        logger.info(f"Could not determine natural SVG size: {e}")
        return None


def rasterize_svg_to_image(markup: str, size: int = SNAPSHOT_SIZE) -> Image.Image:
    """Renders SVG markup onto a white size x size canvas, contain-fit and centered.

    Raises:
        RasterizationError: If the markup cannot be decoded.
    """
    if not markup or not _ROOT_TAG.search(markup):
        raise RasterizationError("Markup has no <svg> root element.")

    prepared = prepare_svg_for_render(markup)
    svg_bytes = prepared.encode("utf-8")

    content_w, content_h = resolve_content_size(
        _natural_size(svg_bytes), parse_view_box(prepared)
    )
    scale, offset_x, offset_y = fit_contain((content_w, content_h), (size, size))
    draw_w = max(1, round(content_w * scale))
    draw_h = max(1, round(content_h * scale))

    try:
        png = cairosvg.svg2png(
            bytestring=svg_bytes, output_width=draw_w, output_height=draw_h
        )
        drawing = Image.open(io.BytesIO(png)).convert("RGBA")
    except Exception as e:
        logger.error(f"Failed to rasterize SVG: {e}")
        raise RasterizationError(f"Failed to rasterize SVG: {e}") from e

    canvas = Image.new("RGB", (size, size), "white")
    canvas.paste(drawing, (round(offset_x), round(offset_y)), drawing)
    return canvas


def image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def rasterize_svg(markup: str, size: int = SNAPSHOT_SIZE) -> str:
    """Renders SVG markup to a PNG data URL."""
    return to_data_url(image_to_png_bytes(rasterize_svg_to_image(markup, size)))


def snapshot_for_generation(markup: str) -> str:
    """PNG data URL of a drawing, sized as a reference image for the image model."""
    return rasterize_svg(markup, Default().SNAPSHOT_SIZE)


@dataclass(frozen=True)
class PngDownload:
    """A PNG handed to the browser: the suggested filename and the bytes as a data URL."""

    filename: str
    data_url: str


def _png_download(png_bytes: bytes, subject: str) -> PngDownload:
    filename = timestamped_filename(subject)
    logger.info(f"Prepared download {filename} ({len(png_bytes)} bytes)")
    return PngDownload(filename=filename, data_url=to_data_url(png_bytes))


def export_svg_png(
    markup: str, subject: str = "blueprint", size: int | None = None
) -> PngDownload:
    """High resolution PNG of the drawing, named `<subject>-<timestamp>.png`."""
    image = rasterize_svg_to_image(markup, size or Default().EXPORT_SIZE)
    return _png_download(image_to_png_bytes(image), subject)


def export_data_url_png(data_url: str, subject: str = "render") -> PngDownload:
    """Re-encodes a generated image (any format) as a PNG download."""
    try:
        with Image.open(io.BytesIO(data_url_to_bytes(data_url))) as img:
            png = image_to_png_bytes(img.convert("RGBA"))
    except Exception as e:
        raise RasterizationError(f"Failed to decode image for export: {e}") from e
    return _png_download(png, subject)
