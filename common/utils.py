# Copyright 2025 Google LLC.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import base64
import io
import re
import time

from absl import logging
from PIL import Image


DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.*)$", re.DOTALL)


def to_data_url(data: bytes | str, mime_type: str = "image/png") -> str:
    """Wraps raw bytes or an already base64 encoded string in a data URL."""
    if isinstance(data, bytes):
        data = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{data}"


def split_data_url(data_url: str) -> tuple[str, str]:
    """Splits a data URL into its MIME type and base64 payload.

    Args:
        data_url: A `data:<mime>;base64,<payload>` string.

    Returns:
        A tuple (mime_type, base64_payload).

    Raises:
        ValueError: If the string is not a base64 data URL.
    """
    match = DATA_URL_PATTERN.match(data_url or "")
    if not match:
        raise ValueError("Not a base64 data URL.")
    return match.group("mime"), match.group("data")


def strip_data_url_prefix(base64_string: str) -> str:
    """Removes an image data URL prefix, if present."""
    return re.sub(r"^data:image/(png|jpeg|jpg|webp);base64,", "", base64_string)


def data_url_to_bytes(data_url: str) -> bytes:
    _, payload = split_data_url(data_url)
    return base64.b64decode(payload)


def get_image_dimensions_from_base64(base64_string: str) -> tuple[int, int] | None:
    """Retrieves the width and height of an image from a base64 encoded string.

    Args:
        base64_string: The base64 encoded image data, optionally as a data URL.

    Returns:
        A tuple (width, height) if successful, or None if an error occurs.
    """
    try:
        image_data = base64.b64decode(strip_data_url_prefix(base64_string))
        img = Image.open(io.BytesIO(image_data))
        width, height = img.size
        return width, height
    except Exception as e:
        logging.info(f"App: Error getting image dimensions: {e}")
        return None


def timestamped_filename(subject: str, extension: str = "png", now: float | None = None) -> str:
    """Builds a download filename of the form `<subject>-<timestamp>.<ext>`.

    The timestamp is milliseconds since the epoch.
    """
    if now is None:
        now = time.time()
    return f"{subject}-{int(now * 1000)}.{extension}"
