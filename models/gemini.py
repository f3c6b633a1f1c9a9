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

"""Gemini calls for drawings, styled renders, image edits and layouts."""

import base64
import re
from typing import Callable, TypeVar

import httpx
from google import genai
from google.genai import errors, types
from pydantic import ValidationError

from common.analytics import get_logger, track_model_call
from common.error_handling import (
    InvalidDrawingError,
    LayoutParseError,
    NoImageReturnedError,
    NoLayoutError,
)
from common.utils import strip_data_url_prefix, to_data_url
from config.default import Default
from config.scene_catalog import LAYOUT_SYSTEM_INSTRUCTION
from models.requests import LayoutResponse
from models.scene import SceneItem

logger = get_logger(__name__)

T = TypeVar("T")

DRAWING_SYSTEM_INSTRUCTION = """
You are an expert architect and vector graphics designer.
Your task is to generate a clean, professional SVG floorplan/blueprint based on the user's description.

Rules:
1. Output ONLY valid SVG code. Do not wrap in markdown code blocks.
2. The SVG must be strictly 2D, top-down view.
3. Use white background (fill='#FFFFFF').
4. Use bold black lines for walls (stroke='black' stroke-width='4').
5. Use thinner lines for windows/doors/furniture (stroke='black' stroke-width='2').
6. Ensure the SVG has viewBox defined and responsive width/height.
7. Do not include any text or explanations outside the SVG tags.
8. Make it visually clear and spaced out.
"""

STYLED_RENDER_PROMPT = """
Render a high-quality, photorealistic architectural visualization.
Perspective: {perspective}.
Subject: {subject}.

IMPORTANT: strictly follow the layout and geometry provided in the reference image (blueprint).
The reference image is the ground truth for the room shape and furniture placement.
Lighting: Natural, professional architectural photography style.
"""

LAYOUT_PROMPT = (
    'Create a layout for: "{prompt}". \n\n'
    "IMPORTANT: Ensure all furniture is strictly contained INSIDE the room walls. "
    "Align doors/windows to edges."
)

_CODE_FENCE = re.compile(r"```(?:xml|svg)?")


def extract_svg(text: str) -> str:
    """Pulls the <svg>...</svg> element out of a model response.

    Raises:
        InvalidDrawingError: If no SVG element is found.
    """
    svg_text = _CODE_FENCE.sub("", text or "").strip()

    start = svg_text.find("<svg")
    end = svg_text.rfind("</svg>")
    if start != -1 and end != -1 and end > start:
        svg_text = svg_text[start : end + len("</svg>")]

    if not svg_text.startswith("<svg"):
        raise InvalidDrawingError("Failed to generate valid SVG blueprint.")
    return svg_text


def extract_inline_image(response: types.GenerateContentResponse) -> tuple[str, str] | None:
    """Returns (mime_type, base64 data) of the first inline image part, if any."""
    candidates = response.candidates
    if not candidates:
        return None
    content = candidates[0].content
    if not content or not content.parts:
        return None
    for part in content.parts:
        if part.inline_data and part.inline_data.data:
            data = part.inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            return part.inline_data.mime_type or "image/png", data
    return None


def parse_layout(text: str) -> list[SceneItem]:
    """Parses layout JSON into scene items with client-side ids.

    Raises:
        LayoutParseError: If the body is not valid layout JSON.
    """
    try:
        layout = LayoutResponse.model_validate_json(text)
    except ValidationError as e:
        raise LayoutParseError(f"Layout response is not valid layout JSON: {e}") from e

    # Zero or missing transforms fall back to identity, ids are always ours.
    return [
        SceneItem(
            type=item.type,
            x=item.x,
            y=item.y,
            rotation=item.rotation or 0,
            scale_x=item.scaleX or 1,
            scale_y=item.scaleY or 1,
        )
        for item in layout.items
    ]


def is_transient_error(error: Exception) -> bool:
    """Network faults and server-side overload are worth one more try."""
    if isinstance(error, (httpx.TransportError, errors.ServerError)):
        return True
    return isinstance(error, errors.APIError) and error.code == 429


class GeminiGenerationClient:
    """One-shot Gemini calls used by the Blueprint Visualizer and Nano Architect.

    Application-level failures (no image, bad SVG, bad JSON) are never retried;
    transient network failures are retried `TRANSIENT_RETRIES` times.
    """

    def __init__(self, config: Default, client: genai.Client | None = None):
        self.config = config
        if client is None:
            client = genai.Client(
                api_key=config.require_credentials(),
                http_options=types.HttpOptions(
                    timeout=config.REQUEST_TIMEOUT_SECONDS * 1000
                ),
            )
        self._client = client

    def _call(self, model_name: str, fn: Callable[[], T], **details) -> T:
        attempts = max(0, self.config.TRANSIENT_RETRIES) + 1
        for attempt in range(1, attempts + 1):
            try:
                with track_model_call(model_name, attempt=attempt, **details):
                    return fn()
            except Exception as e:
                if attempt >= attempts or not is_transient_error(e):
                    raise
                logger.warning(
                    f"Transient failure calling {model_name} (attempt {attempt}/{attempts}): {e}"
                )
        raise AssertionError("unreachable")

    def generate_drawing(self, prompt: str) -> str:
        """Generates an SVG floor plan for the prompt."""
        model = self.config.DRAWING_MODEL_ID
        response = self._call(
            model,
            lambda: self._client.models.generate_content(
                model=model,
                contents=f"Create an SVG blueprint for: {prompt}",
                config=types.GenerateContentConfig(
                    system_instruction=DRAWING_SYSTEM_INSTRUCTION,
                    temperature=self.config.DRAWING_TEMPERATURE,
                ),
            ),
            operation="generate_drawing",
        )
        return extract_svg(response.text)

    def _generate_image(self, model: str, image_base64: str, mime_type: str, text: str, operation: str):
        image_part = types.Part.from_bytes(
            data=base64.b64decode(image_base64), mime_type=mime_type
        )
        response = self._call(
            model,
            lambda: self._client.models.generate_content(
                model=model,
                contents=[image_part, types.Part.from_text(text=text)],
            ),
            operation=operation,
        )
        return extract_inline_image(response)

    def generate_styled_render(
        self, prompt: str, viewpoint_label: str, reference_image: str
    ) -> str:
        """Renders the reference blueprint from a viewpoint; returns a data URL.

        Args:
            prompt: The user's description of the space.
            viewpoint_label: Perspective sent to the model, e.g. "Isometric View".
            reference_image: PNG as a data URL or bare base64.

        Raises:
            NoImageReturnedError: If the response has no inline image.
        """
        image = self._generate_image(
            self.config.IMAGE_MODEL_ID,
            strip_data_url_prefix(reference_image),
            "image/png",
            STYLED_RENDER_PROMPT.format(perspective=viewpoint_label, subject=prompt),
            operation="generate_styled_render",
        )
        if image is None:
            raise NoImageReturnedError(
                f"Failed to generate perspective image for {viewpoint_label}"
            )
        mime_type, data = image
        return to_data_url(data, mime_type)

    def edit_image(
        self, image_base64: str, edit_prompt: str, mime_type: str = "image/png"
    ) -> str:
        """Applies a free-text edit to an image; returns the base64 result."""
        image = self._generate_image(
            self.config.IMAGE_MODEL_ID,
            image_base64,
            mime_type,
            edit_prompt,
            operation="edit_image",
        )
        if image is None:
            raise NoImageReturnedError("No image generated")
        return image[1]

    def generate_layout(self, prompt: str) -> list[SceneItem]:
        """Asks the model for a schema-constrained blueprint layout."""
        model = self.config.LAYOUT_MODEL_ID
        response = self._call(
            model,
            lambda: self._client.models.generate_content(
                model=model,
                contents=LAYOUT_PROMPT.format(prompt=prompt),
                config=types.GenerateContentConfig(
                    system_instruction=LAYOUT_SYSTEM_INSTRUCTION,
                    response_mime_type="application/json",
                    response_schema=LayoutResponse,
                ),
            ),
            operation="generate_layout",
        )
        text = response.text
        if not text:
            raise NoLayoutError("No layout generated")
        return parse_layout(text)


_generation_client: GeminiGenerationClient | None = None


def get_generation_client() -> GeminiGenerationClient:
    """Returns the shared client, built once from the environment config.

    Raises:
        MissingCredentialError: If no API key is configured.
    """
    global _generation_client
    if _generation_client is None:
        _generation_client = GeminiGenerationClient(Default())
    return _generation_client
