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

import json
import os
import sys
from unittest.mock import MagicMock

import httpx
import pytest
from google.genai import types

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.error_handling import (
    InvalidDrawingError,
    LayoutParseError,
    MissingCredentialError,
    NoImageReturnedError,
    NoLayoutError,
)
from config.default import Default
from models.gemini import (
    GeminiGenerationClient,
    extract_inline_image,
    extract_svg,
    is_transient_error,
    parse_layout,
)
from models.scene import ComponentType


def image_response(data=b"rendered", mime_type="image/png"):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[
                        types.Part(text="Here you go"),
                        types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
                    ],
                )
            )
        ]
    )


def text_response(text):
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))
        ]
    )


def make_client(*responses):
    config = Default()
    config.TRANSIENT_RETRIES = 1
    fake = MagicMock()
    fake.models.generate_content.side_effect = list(responses)
    return GeminiGenerationClient(config, client=fake), fake.models.generate_content


def test_extract_svg_strips_fences_and_chatter():
    text = "Sure!\n```svg\n<svg viewBox=\"0 0 10 10\"><rect/></svg>\n```\nEnjoy."
    assert extract_svg(text) == '<svg viewBox="0 0 10 10"><rect/></svg>'


def test_extract_svg_keeps_first_to_last_element():
    text = "```xml\n<svg><g/></svg>\n<svg><g/></svg>```"
    assert extract_svg(text) == "<svg><g/></svg>\n<svg><g/></svg>"


@pytest.mark.parametrize("text", ["", None, "I cannot draw that.", "<div></div>"])
def test_extract_svg_rejects_responses_without_svg(text):
    with pytest.raises(InvalidDrawingError):
        extract_svg(text)


def test_extract_inline_image_returns_first_image_part():
    assert extract_inline_image(image_response(b"abc", "image/jpeg")) == ("image/jpeg", "YWJj")


def test_extract_inline_image_without_image():
    assert extract_inline_image(text_response("no image")) is None
    assert extract_inline_image(types.GenerateContentResponse(candidates=[])) is None


def test_parse_layout_fills_defaults_and_ids():
    body = json.dumps(
        {
            "items": [
                {"type": "ROOM_SQUARE", "x": 300, "y": 200, "scaleX": 1.5, "scaleY": 1.5},
                {"type": "BED", "x": 320, "y": 220, "rotation": 90, "scaleX": 0, "scaleY": 0},
            ]
        }
    )
    items = parse_layout(body)

    assert [i.type for i in items] == [ComponentType.ROOM_SQUARE, ComponentType.BED]
    assert (items[0].rotation, items[0].scale_x, items[0].scale_y) == (0, 1.5, 1.5)
    assert (items[1].rotation, items[1].scale_x, items[1].scale_y) == (90, 1, 1)
    assert items[0].id and items[0].id != items[1].id


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        "{}",
        '{"items": [{"type": "SOFA", "x": 1, "y": 2}]}',
        '{"items": [{"type": "BED", "x": "left"}]}',
    ],
)
def test_parse_layout_rejects_invalid_bodies(body):
    with pytest.raises(LayoutParseError):
        parse_layout(body)


def test_is_transient_error():
    assert is_transient_error(httpx.ConnectError("connection reset"))
    assert is_transient_error(httpx.ReadTimeout("timed out"))
    assert not is_transient_error(ValueError("bad request"))
    assert not is_transient_error(NoImageReturnedError("no image"))


def test_missing_credentials_are_reported():
    config = Default()
    config.GEMINI_API_KEY = None
    with pytest.raises(MissingCredentialError):
        GeminiGenerationClient(config)


def test_generate_drawing_uses_system_instruction_and_temperature():
    client, generate = make_client(text_response("```svg\n<svg viewBox='0 0 1 1'></svg>\n```"))

    assert client.generate_drawing("A cabin") == "<svg viewBox='0 0 1 1'></svg>"
    kwargs = generate.call_args.kwargs
    assert kwargs["contents"] == "Create an SVG blueprint for: A cabin"
    assert kwargs["config"].temperature == client.config.DRAWING_TEMPERATURE
    assert "SVG floorplan" in kwargs["config"].system_instruction


def test_transient_failure_is_retried_once():
    client, generate = make_client(httpx.ConnectError("reset"), text_response("<svg></svg>"))

    assert client.generate_drawing("A cabin") == "<svg></svg>"
    assert generate.call_count == 2


def test_transient_failures_give_up_after_retry():
    client, generate = make_client(httpx.ConnectError("reset"), httpx.ConnectError("reset"))

    with pytest.raises(httpx.ConnectError):
        client.generate_drawing("A cabin")
    assert generate.call_count == 2


def test_application_failures_are_not_retried():
    client, generate = make_client(text_response("I cannot draw that."))

    with pytest.raises(InvalidDrawingError):
        client.generate_drawing("A cabin")
    assert generate.call_count == 1


def test_generate_styled_render_sends_reference_image():
    client, generate = make_client(image_response(b"png-bytes"))

    result = client.generate_styled_render("A cabin", "Isometric View", "data:image/png;base64,aW1n")

    assert result == "data:image/png;base64,cG5nLWJ5dGVz"
    image_part, text_part = generate.call_args.kwargs["contents"]
    assert image_part.inline_data.data == b"img"
    assert image_part.inline_data.mime_type == "image/png"
    assert "Perspective: Isometric View." in text_part.text
    assert "Subject: A cabin." in text_part.text
    assert generate.call_args.kwargs["model"] == client.config.IMAGE_MODEL_ID


def test_generate_styled_render_without_image():
    client, generate = make_client(text_response("Sorry"))

    with pytest.raises(NoImageReturnedError):
        client.generate_styled_render("A cabin", "Isometric View", "aW1n")
    assert generate.call_count == 1


def test_edit_image_returns_base64():
    client, generate = make_client(image_response(b"edited", "image/jpeg"))

    assert client.edit_image("aW1n", "Add a retro filter", "image/jpeg") == "ZWRpdGVk"
    image_part, text_part = generate.call_args.kwargs["contents"]
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert text_part.text == "Add a retro filter"


def test_edit_image_without_image():
    client, _ = make_client(text_response("Sorry"))
    with pytest.raises(NoImageReturnedError):
        client.edit_image("aW1n", "Remove the person")


def test_generate_layout_requests_json():
    body = '{"items": [{"type": "DESK", "x": 350, "y": 250}]}'
    client, generate = make_client(text_response(body))

    items = client.generate_layout("A study")

    assert len(items) == 1
    assert items[0].type == ComponentType.DESK
    config = generate.call_args.kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert 'Create a layout for: "A study"' in generate.call_args.kwargs["contents"]


def test_generate_layout_with_empty_body():
    client, _ = make_client(MagicMock(text=""))
    with pytest.raises(NoLayoutError):
        client.generate_layout("A study")


@pytest.mark.integration
@pytest.mark.skipif(not Default().has_credentials(), reason="GEMINI_API_KEY is not set")
def test_live_drawing_and_render():
    """Runs one drawing and one styled render against the live API."""
    from models.svg_rasterizer import snapshot_for_generation

    client = GeminiGenerationClient(Default())
    markup = client.generate_drawing("A small studio apartment with a kitchenette")
    assert markup.startswith("<svg")

    image = client.generate_styled_render(
        "A small studio apartment with a kitchenette",
        "Isometric View",
        snapshot_for_generation(markup),
    )
    assert image.startswith("data:image/")
