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
from unittest.mock import MagicMock

from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pages.nano_architect as nano_architect
from common.utils import to_data_url
from models.scene import ComponentType, SceneItem
from services.image_editor import EDIT_ERROR_MESSAGE
from services.scene_editor import PAN_MODE, SceneEditor
from state.nano_architect_state import PageState


class FakeLayoutClient:
    def __init__(self, items):
        self.items = items

    def generate_layout(self, prompt):
        return self.items


class FailingEditClient:
    def edit_image(self, image_base64, edit_prompt, mime_type="image/png"):
        raise RuntimeError("model unavailable")


def test_layout_generation_keeps_edits_made_while_waiting(monkeypatch):
    room = SceneItem(type=ComponentType.ROOM_SQUARE, x=300, y=200)
    monkeypatch.setattr(nano_architect, "get_generation_client", lambda: FakeLayoutClient([room]))
    state = PageState()
    state.layout_prompt = "A bedroom"

    steps = nano_architect._generate_layout(state)
    next(steps)
    assert state.is_generating

    # A viewport change handled while the spinner is showing.
    editor = SceneEditor.from_state(state.scene)
    editor.zoom_in()
    editor.set_mode(PAN_MODE)
    state.scene = editor.to_state()

    for _ in steps:
        pass

    assert state.scene["zoom"] == 1.1
    assert state.scene["mode"] == PAN_MODE
    assert [item["id"] for item in state.scene["items"]] == [room.id]
    assert not state.is_generating
    assert state.alert_message == ""


def test_failed_edit_is_logged_and_reported(monkeypatch):
    state = PageState()
    state.original_image = "data:image/png;base64,AAAA"
    state.edit_prompt = "Add a retro filter"
    logger = MagicMock()
    monkeypatch.setattr(nano_architect.me, "state", lambda cls: state)
    monkeypatch.setattr(nano_architect, "get_generation_client", lambda: FailingEditClient())
    monkeypatch.setattr(nano_architect, "logger", logger)

    for _ in nano_architect.on_edit_click(MagicMock()):
        pass

    assert state.edit_error == EDIT_ERROR_MESSAGE
    assert not state.is_editing
    logger.error.assert_called_once()


def test_edited_image_download_goes_to_the_browser(monkeypatch):
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), "blue").save(buffer, format="JPEG")
    state = PageState()
    state.processed_image = to_data_url(buffer.getvalue(), "image/jpeg")
    monkeypatch.setattr(nano_architect.me, "state", lambda cls: state)

    for _ in nano_architect.on_edited_download(MagicMock()):
        pass

    assert re.fullmatch(r"gemini-edited-\d+\.png", state.download_filename)
    assert state.download_href.startswith("data:image/png;base64,")
    assert state.show_snackbar
