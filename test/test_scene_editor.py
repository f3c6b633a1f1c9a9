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

import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.error_handling import LayoutParseError
from models.scene import ComponentType, SceneItem
from models.scene_svg import item_size, scene_to_svg
from services.scene_editor import (
    LAYOUT_ERROR_MESSAGE,
    MAX_ZOOM,
    MIN_ZOOM,
    PAN_MODE,
    RENDER_VIEWPOINT,
    SELECT_MODE,
    SceneEditor,
    is_contained,
    item_bounds,
)


class FakeLayoutClient:
    def __init__(self, items=None, error=None):
        self.items = items or []
        self.error = error
        self.render_calls = []

    def generate_layout(self, prompt):
        if self.error:
            raise self.error
        return self.items

    def generate_styled_render(self, prompt, viewpoint_label, reference_image):
        self.render_calls.append((prompt, viewpoint_label, reference_image))
        return "data:image/png;base64,cmVuZGVy"


def test_add_item_centers_on_anchor_and_selects():
    editor = SceneEditor()
    bed = editor.add_item(ComponentType.BED)

    assert (bed.x, bed.y) == (260, 150)
    assert editor.selected_id == bed.id
    assert editor.add_item("SOFA") is None
    assert len(editor.items) == 1


def test_four_rotations_return_to_start():
    editor = SceneEditor()
    bed = editor.add_item("BED")
    for expected in (90, 180, 270, 0):
        editor.rotate_selected()
        assert bed.rotation == expected


def test_remove_selected():
    editor = SceneEditor()
    chair = editor.add_item(ComponentType.CHAIR)
    desk = editor.add_item(ComponentType.DESK)

    editor.remove_selected()

    assert editor.items == [chair]
    assert editor.selected_id is None
    assert desk not in editor.items
    # Nothing selected, nothing removed.
    editor.remove_selected()
    assert editor.items == [chair]


def test_selection_only_in_select_mode():
    editor = SceneEditor()
    chair = editor.add_item(ComponentType.CHAIR)
    editor.clear_selection()

    editor.set_mode(PAN_MODE)
    assert not editor.select_item(chair.id)
    assert editor.selected_id is None

    editor.set_mode(SELECT_MODE)
    assert editor.select_item(chair.id)
    assert not editor.select_item("unknown")
    assert editor.selected_id == chair.id

    with pytest.raises(ValueError):
        editor.set_mode("draw")


def test_zoom_is_clamped():
    editor = SceneEditor()
    for _ in range(40):
        editor.zoom_in()
    assert editor.viewport.zoom == MAX_ZOOM
    for _ in range(40):
        editor.zoom_out()
    assert editor.viewport.zoom == MIN_ZOOM
    editor.zoom_in()
    assert editor.viewport.zoom == 0.6


def test_pan_moves_viewport_not_items():
    editor = SceneEditor()
    chair = editor.add_item(ComponentType.CHAIR)
    before = (chair.x, chair.y)

    editor.start_pan(100, 100)
    editor.pan_to(140, 80)
    assert (editor.viewport.pan_x, editor.viewport.pan_y) == (0, 0)

    editor.set_mode(PAN_MODE)
    editor.start_pan(100, 100)
    editor.pan_to(140, 80)
    editor.end_pan()
    editor.pan_to(500, 500)

    assert (editor.viewport.pan_x, editor.viewport.pan_y) == (40, -20)
    assert (chair.x, chair.y) == before


def test_item_bounds_with_quarter_turn():
    desk = SceneItem(type=ComponentType.DESK, x=100, y=100)
    assert item_bounds(desk) == (100, 100, 200, 140)
    desk.rotation = 90
    assert item_bounds(desk) == (130, 70, 170, 170)


def test_item_size_applies_scale():
    room = SceneItem(type=ComponentType.ROOM_SQUARE, x=0, y=0, scale_x=1.5, scale_y=2)
    assert item_size(room) == (300, 400)


def test_containment():
    room = SceneItem(type=ComponentType.ROOM_SQUARE, x=300, y=200)
    inside = SceneItem(type=ComponentType.BED, x=320, y=220)
    touching = SceneItem(type=ComponentType.BED, x=305, y=220)
    assert is_contained(inside, room)
    assert not is_contained(touching, room)

    editor = SceneEditor(items=[room, inside, touching])
    assert editor.containment_violations() == [touching]


def test_generate_layout_replaces_scene():
    room = SceneItem(type=ComponentType.ROOM_SQUARE, x=300, y=200)
    bed = SceneItem(type=ComponentType.BED, x=320, y=220)
    editor = SceneEditor(client=FakeLayoutClient(items=[room, bed]))
    editor.add_item(ComponentType.PLANT)

    assert editor.generate_layout("A bedroom")
    assert editor.items == [room, bed]
    assert editor.selected_id is None
    assert editor.alert_message is None
    assert not editor.is_generating


def test_failed_layout_leaves_scene_untouched():
    editor = SceneEditor(client=FakeLayoutClient(error=LayoutParseError("bad json")))
    plant = editor.add_item(ComponentType.PLANT)

    assert not editor.generate_layout("A bedroom")
    assert editor.items == [plant]
    assert editor.selected_id == plant.id
    assert editor.alert_message == LAYOUT_ERROR_MESSAGE
    assert not editor.is_generating


def test_render_perspective_uses_scene_without_viewport():
    snapshots = []
    client = FakeLayoutClient()
    editor = SceneEditor(client=client, rasterizer=lambda svg: snapshots.append(svg) or "data:image/png;base64,c25hcA==")
    editor.add_item(ComponentType.ROOM_SQUARE)
    editor.zoom_in()

    assert editor.render_perspective("Watercolor sketch") == "data:image/png;base64,cmVuZGVy"
    assert editor.rendered_perspective == "data:image/png;base64,cmVuZGVy"
    assert client.render_calls == [("Watercolor sketch", RENDER_VIEWPOINT, "data:image/png;base64,c25hcA==")]
    assert "scale(1)" in snapshots[0]

    editor.close_perspective()
    assert editor.rendered_perspective is None


def test_render_perspective_needs_items():
    client = FakeLayoutClient()
    editor = SceneEditor(client=client, rasterizer=lambda svg: "unused")
    assert editor.render_perspective() is None
    assert client.render_calls == []


def test_scene_svg_marks_selection_and_viewport():
    editor = SceneEditor()
    bed = editor.add_item(ComponentType.BED)
    editor.set_mode(PAN_MODE)
    editor.start_pan(0, 0)
    editor.pan_to(40, 0)

    svg = editor.to_svg()

    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 800 600"')
    assert f'data-id="{bed.id}"' in svg
    assert "translate(40, 0) scale(1)" in svg
    assert "#a855f7" in svg
    assert "#a855f7" not in scene_to_svg(editor.items)


def test_state_round_trip():
    editor = SceneEditor()
    editor.add_item(ComponentType.ROOM_L_SHAPE)
    editor.add_item(ComponentType.WINDOW)
    editor.rotate_selected()
    editor.zoom_in()

    restored = SceneEditor.from_state(editor.to_state())

    assert [i.to_dict() for i in restored.items] == [i.to_dict() for i in editor.items]
    assert restored.selected_id == editor.selected_id
    assert restored.viewport == editor.viewport
    assert SceneEditor.from_state(None).items == []


def test_move_selected_only_moves_selection():
    editor = SceneEditor()
    chair = editor.add_item(ComponentType.CHAIR)
    desk = editor.add_item(ComponentType.DESK)

    editor.move_selected(400, 320)

    assert (desk.x, desk.y) == (400, 320)
    assert (chair.x, chair.y) == (285, 185)
    editor.clear_selection()
    editor.move_selected(0, 0)
    assert (desk.x, desk.y) == (400, 320)
