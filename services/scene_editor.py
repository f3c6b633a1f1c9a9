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

"""Editing logic for the Nano Architect blueprint builder."""

from dataclasses import dataclass, field
from typing import Callable, Protocol

from common.analytics import get_logger
from config.scene_catalog import ADD_ITEM_ANCHOR, CONTAINMENT_MARGIN, get_catalog_item
from models.scene import FURNITURE_TYPES, ROOM_TYPES, ComponentType, SceneItem
from models.scene_svg import item_size, scene_to_svg
from models.svg_rasterizer import snapshot_for_generation

logger = get_logger(__name__)

MIN_ZOOM = 0.5
MAX_ZOOM = 3.0
ZOOM_STEP = 0.1

DEFAULT_RENDER_STYLE = (
    "Photorealistic 3D render, isometric view, soft lighting, architectural visualization"
)
RENDER_VIEWPOINT = "Isometric View"
LAYOUT_ERROR_MESSAGE = "Failed to generate blueprint. Please try again."

SELECT_MODE = "select"
PAN_MODE = "pan"


class LayoutClient(Protocol):
    def generate_layout(self, prompt: str) -> list[SceneItem]: ...

    def generate_styled_render(
        self, prompt: str, viewpoint_label: str, reference_image: str
    ) -> str: ...


@dataclass
class Viewport:
    """Pan offset and zoom applied around the items; never changes item coordinates."""

    pan_x: float = 0
    pan_y: float = 0
    zoom: float = 1.0


def item_bounds(item: SceneItem) -> tuple[float, float, float, float]:
    """Axis-aligned (left, top, right, bottom) of an item, rotation included.

    Items rotate about their center, so a quarter turn swaps width and height
    around that center. Other angles are treated as unrotated.
    """
    width, height = item_size(item)
    if round(item.rotation) % 180 == 90:
        center_x, center_y = item.x + width / 2, item.y + height / 2
        return (
            center_x - height / 2,
            center_y - width / 2,
            center_x + height / 2,
            center_y + width / 2,
        )
    return item.x, item.y, item.x + width, item.y + height


def is_contained(inner: SceneItem, room: SceneItem, margin: float = CONTAINMENT_MARGIN) -> bool:
    left, top, right, bottom = item_bounds(inner)
    room_left, room_top, room_right, room_bottom = item_bounds(room)
    return (
        left >= room_left + margin
        and top >= room_top + margin
        and right <= room_right - margin
        and bottom <= room_bottom - margin
    )


@dataclass
class SceneEditor:
    """An in-memory scene plus selection, tool mode and viewport."""

    client: LayoutClient | None = None
    items: list[SceneItem] = field(default_factory=list)
    selected_id: str | None = None
    mode: str = SELECT_MODE
    viewport: Viewport = field(default_factory=Viewport)
    rendered_perspective: str | None = None
    is_generating: bool = False
    alert_message: str | None = None
    rasterizer: Callable[[str], str] = snapshot_for_generation
    _drag_start: tuple[float, float] | None = None

    @property
    def selected_item(self) -> SceneItem | None:
        return next((i for i in self.items if i.id == self.selected_id), None)

    def add_item(self, component_type: ComponentType | str) -> SceneItem | None:
        """Adds a catalog component centered on the anchor and selects it."""
        catalog_item = get_catalog_item(component_type)
        if not catalog_item:
            return None
        anchor_x, anchor_y = ADD_ITEM_ANCHOR
        item = SceneItem(
            type=catalog_item.type,
            x=anchor_x - catalog_item.default_width / 2,
            y=anchor_y - catalog_item.default_height / 2,
        )
        self.items.append(item)
        self.selected_id = item.id
        return item

    def select_item(self, item_id: str) -> bool:
        if self.mode != SELECT_MODE:
            return False
        if not any(i.id == item_id for i in self.items):
            return False
        self.selected_id = item_id
        return True

    def clear_selection(self):
        self.selected_id = None

    def remove_selected(self):
        if not self.selected_id:
            return
        self.items = [i for i in self.items if i.id != self.selected_id]
        self.selected_id = None

    def rotate_selected(self):
        item = self.selected_item
        if item:
            item.rotation = (item.rotation + 90) % 360

    def move_selected(self, x: float, y: float):
        item = self.selected_item
        if item:
            item.x, item.y = x, y

    def set_mode(self, mode: str):
        if mode not in (SELECT_MODE, PAN_MODE):
            raise ValueError(f"Unknown editor mode: {mode}")
        self.mode = mode
        self._drag_start = None

    def start_pan(self, x: float, y: float):
        if self.mode == PAN_MODE:
            self._drag_start = (x - self.viewport.pan_x, y - self.viewport.pan_y)

    def pan_to(self, x: float, y: float):
        if self.mode == PAN_MODE and self._drag_start:
            self.viewport.pan_x = x - self._drag_start[0]
            self.viewport.pan_y = y - self._drag_start[1]

    def end_pan(self):
        self._drag_start = None

    def zoom_in(self):
        self.viewport.zoom = round(min(MAX_ZOOM, self.viewport.zoom + ZOOM_STEP), 2)

    def zoom_out(self):
        self.viewport.zoom = round(max(MIN_ZOOM, self.viewport.zoom - ZOOM_STEP), 2)

    def to_svg(self, include_viewport: bool = True) -> str:
        if include_viewport:
            return scene_to_svg(
                self.items,
                self.selected_id,
                pan=(self.viewport.pan_x, self.viewport.pan_y),
                zoom=self.viewport.zoom,
            )
        return scene_to_svg(self.items)

    def containment_violations(self) -> list[SceneItem]:
        """Furniture that is not inside any room, margin included.

        The layout model is only asked to respect this; nothing enforces it.
        """
        rooms = [i for i in self.items if i.type in ROOM_TYPES]
        return [
            item
            for item in self.items
            if item.type in FURNITURE_TYPES
            and not any(is_contained(item, room) for room in rooms)
        ]

    def generate_layout(self, prompt: str) -> bool:
        """Replaces the scene with a generated layout.

        On failure the items and selection are left exactly as they were and
        `alert_message` is set.
        """
        if not prompt or self.client is None:
            return False
        self.is_generating = True
        self.rendered_perspective = None
        self.alert_message = None
        try:
            new_items = self.client.generate_layout(prompt)
        except Exception as e:
            logger.error(f"Error generating blueprint: {e}")
            self.alert_message = LAYOUT_ERROR_MESSAGE
            return False
        finally:
            self.is_generating = False

        self.items = new_items
        if not any(i.id == self.selected_id for i in new_items):
            self.selected_id = None
        violations = self.containment_violations()
        if violations:
            logger.warning(
                f"Generated layout has {len(violations)} furniture item(s) outside room bounds"
            )
        return True

    def render_perspective(self, style_prompt: str = DEFAULT_RENDER_STYLE) -> str | None:
        """Renders the scene as a styled image; returns its data URL or None on failure."""
        if not self.items or self.client is None:
            return None
        self.is_generating = True
        try:
            reference = self.rasterizer(self.to_svg(include_viewport=False))
            self.rendered_perspective = self.client.generate_styled_render(
                style_prompt, RENDER_VIEWPOINT, reference
            )
        except Exception as e:
            logger.error(f"Error rendering perspective: {e}")
            return None
        finally:
            self.is_generating = False
        return self.rendered_perspective

    def close_perspective(self):
        self.rendered_perspective = None

    def to_state(self) -> dict:
        """Plain-dict form for storing in page state."""
        return {
            "items": [i.to_dict() for i in self.items],
            "selected_id": self.selected_id,
            "mode": self.mode,
            "pan_x": self.viewport.pan_x,
            "pan_y": self.viewport.pan_y,
            "zoom": self.viewport.zoom,
            "rendered_perspective": self.rendered_perspective,
        }

    @classmethod
    def from_state(cls, data: dict | None, client: LayoutClient | None = None) -> "SceneEditor":
        data = data or {}
        return cls(
            client=client,
            items=[SceneItem.from_dict(i) for i in data.get("items", [])],
            selected_id=data.get("selected_id"),
            mode=data.get("mode", SELECT_MODE),
            viewport=Viewport(
                pan_x=data.get("pan_x", 0),
                pan_y=data.get("pan_y", 0),
                zoom=data.get("zoom", 1.0),
            ),
            rendered_perspective=data.get("rendered_perspective"),
        )
