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

"""SVG markup for blueprint builder scenes."""

from config.scene_catalog import CANVAS_HEIGHT, CANVAS_WIDTH, get_catalog_item
from models.scene import ComponentType, SceneItem

CANVAS_BACKGROUND = "#0f172a"


def _n(value: float) -> str:
    return f"{value:g}"


def item_size(item: SceneItem) -> tuple[float, float]:
    """Width and height of an item before rotation."""
    catalog_item = get_catalog_item(item.type)
    return (
        catalog_item.default_width * item.scale_x,
        catalog_item.default_height * item.scale_y,
    )


def render_component_svg(
    component_type: ComponentType, width: float, height: float, is_selected: bool
) -> str:
    """Returns the SVG fragment for one component at the origin."""
    stroke = "#a855f7" if is_selected else "#334155"
    fill = "#f3e8ff" if is_selected else "#1e293b"
    stroke_width = 3 if is_selected else 2
    w, h = _n(width), _n(height)

    if component_type == ComponentType.ROOM_SQUARE:
        return (
            f'<g><rect width="{w}" height="{h}" fill="#0f172a" stroke="{stroke}" stroke-width="{stroke_width}"/>'
            '<text x="5" y="20" fill="#64748b" font-size="12" font-family="sans-serif">Room</text></g>'
        )
    if component_type in (ComponentType.WALL_HORIZONTAL, ComponentType.WALL_VERTICAL):
        return f'<rect width="{w}" height="{h}" fill="#94a3b8" stroke="none"/>'
    if component_type == ComponentType.DOOR:
        # Dashed swing arc plus the door panel
        return (
            f'<g><path d="M0,{h} Q{w},{h} {w},0" fill="none" stroke="{stroke}" stroke-dasharray="4,4"/>'
            f'<rect x="{_n(width - 5)}" y="0" width="5" height="{h}" fill="#cbd5e1"/></g>'
        )
    if component_type == ComponentType.WINDOW:
        return (
            f'<g><rect width="{w}" height="{h}" fill="#e2e8f0" stroke="#94a3b8"/>'
            f'<line x1="{_n(width / 2)}" y1="0" x2="{_n(width / 2)}" y2="{h}" stroke="#94a3b8"/></g>'
        )
    if component_type == ComponentType.BED:
        return (
            f'<g><rect width="{w}" height="{h}" rx="5" fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
            f'<rect x="5" y="5" width="{_n(width - 10)}" height="20" rx="2" fill="#cbd5e1"/>'
            f'<rect x="5" y="30" width="{_n(width - 10)}" height="{_n(height - 35)}" rx="2" fill="#e2e8f0"/></g>'
        )
    if component_type == ComponentType.DESK:
        return f'<g><rect width="{w}" height="{h}" fill="#475569" stroke="{stroke}" stroke-width="{stroke_width}"/></g>'
    if component_type == ComponentType.CHAIR:
        return (
            f'<g><circle cx="{_n(width / 2)}" cy="{_n(height / 2)}" r="{_n(width / 2)}" fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>'
            f'<rect x="5" y="{_n(height - 10)}" width="{_n(width - 10)}" height="5" rx="2" fill="#64748b"/></g>'
        )
    if component_type == ComponentType.PLANT:
        return (
            f'<g><circle cx="{_n(width / 2)}" cy="{_n(height / 2)}" r="{_n(width / 2)}" fill="#22c55e" fill-opacity="0.2" stroke="#22c55e"/>'
            f'<circle cx="{_n(width / 2)}" cy="{_n(height / 2)}" r="5" fill="#22c55e"/></g>'
        )
    if component_type == ComponentType.ROOM_L_SHAPE:
        return (
            f'<path d="M0,0 L{w},0 L{w},{_n(height / 2)} L{_n(width / 2)},{_n(height / 2)} '
            f'L{_n(width / 2)},{h} L0,{h} Z" fill="#0f172a" stroke="{stroke}" stroke-width="{stroke_width}"/>'
        )
    return f'<rect width="{w}" height="{h}" fill="red" opacity="0.5"/>'


def render_item_svg(item: SceneItem, is_selected: bool = False) -> str:
    width, height = item_size(item)
    transform = (
        f"translate({_n(item.x)}, {_n(item.y)}) "
        f"rotate({_n(item.rotation)} {_n(width / 2)} {_n(height / 2)})"
    )
    body = render_component_svg(item.type, width, height, is_selected)
    return f'<g data-id="{item.id}" transform="{transform}">{body}</g>'


def scene_to_svg(
    items: list[SceneItem],
    selected_id: str | None = None,
    pan: tuple[float, float] = (0, 0),
    zoom: float = 1.0,
) -> str:
    """Serializes a scene as a standalone SVG document on the layout canvas."""
    rendered = "".join(
        render_item_svg(item, item.id == selected_id)
        for item in items
        if get_catalog_item(item.type)
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {CANVAS_WIDTH} {CANVAS_HEIGHT}" '
        f'width="{CANVAS_WIDTH}" height="{CANVAS_HEIGHT}">'
        f'<rect width="{CANVAS_WIDTH}" height="{CANVAS_HEIGHT}" fill="{CANVAS_BACKGROUND}"/>'
        f'<g transform="translate({_n(pan[0])}, {_n(pan[1])}) scale({_n(zoom)})">'
        '<path d="M-10,0 L10,0 M0,-10 L0,10" stroke="#334155" stroke-width="1"/>'
        f"{rendered}</g></svg>"
    )
