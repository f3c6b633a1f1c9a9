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

from dataclasses import dataclass
from typing import List, Optional

from models.scene import ComponentType

# The layout model and the editor canvas share this coordinate space.
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600

# New items are centered on this point.
ADD_ITEM_ANCHOR = (300, 200)

# Furniture must sit this far inside the room walls.
CONTAINMENT_MARGIN = 10


@dataclass(frozen=True)
class CatalogItem:
    """A placeable component in the blueprint builder."""

    type: ComponentType
    label: str
    icon: str  # Material icon name
    default_width: float
    default_height: float
    category: str  # "structure", "furniture" or "deco"


CATALOG: List[CatalogItem] = [
    CatalogItem(ComponentType.ROOM_SQUARE, "Square Room", "crop_square", 200, 200, "structure"),
    CatalogItem(ComponentType.ROOM_L_SHAPE, "L-Shaped Room", "turn_right", 200, 200, "structure"),
    CatalogItem(ComponentType.WALL_HORIZONTAL, "Wall (H)", "horizontal_rule", 100, 10, "structure"),
    CatalogItem(ComponentType.WALL_VERTICAL, "Wall (V)", "more_vert", 10, 100, "structure"),
    CatalogItem(ComponentType.DOOR, "Door", "door_front", 50, 50, "structure"),
    CatalogItem(ComponentType.WINDOW, "Window", "window", 60, 10, "structure"),
    CatalogItem(ComponentType.BED, "Bed", "bed", 80, 100, "furniture"),
    CatalogItem(ComponentType.DESK, "Desk", "desk", 100, 40, "furniture"),
    CatalogItem(ComponentType.CHAIR, "Chair", "chair", 30, 30, "furniture"),
    CatalogItem(ComponentType.PLANT, "Plant", "local_florist", 30, 30, "deco"),
]

CATEGORIES = ["structure", "furniture", "deco"]


def get_catalog_item(component_type: ComponentType | str) -> Optional[CatalogItem]:
    """Finds the catalog entry for a component type."""
    for item in CATALOG:
        if item.type == component_type:
            return item
    return None


def get_catalog_by_category(category: str) -> List[CatalogItem]:
    return [item for item in CATALOG if item.category == category]


LAYOUT_SYSTEM_INSTRUCTION = f"""
You are an expert architectural layout engine.
Your task is to generate a JSON blueprint for a floor plan based on a user's description.

**Available Components:**
Structure: ROOM_SQUARE, ROOM_L_SHAPE, WALL_HORIZONTAL, WALL_VERTICAL, DOOR, WINDOW
Furniture: BED, DESK, CHAIR, PLANT

**Geometry & Coordinate Rules (CRITICAL):**
1.  **Canvas Size**: {CANVAS_WIDTH}x{CANVAS_HEIGHT} pixels. Center is ({CANVAS_WIDTH // 2}, {CANVAS_HEIGHT // 2}). Top-left is (0,0).
2.  **Room Placement**:
    *   Start by placing a 'ROOM_SQUARE' centered on the canvas (e.g., x=300, y=200).
    *   Default Room Size is 200x200.
    *   Use 'scaleX' and 'scaleY' to resize the room. (e.g., scaleX=1.5 -> width=300).
3.  **Containment Logic (MANDATORY)**:
    *   All furniture (BED, DESK, CHAIR, PLANT) **MUST** be placed strictly INSIDE the room's rectangle.
    *   *Calculation*:
        *   If Room is at (Rx, Ry) with Size (Rw, Rh):
        *   Furniture at (Fx, Fy) with Size (Fw, Fh) must satisfy:
            *   Fx >= Rx + {CONTAINMENT_MARGIN}
            *   Fy >= Ry + {CONTAINMENT_MARGIN}
            *   Fx + Fw <= Rx + Rw - {CONTAINMENT_MARGIN}
            *   Fy + Fh <= Ry + Rh - {CONTAINMENT_MARGIN}
    *   **NEVER** place furniture at (0,0) or in negative coordinates.
4.  **Perimeter Logic**:
    *   'DOOR' and 'WINDOW' must be placed on the *edges* of the room rectangle.
    *   Rotate them 0, 90, 180, 270 to align with walls.

**Component Sizes (width x height at scale 1):**
{chr(10).join(f"*   {c.type.value}: {c.default_width:g}x{c.default_height:g}" for c in CATALOG)}

**Example Response**:
{{
  "items": [
    {{ "type": "ROOM_SQUARE", "x": 300, "y": 200, "rotation": 0, "scaleX": 1.5, "scaleY": 1.5 }},
    {{ "type": "BED", "x": 320, "y": 220, "rotation": 0, "scaleX": 1, "scaleY": 1 }},
    {{ "type": "DOOR", "x": 300, "y": 250, "rotation": 90, "scaleX": 1, "scaleY": 1 }}
  ]
}}
Return ONLY valid JSON.
"""
