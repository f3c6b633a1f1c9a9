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

"""Data structures for the Nano Architect blueprint builder."""

from dataclasses import dataclass, field, asdict
from enum import Enum
import uuid


class ComponentType(str, Enum):
    WALL_HORIZONTAL = "WALL_HORIZONTAL"
    WALL_VERTICAL = "WALL_VERTICAL"
    ROOM_SQUARE = "ROOM_SQUARE"
    ROOM_L_SHAPE = "ROOM_L_SHAPE"
    DOOR = "DOOR"
    WINDOW = "WINDOW"
    DESK = "DESK"
    BED = "BED"
    PLANT = "PLANT"
    CHAIR = "CHAIR"


ROOM_TYPES = (ComponentType.ROOM_SQUARE, ComponentType.ROOM_L_SHAPE)
FURNITURE_TYPES = (
    ComponentType.BED,
    ComponentType.DESK,
    ComponentType.CHAIR,
    ComponentType.PLANT,
)


@dataclass
class SceneItem:
    type: ComponentType
    x: float
    y: float
    # Degrees; kept to multiples of 90 by the editor but stored as any number
    rotation: float = 0
    scale_x: float = 1
    scale_y: float = 1
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SceneItem":
        return cls(
            id=data["id"],
            type=ComponentType(data["type"]),
            x=data["x"],
            y=data["y"],
            rotation=data.get("rotation", 0),
            scale_x=data.get("scale_x", 1),
            scale_y=data.get("scale_y", 1),
        )
