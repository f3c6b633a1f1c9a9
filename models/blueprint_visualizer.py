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

"""Data structures for the Blueprint Visualizer feature."""

from dataclasses import dataclass, field, asdict
from enum import Enum
import uuid


class GenerationMode(str, Enum):
    BLUEPRINT_ONLY = "blueprint-only"
    FAST = "fast"
    QUALITY = "quality"


class GenerationStatus(str, Enum):
    IDLE = "idle"
    GENERATING_DRAWING = "generating-drawing"
    RASTERIZING = "rasterizing"
    GENERATING_RENDERS = "generating-renders"
    COMPLETE = "complete"
    ERROR = "error"
    STOPPED = "stopped"

    @property
    def is_terminal(self) -> bool:
        return self in (
            GenerationStatus.COMPLETE,
            GenerationStatus.ERROR,
            GenerationStatus.STOPPED,
        )

    @property
    def is_in_flight(self) -> bool:
        return not self.is_terminal and self is not GenerationStatus.IDLE


@dataclass
class RenderResult:
    id: str
    label: str
    image_data_url: str
    caption: str


@dataclass
class GenerationSession:
    prompt: str = ""
    mode: GenerationMode = GenerationMode.FAST
    status: GenerationStatus = GenerationStatus.IDLE
    drawing_markup: str | None = None
    # PNG data URL of the drawing, the reference for every render
    raster_image: str | None = None
    # Ordered as the viewpoints were requested, not as they completed
    renders: list[RenderResult] = field(default_factory=list)
    error_message: str | None = None
    drawing_seconds: float = 0.0
    render_seconds: float = 0.0
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["mode"] = self.mode.value
        data["status"] = self.status.value
        return data
