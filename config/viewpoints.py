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
from typing import List

from models.blueprint_visualizer import GenerationMode


@dataclass(frozen=True)
class ViewpointConfig:
    """A camera framing requested from the image model."""

    id: str  # Short ID for UI/Logic (e.g., "p1")
    perspective: str  # Text sent to the model (e.g., "Isometric View")
    label: str  # Human-readable name (e.g., "Isometric Cutaway")


# Single source of truth, in request order
VIEWPOINTS: List[ViewpointConfig] = [
    ViewpointConfig(id="p1", perspective="Isometric View", label="Isometric Cutaway"),
    ViewpointConfig(
        id="p2", perspective="Interior Eye-Level View", label="Interior Eye-Level"
    ),
    ViewpointConfig(
        id="p3", perspective="Top-Down Photorealistic View", label="Realistic Top-Down"
    ),
]

MODE_VIEWPOINT_COUNT = {
    GenerationMode.BLUEPRINT_ONLY: 0,
    GenerationMode.FAST: 1,
    GenerationMode.QUALITY: len(VIEWPOINTS),
}


def get_viewpoints_for_mode(mode: GenerationMode | str) -> List[ViewpointConfig]:
    """Returns the viewpoints to render for a generation mode, in request order."""
    mode = GenerationMode(mode)
    return VIEWPOINTS[: MODE_VIEWPOINT_COUNT[mode]]
