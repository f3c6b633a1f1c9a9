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

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from models.blueprint_visualizer import GenerationMode
from models.scene import ComponentType


class GenerationRequest(BaseModel):
    """
    Defines the contract for a Blueprint Visualizer run.
    Immutable once submitted; the mode selects how many renders follow the drawing.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str
    mode: GenerationMode = GenerationMode.FAST

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("prompt must not be empty")
        return value


class LayoutItem(BaseModel):
    """One placed component as returned by the layout model."""

    type: ComponentType
    x: float
    y: float
    rotation: Optional[float] = None
    scaleX: Optional[float] = None
    scaleY: Optional[float] = None


class LayoutResponse(BaseModel):
    """Schema for the structured layout generation call."""

    items: List[LayoutItem]
