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

"""
Prompt, mode selection and generate/stop controls.
"""

from typing import Callable
import mesop as me

from models.blueprint_visualizer import GenerationMode, GenerationStatus

MODE_OPTIONS = [
    me.SelectOption(label="Blueprint only", value=GenerationMode.BLUEPRINT_ONLY.value),
    me.SelectOption(label="Fast (1 render)", value=GenerationMode.FAST.value),
    me.SelectOption(label="Quality (3 renders)", value=GenerationMode.QUALITY.value),
]


@me.component
def input_section(
    prompt: str,
    mode: str,
    status: str,
    on_prompt_blur: Callable,
    on_mode_change: Callable,
    on_generate: Callable,
    on_stop: Callable,
):
    """
    Component for describing the space and starting or stopping a run.
    """
    in_flight = GenerationStatus(status).is_in_flight
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            gap=12,
            margin=me.Margin(bottom=32),
        )
    ):
        me.textarea(
            label="Describe the space",
            value=prompt,
            on_blur=on_prompt_blur,
            rows=3,
            disabled=in_flight,
            style=me.Style(width="100%"),
        )
        with me.box(
            style=me.Style(display="flex", flex_direction="row", gap=12, align_items="center")
        ):
            me.select(
                label="Mode",
                appearance="outline",
                options=MODE_OPTIONS,
                value=mode,
                on_selection_change=on_mode_change,
                disabled=in_flight,
            )
            if in_flight:
                me.button("Stop", on_click=on_stop, type="stroked")
                me.progress_spinner(diameter=24)
                me.text(status.replace("-", " ").capitalize())
            else:
                me.button("Generate", on_click=on_generate, type="flat")
