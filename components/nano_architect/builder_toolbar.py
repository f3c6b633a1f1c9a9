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
Builder toolbar: tool mode, selection actions, zoom and pan.
"""

from typing import Callable
import mesop as me

from services.scene_editor import PAN_MODE, SELECT_MODE


@me.component
def builder_toolbar(
    mode: str,
    has_selection: bool,
    zoom: float,
    on_mode_click: Callable,
    on_rotate: Callable,
    on_delete: Callable,
    on_zoom_in: Callable,
    on_zoom_out: Callable,
    on_pan: Callable,
):
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            justify_content="space-between",
            align_items="center",
            padding=me.Padding.symmetric(horizontal=16, vertical=8),
            border=me.Border(
                bottom=me.BorderSide(width=1, style="solid", color=me.theme_var("outline-variant"))
            ),
        )
    ):
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=4)):
            me.button("Select", key=SELECT_MODE, on_click=on_mode_click, type="flat" if mode == SELECT_MODE else "stroked")
            me.button("Pan", key=PAN_MODE, on_click=on_mode_click, type="flat" if mode == PAN_MODE else "stroked")
            if mode == PAN_MODE:
                for direction, icon in (("left", "west"), ("up", "north"), ("down", "south"), ("right", "east")):
                    with me.content_button(key=direction, on_click=on_pan, type="icon"):
                        me.icon(icon)

        with me.box(style=me.Style(display="flex", flex_direction="row", gap=8, align_items="center")):
            if has_selection:
                with me.content_button(on_click=on_rotate, type="icon"):
                    me.icon("rotate_right")
                with me.content_button(on_click=on_delete, type="icon"):
                    me.icon("delete")
            with me.content_button(on_click=on_zoom_out, type="icon"):
                me.icon("zoom_out")
            me.text(f"{round(zoom * 100)}%", style=me.Style(font_family="monospace", width=48, text_align="center"))
            with me.content_button(on_click=on_zoom_in, type="icon"):
                me.icon("zoom_in")
