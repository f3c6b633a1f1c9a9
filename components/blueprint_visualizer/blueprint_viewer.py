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
Component for displaying the generated SVG blueprint.
"""

from typing import Callable
import mesop as me


PLACEHOLDER_STYLE = me.Style(
    height=400,
    border=me.Border.all(
        me.BorderSide(width=2, style="dashed", color=me.theme_var("outline-variant")),
    ),
    border_radius=8,
    display="flex",
    align_items="center",
    justify_content="center",
    flex_direction="column",
    gap=8,
)


@me.component
def blueprint_viewer(
    svg_code: str,
    blueprint_time: float,
    show_code: bool,
    on_toggle_code: Callable,
    on_download: Callable,
):
    """
    Component for displaying the SVG blueprint, its source and a download action.
    """
    with me.box(style=me.Style(display="flex", flex_direction="column", gap=10)):
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=8, align_items="center")):
            me.text("Blueprint Layout", type="headline-6")
            if blueprint_time > 0:
                me.text(f"{blueprint_time:.2f}s", style=me.Style(font_family="monospace", color="#34d399"))

        if not svg_code:
            with me.box(style=PLACEHOLDER_STYLE):
                me.icon("architecture")
                me.text("Blueprint will appear here")
            return

        with me.box(style=me.Style(display="flex", flex_direction="row", gap=8)):
            me.button("Hide code" if show_code else "Show code", on_click=on_toggle_code, type="stroked")
            me.button("Download PNG", on_click=on_download, type="stroked")

        if show_code:
            me.code(svg_code, language="xml")
        else:
            me.html(
                svg_code,
                mode="sandboxed",
                style=me.Style(width="100%", height=400, background="white", border_radius=8),
            )
