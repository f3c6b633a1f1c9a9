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
Gallery of rendered perspectives, in the order they were requested.
"""

from typing import Callable
import mesop as me


@me.component
def render_gallery(renders: list[dict], on_download: Callable):
    with me.box(
        style=me.Style(
            display="grid",
            grid_template_columns="repeat(auto-fill, minmax(320px, 1fr))",
            gap=16,
        )
    ):
        for render in renders:
            with me.box(
                key=render["id"],
                style=me.Style(
                    display="flex",
                    flex_direction="column",
                    gap=8,
                    border_radius=12,
                    overflow="hidden",
                    background=me.theme_var("surface-container"),
                ),
            ):
                me.image(
                    src=render["image_data_url"],
                    style=me.Style(width="100%", object_fit="cover"),
                )
                with me.box(style=me.Style(padding=me.Padding.all(12), display="flex", flex_direction="column", gap=4)):
                    me.text(render["label"], style=me.Style(font_weight="bold"))
                    me.text(render["caption"], style=me.Style(font_size=12, color=me.theme_var("on-surface-variant")))
                    me.button("Download", key=render["id"], on_click=on_download, type="stroked")
