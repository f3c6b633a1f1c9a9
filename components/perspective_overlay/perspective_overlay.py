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

"""Overlay that shows a rendered perspective above the builder canvas."""

import mesop as me
import typing


@me.component
def perspective_overlay(
    *,
    image_src: str,
    on_close: typing.Callable[[me.ClickEvent], typing.Any],
    title: str = "Gemini Render",
):
    """Render the image in a dark overlay covering the canvas area."""
    with me.box(
        style=me.Style(
            background="rgba(0, 0, 0, 0.9)",
            display="flex" if image_src else "none",
            flex_direction="column",
            position="absolute",
            top=16,
            left=16,
            right=16,
            bottom=16,
            border_radius=12,
            overflow="hidden",
            z_index=20,
        ),
    ):
        with me.box(
            style=me.Style(
                display="flex",
                justify_content="space-between",
                align_items="center",
                padding=me.Padding.symmetric(horizontal=12, vertical=8),
            )
        ):
            me.text(title, style=me.Style(color="white", font_weight="bold", font_size=12))
            me.button("Close", on_click=on_close, style=me.Style(color="white"))

        with me.box(
            style=me.Style(
                flex_grow=1,
                display="flex",
                align_items="center",
                justify_content="center",
                padding=me.Padding.all(16),
            )
        ):
            if image_src:
                me.image(src=image_src, style=me.Style(max_width="100%", max_height="100%", border_radius=4))
