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
Component catalog sidebar for the blueprint builder.
"""

from typing import Callable
import mesop as me

from config.scene_catalog import CATEGORIES, get_catalog_by_category


@me.component
def catalog_sidebar(on_add_item: Callable):
    with me.box(
        style=me.Style(
            width=240,
            display="flex",
            flex_direction="column",
            gap=20,
            padding=me.Padding.all(16),
            border=me.Border(
                right=me.BorderSide(width=1, style="solid", color=me.theme_var("outline-variant"))
            ),
        )
    ):
        me.text("Component Catalog", style=me.Style(font_weight="bold"))
        for category in CATEGORIES:
            with me.box(style=me.Style(display="flex", flex_direction="column", gap=8)):
                me.text(category.upper(), style=me.Style(font_size=11, font_weight="bold", color=me.theme_var("on-surface-variant")))
                with me.box(style=me.Style(display="grid", grid_template_columns="1fr 1fr", gap=8)):
                    for item in get_catalog_by_category(category):
                        with me.content_button(key=item.type.value, on_click=on_add_item, type="stroked"):
                            with me.box(style=me.Style(display="flex", flex_direction="column", align_items="center")):
                                me.icon(item.icon)
                                me.text(item.label, style=me.Style(font_size=10))
