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

"""Page header with title, icon and an optional subtitle."""

import mesop as me


@me.component
def header(title: str, icon: str, subtitle: str = ""):
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="row",
            align_items="center",
            gap=12,
            padding=me.Padding.symmetric(vertical=16),
            border=me.Border(
                bottom=me.BorderSide(
                    width=1, style="solid", color=me.theme_var("outline-variant")
                )
            ),
            margin=me.Margin(bottom=24),
        )
    ):
        me.icon(icon, style=me.Style(color=me.theme_var("primary")))
        me.text(title, type="headline-5", style=me.Style(font_weight="bold"))
        if subtitle:
            me.text(
                subtitle,
                style=me.Style(color=me.theme_var("on-surface-variant"), font_size=12),
            )
