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

"""Shown in place of a tool when no Gemini API key is configured."""

import mesop as me


@me.component
def credential_notice(message: str):
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            align_items="center",
            gap=12,
            padding=me.Padding.all(32),
            margin=me.Margin.symmetric(vertical=48, horizontal="auto"),
            max_width=480,
            border=me.Border.all(
                me.BorderSide(width=1, style="solid", color=me.theme_var("error"))
            ),
            border_radius=16,
        )
    ):
        me.icon("warning", style=me.Style(color=me.theme_var("error"), font_size=48, width=48, height=48))
        me.text("Missing API Key", type="headline-5")
        me.text(message, style=me.Style(text_align="center"))
