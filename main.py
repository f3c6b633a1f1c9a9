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

"""Entry point: `mesop main.py` serves both tools."""

import mesop as me

from common.analytics import log_page_view
from components.header.header import header
import pages.blueprint_visualizer  # noqa: F401  registers /blueprint_visualizer
import pages.nano_architect  # noqa: F401  registers /nano_architect


def on_load(e: me.LoadEvent):
    log_page_view("home")


@me.page(path="/", title="Blueprint Studio", on_load=on_load)
def home_page():
    with me.box(style=me.Style(max_width=960, margin=me.Margin.symmetric(horizontal="auto"), padding=me.Padding.all(24))):
        header("Blueprint Studio", "home")
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=16)):
            me.link(text="Blueprint Visualizer", url="/blueprint_visualizer")
            me.link(text="Nano Architect", url="/nano_architect")
