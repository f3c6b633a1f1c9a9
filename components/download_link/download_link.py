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

"""Browser download link for a generated PNG."""

import html

import mesop as me


@me.component
def download_link(href: str, filename: str, label: str = "Save"):
    """Anchor with a `download` attribute, so the browser saves `href` as `filename`."""
    me.html(
        f'<a href="{html.escape(href, quote=True)}" download="{html.escape(filename, quote=True)}" '
        'style="font-family: sans-serif; font-size: 14px;">'
        f"{html.escape(label)} {html.escape(filename)}</a>",
        style=me.Style(height=32),
    )
