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
Magic Editor: upload an image and describe how to change it.
"""

from typing import Callable
import mesop as me


IMAGE_PANEL_STYLE = me.Style(
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
    flex_grow=1,
)


@me.component
def image_editor_panel(
    original_image: str,
    processed_image: str,
    prompt: str,
    is_editing: bool,
    error: str,
    on_upload: Callable,
    on_prompt_blur: Callable,
    on_edit: Callable,
    on_download: Callable,
):
    with me.box(style=me.Style(display="flex", flex_direction="column", gap=16, padding=me.Padding.all(24))):
        me.text("Magic Editor", type="headline-6")
        me.text(
            "Powered by Gemini 2.5 Flash Image. Describe how you want to change the image.",
            style=me.Style(color=me.theme_var("on-surface-variant")),
        )
        me.uploader(
            label="Upload Image",
            on_upload=on_upload,
            accepted_file_types=["image/jpeg", "image/png", "image/webp"],
        )
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=16)):
            with me.box(style=IMAGE_PANEL_STYLE):
                if original_image:
                    me.image(src=original_image, style=me.Style(max_height="100%", max_width="100%", object_fit="contain"))
                else:
                    me.icon("image")
                    me.text("Original")
            with me.box(style=IMAGE_PANEL_STYLE):
                if is_editing:
                    me.progress_spinner()
                elif processed_image:
                    me.image(src=processed_image, style=me.Style(max_height="100%", max_width="100%", object_fit="contain"))
                else:
                    me.icon("auto_fix_high")
                    me.text("Result")
        me.textarea(
            label="e.g. Add a retro filter, or remove the person in the background",
            value=prompt,
            on_blur=on_prompt_blur,
            rows=2,
            style=me.Style(width="100%"),
        )
        with me.box(style=me.Style(display="flex", flex_direction="row", gap=8)):
            me.button(
                "Generate",
                on_click=on_edit,
                type="flat",
                disabled=is_editing or not original_image,
            )
            if processed_image:
                me.button("Download", on_click=on_download, type="stroked")
        if error:
            me.text(error, style=me.Style(color="red"))
