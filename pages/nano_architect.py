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

"""Nano Architect page: Magic Editor and Blueprint Builder."""

import mesop as me

from common.analytics import get_logger, log_ui_click, track_click
from common.error_handling import GenerationError, MissingCredentialError
from common.utils import to_data_url
from components.credential_notice.credential_notice import credential_notice
from components.download_link.download_link import download_link
from components.header.header import header
from components.nano_architect.builder_toolbar import builder_toolbar
from components.nano_architect.catalog_sidebar import catalog_sidebar
from components.nano_architect.image_editor_panel import image_editor_panel
from components.perspective_overlay.perspective_overlay import perspective_overlay
from config.default import Default
from config.scene_catalog import get_catalog_item
from models.gemini import get_generation_client
from models.svg_rasterizer import export_data_url_png
from services.image_editor import EDIT_ERROR_MESSAGE, apply_edit
from services.scene_editor import SELECT_MODE, LayoutClient, SceneEditor
from state.nano_architect_state import PageState

logger = get_logger(__name__)

PAGE_NAME = "nano_architect"
PAN_STEP = 40
DIRECTIONS = {"left": (-1, 0), "right": (1, 0), "up": (0, -1), "down": (0, 1)}
NUDGE_STEP = 10


def _editor(state: PageState, client: LayoutClient | None = None) -> SceneEditor:
    return SceneEditor.from_state(state.scene, client=client)


def _save(state: PageState, editor: SceneEditor):
    state.scene = editor.to_state()


@me.page(
    path="/nano_architect",
    title="Nano Architect",
)
def nano_architect_page():
    state = me.state(PageState)
    with me.box(style=me.Style(height="100vh", display="flex", flex_direction="column", padding=me.Padding.symmetric(horizontal=24))):
        header("Nano Architect", "explore")
        if not Default().has_credentials():
            credential_notice(
                "This application requires a Google GenAI API Key. "
                "Please ensure GEMINI_API_KEY is configured in the environment."
            )
            return

        with me.box(style=me.Style(display="flex", flex_direction="row", gap=8, margin=me.Margin(bottom=16))):
            me.button("Image Editor", key="editor", on_click=on_view_click, type="flat" if state.view == "editor" else "stroked")
            me.button("Blueprint Builder", key="architect", on_click=on_view_click, type="flat" if state.view == "architect" else "stroked")

        if state.view == "editor":
            image_editor_panel(
                original_image=state.original_image,
                processed_image=state.processed_image,
                prompt=state.edit_prompt,
                is_editing=state.is_editing,
                error=state.edit_error,
                on_upload=on_image_upload,
                on_prompt_blur=on_edit_prompt_blur,
                on_edit=on_edit_click,
                on_download=on_edited_download,
            )
        else:
            blueprint_builder()

        if state.show_snackbar:
            me.text(state.snackbar_message, style=me.Style(margin=me.Margin(top=8), font_style="italic"))
        if state.download_href:
            download_link(href=state.download_href, filename=state.download_filename)


def blueprint_builder():
    state = me.state(PageState)
    editor = _editor(state)

    with me.box(style=me.Style(display="flex", flex_direction="row", flex_grow=1, min_height=600)):
        catalog_sidebar(on_add_item=on_add_item)

        with me.box(style=me.Style(display="flex", flex_direction="column", flex_grow=1)):
            builder_toolbar(
                mode=editor.mode,
                has_selection=editor.selected_item is not None,
                zoom=editor.viewport.zoom,
                on_mode_click=on_mode_click,
                on_rotate=on_rotate_click,
                on_delete=on_delete_click,
                on_zoom_in=on_zoom_in_click,
                on_zoom_out=on_zoom_out_click,
                on_pan=on_pan_click,
            )

            with me.box(style=me.Style(position="relative", flex_grow=1, display="flex", flex_direction="row")):
                me.html(
                    editor.to_svg(),
                    mode="sandboxed",
                    style=me.Style(flex_grow=1, height=600, background="#0f172a"),
                )
                _item_list(editor)
                perspective_overlay(
                    image_src=editor.rendered_perspective or "",
                    on_close=on_close_perspective,
                )

            _command_bar(state, editor)

    if state.alert_message:
        _alert(state.alert_message)


def _item_list(editor: SceneEditor):
    """Click-to-select list; selection only works in select mode."""
    with me.box(style=me.Style(width=200, overflow_y="auto", padding=me.Padding.all(8), display="flex", flex_direction="column", gap=4)):
        me.text("Items", style=me.Style(font_weight="bold", font_size=12))
        for index, item in enumerate(editor.items):
            catalog_item = get_catalog_item(item.type)
            label = f"{index + 1}. {catalog_item.label if catalog_item else item.type.value}"
            me.button(
                label,
                key=item.id,
                on_click=on_item_click,
                disabled=editor.mode != SELECT_MODE,
                type="flat" if item.id == editor.selected_id else "basic",
            )
        if editor.selected_item is not None:
            me.text("Move", style=me.Style(font_weight="bold", font_size=12, margin=me.Margin(top=8)))
            with me.box(style=me.Style(display="flex", flex_direction="row", gap=4)):
                for direction, icon in (("left", "west"), ("up", "north"), ("down", "south"), ("right", "east")):
                    with me.content_button(key=f"nudge-{direction}", on_click=on_nudge_click, type="icon"):
                        me.icon(icon)


def _command_bar(state: PageState, editor: SceneEditor):
    with me.box(style=me.Style(display="flex", flex_direction="row", gap=8, align_items="center", padding=me.Padding.all(16))):
        me.input(
            label="Describe a layout (e.g., 'A large square room with a bed and a desk near the window')",
            value=state.layout_prompt,
            on_blur=on_layout_prompt_blur,
            on_enter=on_layout_prompt_enter,
            style=me.Style(flex_grow=1),
        )
        if state.is_generating:
            me.progress_spinner(diameter=24)
        me.button(
            "Generate Layout",
            on_click=on_generate_layout_click,
            type="flat",
            disabled=state.is_generating or not state.layout_prompt,
        )
        me.button(
            "Render View",
            on_click=on_render_view_click,
            type="stroked",
            disabled=state.is_generating or not editor.items,
        )


def _alert(message: str):
    with me.box(
        style=me.Style(
            background="rgba(0, 0, 0, 0.6)",
            position="fixed",
            top=0,
            left=0,
            width="100%",
            height="100%",
            display="flex",
            align_items="center",
            justify_content="center",
            z_index=1000,
        )
    ):
        with me.box(style=me.Style(background=me.theme_var("surface"), padding=me.Padding.all(24), border_radius=12, display="flex", flex_direction="column", gap=16)):
            me.text(message)
            me.button("OK", on_click=on_alert_dismiss, type="flat")


# --- Event Handlers ---


def on_view_click(e: me.ClickEvent):
    state = me.state(PageState)
    state.view = e.key


def on_image_upload(e: me.UploadEvent):
    state = me.state(PageState)
    file = e.files[0]
    state.original_image = to_data_url(file.getvalue(), file.mime_type)
    state.processed_image = ""
    state.download_href = ""
    state.edit_error = ""
    yield


def on_edit_prompt_blur(e: me.InputBlurEvent):
    state = me.state(PageState)
    state.edit_prompt = e.value


@track_click(element_id="magic_editor_generate_button", page_name=PAGE_NAME)
def on_edit_click(e: me.ClickEvent):
    state = me.state(PageState)
    if not state.original_image or not state.edit_prompt:
        return
    state.is_editing = True
    state.edit_error = ""
    state.download_href = ""
    yield

    try:
        state.processed_image = apply_edit(get_generation_client(), state.original_image, state.edit_prompt)
    except MissingCredentialError as ex:
        state.edit_error = ex.message
    except Exception as ex:
        logger.error(f"Error editing image: {ex}")
        state.edit_error = EDIT_ERROR_MESSAGE
    finally:
        state.is_editing = False
        yield


def on_edited_download(e: me.ClickEvent):
    state = me.state(PageState)
    try:
        download = export_data_url_png(state.processed_image, subject="gemini-edited")
        state.download_href = download.data_url
        state.download_filename = download.filename
        state.snackbar_message = f"{download.filename} is ready"
    except GenerationError as ex:
        state.snackbar_message = f"Download failed: {ex.message}"
    state.show_snackbar = True
    yield


def on_add_item(e: me.ClickEvent):
    state = me.state(PageState)
    log_ui_click(element_id="builder_add_item", page_name=PAGE_NAME, extras={"type": e.key})
    editor = _editor(state)
    editor.add_item(e.key)
    _save(state, editor)


def on_item_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    if editor.select_item(e.key):
        _save(state, editor)


def on_nudge_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    item = editor.selected_item
    if item is None:
        return
    dx, dy = DIRECTIONS[e.key.removeprefix("nudge-")]
    editor.move_selected(item.x + dx * NUDGE_STEP, item.y + dy * NUDGE_STEP)
    _save(state, editor)


def on_mode_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.set_mode(e.key)
    _save(state, editor)


def on_pan_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    dx, dy = DIRECTIONS[e.key]
    editor.start_pan(0, 0)
    editor.pan_to(dx * PAN_STEP, dy * PAN_STEP)
    editor.end_pan()
    _save(state, editor)


def on_rotate_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.rotate_selected()
    _save(state, editor)


def on_delete_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.remove_selected()
    _save(state, editor)


def on_zoom_in_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.zoom_in()
    _save(state, editor)


def on_zoom_out_click(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.zoom_out()
    _save(state, editor)


def on_close_perspective(e: me.ClickEvent):
    state = me.state(PageState)
    editor = _editor(state)
    editor.close_perspective()
    _save(state, editor)


def on_layout_prompt_blur(e: me.InputBlurEvent):
    state = me.state(PageState)
    state.layout_prompt = e.value


def on_layout_prompt_enter(e: me.InputEnterEvent):
    state = me.state(PageState)
    state.layout_prompt = e.value
    yield from _generate_layout(state)


@track_click(element_id="builder_generate_layout_button", page_name=PAGE_NAME)
def on_generate_layout_click(e: me.ClickEvent):
    state = me.state(PageState)
    yield from _generate_layout(state)


def _generate_layout(state: PageState):
    if not state.layout_prompt or state.is_generating:
        return
    try:
        client = get_generation_client()
    except MissingCredentialError as ex:
        state.alert_message = ex.message
        yield
        return

    state.is_generating = True
    yield

    # Edits processed while the spinner was shown live in state.scene.
    editor = _editor(state, client)
    editor.generate_layout(state.layout_prompt)
    state.alert_message = editor.alert_message or ""
    _save(state, editor)
    state.is_generating = False
    yield


@track_click(element_id="builder_render_view_button", page_name=PAGE_NAME)
def on_render_view_click(e: me.ClickEvent):
    state = me.state(PageState)
    try:
        client = get_generation_client()
    except MissingCredentialError as ex:
        state.alert_message = ex.message
        yield
        return

    state.is_generating = True
    yield

    editor = _editor(state, client)
    editor.render_perspective()
    _save(state, editor)
    state.is_generating = False
    yield


def on_alert_dismiss(e: me.ClickEvent):
    state = me.state(PageState)
    state.alert_message = ""
