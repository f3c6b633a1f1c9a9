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

"""Blueprint Visualizer page."""

import asyncio
import uuid
from dataclasses import asdict

import mesop as me

from common.analytics import log_ui_click, track_click
from common.error_handling import GenerationError, MissingCredentialError
from components.blueprint_visualizer.blueprint_viewer import blueprint_viewer
from components.blueprint_visualizer.input_section import input_section
from components.blueprint_visualizer.render_gallery import render_gallery
from components.credential_notice.credential_notice import credential_notice
from components.download_link.download_link import download_link
from components.header.header import header
from config.default import Default
from models.blueprint_visualizer import GenerationMode, GenerationSession, GenerationStatus
from models.gemini import get_generation_client
from models.svg_rasterizer import PngDownload, export_data_url_png, export_svg_png
from services.blueprint_pipeline import BlueprintPipeline, PipelineRegistry
from state.blueprint_visualizer_state import PageState

PAGE_NAME = "blueprint_visualizer"

# How often a running generation pushes its progress to the page
POLL_INTERVAL_SECONDS = 0.5

# Pipelines are not serializable, so page state only holds a key into this.
_PIPELINES = PipelineRegistry(
    lambda: BlueprintPipeline(get_generation_client()),
    max_size=Default().MAX_PIPELINES,
)


def _get_pipeline(state: PageState) -> BlueprintPipeline:
    if not state.session_key:
        state.session_key = str(uuid.uuid4())
    return _PIPELINES.get_or_create(state.session_key)


def _sync_state(state: PageState, session: GenerationSession):
    state.status = session.status.value
    state.svg_code = session.drawing_markup or ""
    state.blueprint_image = session.raster_image or ""
    state.renders = [asdict(r) for r in session.renders]
    state.error_message = session.error_message or ""
    state.blueprint_time = session.drawing_seconds
    state.render_time = session.render_seconds


@me.page(
    path="/blueprint_visualizer",
    title="Blueprint Visualizer",
)
def blueprint_visualizer_page():
    with me.box(style=me.Style(max_width=1280, margin=me.Margin.symmetric(horizontal="auto"), padding=me.Padding.all(24))):
        header("Blueprint Visualizer", "architecture", subtitle="Powered by Gemini 2.5")
        if not Default().has_credentials():
            credential_notice(
                "This tool requires a Google GenAI API Key. "
                "Please ensure GEMINI_API_KEY is configured in the environment."
            )
            return
        page_content()


def page_content():
    state = me.state(PageState)

    input_section(
        prompt=state.prompt,
        mode=state.mode,
        status=state.status,
        on_prompt_blur=on_prompt_blur,
        on_mode_change=on_mode_change,
        on_generate=on_generate_click,
        on_stop=on_stop_click,
    )

    if state.error_message:
        me.text(state.error_message, style=me.Style(color="red", margin=me.Margin(bottom=16)))

    with me.box(
        style=me.Style(
            display="grid",
            grid_template_columns="2fr 3fr",
            gap=32,
        )
    ):
        blueprint_viewer(
            svg_code=state.svg_code,
            blueprint_time=state.blueprint_time,
            show_code=state.show_code,
            on_toggle_code=on_toggle_code,
            on_download=on_download_blueprint,
        )

        with me.box(style=me.Style(display="flex", flex_direction="column", gap=10)):
            with me.box(style=me.Style(display="flex", flex_direction="row", gap=8, align_items="center")):
                me.text("Rendered Perspectives", type="headline-6")
                if state.render_time > 0:
                    me.text(f"{state.render_time:.2f}s", style=me.Style(font_family="monospace", color="#34d399"))

            if state.status == GenerationStatus.GENERATING_RENDERS.value:
                with me.box(style=me.Style(display="flex", flex_direction="column", align_items="center", gap=16, padding=me.Padding.all(48))):
                    me.progress_spinner()
                    me.text(
                        f"Rendering {'draft' if state.mode == GenerationMode.FAST.value else '3D'} visualizations..."
                    )
            elif state.renders:
                render_gallery(renders=state.renders, on_download=on_download_render)
            else:
                me.text(_empty_renders_message(state), style=me.Style(color=me.theme_var("on-surface-variant"), padding=me.Padding.all(48)))

    if state.show_snackbar:
        me.text(state.snackbar_message, style=me.Style(margin=me.Margin(top=16), font_style="italic"))
    if state.download_href:
        download_link(href=state.download_href, filename=state.download_filename)


def _empty_renders_message(state: PageState) -> str:
    if state.status == GenerationStatus.STOPPED.value:
        return "Generation stopped"
    if state.mode == GenerationMode.BLUEPRINT_ONLY.value and state.svg_code:
        return "Blueprint only mode active (no renders)"
    return "Rendered views will appear here"


# --- Event Handlers ---


def on_prompt_blur(e: me.InputBlurEvent):
    state = me.state(PageState)
    state.prompt = e.value


def on_mode_change(e: me.SelectSelectionChangeEvent):
    state = me.state(PageState)
    state.mode = e.value


def on_toggle_code(e: me.ClickEvent):
    state = me.state(PageState)
    state.show_code = not state.show_code


async def on_generate_click(e: me.ClickEvent):
    """Runs a generation, pushing each state change to the page."""
    state = me.state(PageState)
    log_ui_click(element_id="blueprint_generate_button", page_name=PAGE_NAME, extras={"mode": state.mode})
    if not state.prompt.strip():
        state.error_message = "Please describe the space to generate."
        yield
        return

    try:
        pipeline = _get_pipeline(state)
    except MissingCredentialError as ex:
        state.error_message = ex.message
        yield
        return

    state.show_snackbar = False
    state.download_href = ""
    state.download_filename = ""
    task = asyncio.create_task(pipeline.submit(state.prompt, state.mode))
    while not task.done():
        await asyncio.wait({task}, timeout=POLL_INTERVAL_SECONDS)
        _sync_state(state, pipeline.session)
        yield

    try:
        task.result()
    except Exception as ex:
        state.status = GenerationStatus.ERROR.value
        state.error_message = f"An error occurred during generation: {ex}"
    yield


@track_click(element_id="blueprint_stop_button", page_name=PAGE_NAME)
def on_stop_click(e: me.ClickEvent):
    state = me.state(PageState)
    pipeline = _PIPELINES.get(state.session_key)
    if pipeline:
        pipeline.stop()
        _sync_state(state, pipeline.session)
    yield


def _show_snackbar(state: PageState, message: str):
    state.snackbar_message = message
    state.show_snackbar = True


def _offer_download(state: PageState, download: PngDownload):
    state.download_href = download.data_url
    state.download_filename = download.filename
    _show_snackbar(state, f"{download.filename} is ready")


@track_click(element_id="blueprint_download_button", page_name=PAGE_NAME)
def on_download_blueprint(e: me.ClickEvent):
    state = me.state(PageState)
    try:
        _offer_download(state, export_svg_png(state.svg_code, subject="blueprint"))
    except GenerationError as ex:
        _show_snackbar(state, f"Download failed: {ex.message}")
    yield


@track_click(element_id="render_download_button", page_name=PAGE_NAME)
def on_download_render(e: me.ClickEvent):
    state = me.state(PageState)
    render = next((r for r in state.renders if r["id"] == e.key), None)
    if not render:
        return
    try:
        download = export_data_url_png(
            render["image_data_url"], subject=render["label"].lower().replace(" ", "-")
        )
        _offer_download(state, download)
    except GenerationError as ex:
        _show_snackbar(state, f"Download failed: {ex.message}")
    yield
