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

"""Blueprint Visualizer run: drawing, rasterization, then parallel renders.

A run moves through
idle -> generating-drawing -> rasterizing -> generating-renders -> complete,
and can end in `error` or `stopped` from any in-flight state. Each run owns a
CancellationToken; submitting again or calling stop() invalidates it, and
every continuation checks the token after each await before touching state.
Remote calls that are already in flight are not aborted, their results are
dropped.
"""

import asyncio
import time
from collections import OrderedDict
from typing import Callable, Protocol

from common.analytics import get_logger
from config.default import Default
from config.viewpoints import ViewpointConfig, get_viewpoints_for_mode
from models.blueprint_visualizer import (
    GenerationMode,
    GenerationSession,
    GenerationStatus,
    RenderResult,
)
from models.requests import GenerationRequest
from models.svg_rasterizer import snapshot_for_generation

logger = get_logger(__name__)

DRAWING_ERROR_MESSAGE = "Failed to generate blueprint. Please try again."
RASTERIZE_ERROR_MESSAGE = "Failed to prepare the blueprint for rendering."
RENDERS_ERROR_MESSAGE = "Failed to generate perspectives."


class GenerationClient(Protocol):
    def generate_drawing(self, prompt: str) -> str: ...

    def generate_styled_render(
        self, prompt: str, viewpoint_label: str, reference_image: str
    ) -> str: ...


class CancellationToken:
    """Invalidated when its run is stopped or superseded by a newer run."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class BlueprintPipeline:
    """Runs one Blueprint Visualizer session at a time."""

    def __init__(
        self,
        client: GenerationClient,
        on_update: Callable[[GenerationSession], None] | None = None,
        rasterizer: Callable[[str], str] = snapshot_for_generation,
        clock: Callable[[], float] = time.monotonic,
        rasterize_timeout: float | None = None,
    ):
        self._client = client
        self._on_update = on_update
        self._rasterizer = rasterizer
        self._clock = clock
        if rasterize_timeout is None:
            rasterize_timeout = Default().RASTERIZE_TIMEOUT_SECONDS
        self._rasterize_timeout = rasterize_timeout
        self._token = CancellationToken()
        self._session = GenerationSession()

    @property
    def session(self) -> GenerationSession:
        return self._session

    def _is_current(self, token: CancellationToken) -> bool:
        return token is self._token and not token.cancelled

    def _notify(self):
        if self._on_update:
            self._on_update(self._session)

    def stop(self):
        """Stops the current run; late results from it are ignored.

        Finished or idle sessions are left as they are.
        """
        self._token.cancel()
        if not self._session.status.is_in_flight:
            return
        logger.info(f"Session {self._session.session_id} stopped")
        self._session.status = GenerationStatus.STOPPED
        self._session.error_message = None
        self._notify()

    async def submit(
        self, prompt: str, mode: GenerationMode | str = GenerationMode.FAST
    ) -> GenerationSession:
        """Starts a new run, superseding any run still in flight.

        Returns the session this call started. It may have been stopped or
        superseded by the time this returns.
        """
        request = GenerationRequest(prompt=prompt, mode=mode)

        self._token.cancel()
        token = CancellationToken()
        self._token = token
        session = GenerationSession(
            prompt=request.prompt,
            mode=request.mode,
            status=GenerationStatus.GENERATING_DRAWING,
        )
        self._session = session
        self._notify()
        logger.info(
            f"Session {session.session_id} started in {request.mode.value} mode"
        )

        start_time = self._clock()
        try:
            markup = await asyncio.to_thread(self._client.generate_drawing, request.prompt)
        except Exception as e:
            if self._is_current(token):
                logger.error(f"Session {session.session_id}: drawing failed: {e}")
                self._fail(DRAWING_ERROR_MESSAGE)
            return session
        if not self._is_current(token):
            return session

        viewpoints = get_viewpoints_for_mode(request.mode)
        session.drawing_markup = markup
        session.drawing_seconds = self._clock() - start_time
        session.status = (
            GenerationStatus.RASTERIZING if viewpoints else GenerationStatus.COMPLETE
        )
        self._notify()
        if not viewpoints:
            return session

        try:
            raster_image = await asyncio.wait_for(
                asyncio.to_thread(self._rasterizer, markup),
                timeout=self._rasterize_timeout,
            )
        except Exception as e:
            if self._is_current(token):
                logger.error(f"Session {session.session_id}: rasterization failed: {e!r}")
                self._fail(RASTERIZE_ERROR_MESSAGE)
            return session
        if not self._is_current(token):
            return session

        session.raster_image = raster_image
        session.status = GenerationStatus.GENERATING_RENDERS
        self._notify()

        await self._generate_renders(token, session, viewpoints)
        return session

    async def _generate_renders(
        self,
        token: CancellationToken,
        session: GenerationSession,
        viewpoints: list[ViewpointConfig],
    ):
        render_start = self._clock()
        try:
            results = await asyncio.gather(
                *[
                    self._render_viewpoint(token, session, viewpoint)
                    for viewpoint in viewpoints
                ],
                return_exceptions=True,
            )
        except Exception as e:
            if self._is_current(token):
                logger.error(f"Session {session.session_id}: render fan-out failed: {e}")
                self._fail(RENDERS_ERROR_MESSAGE)
            return
        if not self._is_current(token):
            return

        # gather() keeps request order, whatever order the calls finished in.
        renders = [result for result in results if isinstance(result, RenderResult)]
        session.render_seconds = self._clock() - render_start
        if not renders:
            logger.error(f"Session {session.session_id}: every viewpoint failed")
            self._fail(RENDERS_ERROR_MESSAGE)
            return

        session.renders = renders
        session.status = GenerationStatus.COMPLETE
        self._notify()
        logger.info(
            f"Session {session.session_id} complete with {len(renders)}/{len(viewpoints)} renders"
        )

    async def _render_viewpoint(
        self,
        token: CancellationToken,
        session: GenerationSession,
        viewpoint: ViewpointConfig,
    ) -> RenderResult | None:
        if not self._is_current(token):
            return None
        try:
            image = await asyncio.to_thread(
                self._client.generate_styled_render,
                session.prompt,
                viewpoint.perspective,
                session.raster_image,
            )
        except Exception as e:
            logger.warning(f"Failed to generate {viewpoint.perspective}: {e}")
            raise
        if not self._is_current(token):
            return None
        return RenderResult(
            id=viewpoint.id,
            label=viewpoint.label,
            image_data_url=image,
            caption=f"{viewpoint.label} of {session.prompt}",
        )

    def _fail(self, message: str):
        self._session.status = GenerationStatus.ERROR
        self._session.error_message = message
        self._notify()


class PipelineRegistry:
    """Pipelines keyed by page session, bounded in size.

    When full, the least recently used pipeline that is not running is
    dropped. Running pipelines are never evicted, so the registry can
    briefly exceed `max_size` while every entry is in flight.
    """

    def __init__(self, factory: Callable[[], BlueprintPipeline], max_size: int):
        self._factory = factory
        self._max_size = max(1, max_size)
        self._pipelines: OrderedDict[str, BlueprintPipeline] = OrderedDict()

    def __len__(self) -> int:
        return len(self._pipelines)

    def __contains__(self, key: str) -> bool:
        return key in self._pipelines

    def get(self, key: str) -> BlueprintPipeline | None:
        pipeline = self._pipelines.get(key)
        if pipeline is not None:
            self._pipelines.move_to_end(key)
        return pipeline

    def get_or_create(self, key: str) -> BlueprintPipeline:
        pipeline = self.get(key)
        if pipeline is None:
            pipeline = self._factory()
            self._pipelines[key] = pipeline
            self._evict(keep=key)
        return pipeline

    def _evict(self, keep: str):
        while len(self._pipelines) > self._max_size:
            idle_key = next(
                (
                    key
                    for key, pipeline in self._pipelines.items()
                    if key != keep and not pipeline.session.status.is_in_flight
                ),
                None,
            )
            if idle_key is None:
                logger.warning(
                    f"Pipeline registry over capacity: {len(self._pipelines)} running"
                )
                return
            self._pipelines[idle_key].stop()
            del self._pipelines[idle_key]
