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

from typing import Protocol

from common.analytics import get_logger
from common.utils import get_image_dimensions_from_base64, split_data_url, to_data_url

logger = get_logger(__name__)

EDIT_ERROR_MESSAGE = "Failed to process image. Please try a different prompt or image."


class ImageEditClient(Protocol):
    def edit_image(
        self, image_base64: str, edit_prompt: str, mime_type: str = "image/png"
    ) -> str: ...


def apply_edit(client: ImageEditClient, source_data_url: str, prompt: str) -> str:
    """Edits an uploaded image with a text instruction.

    Args:
        client: The generation client.
        source_data_url: The uploaded image as a data URL.
        prompt: e.g. "Add a retro filter" or "Remove the person".

    Returns:
        The edited image as a data URL, labelled with the source MIME type.
    """
    if not source_data_url or not prompt:
        raise ValueError("An image and an edit prompt are required.")
    mime_type, data = split_data_url(source_data_url)
    logger.info(
        f"Editing {mime_type} image of size {get_image_dimensions_from_base64(data)}"
    )
    result = client.edit_image(data, prompt, mime_type)
    return to_data_url(result, mime_type)
