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

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from common.error_handling import MissingCredentialError

load_dotenv(override=True)


@dataclass
class Default:
    """Defaults class"""

    # pylint: disable=invalid-name

    # Gemini API credential
    GEMINI_API_KEY: str | None = os.environ.get(
        "GEMINI_API_KEY", os.environ.get("GOOGLE_API_KEY")
    )

    # Models
    DRAWING_MODEL_ID: str = os.environ.get("DRAWING_MODEL_ID", "gemini-2.5-flash")
    IMAGE_MODEL_ID: str = os.environ.get("IMAGE_MODEL_ID", "gemini-2.5-flash-image")
    LAYOUT_MODEL_ID: str = os.environ.get("LAYOUT_MODEL_ID", "gemini-2.5-flash")

    # Lower temperature for more precise SVG code
    DRAWING_TEMPERATURE: float = float(os.environ.get("DRAWING_TEMPERATURE", "0.3"))

    # Remote call policy
    REQUEST_TIMEOUT_SECONDS: int = int(os.environ.get("REQUEST_TIMEOUT_SECONDS", "120"))
    TRANSIENT_RETRIES: int = int(os.environ.get("TRANSIENT_RETRIES", "1"))

    # Rasterization
    RASTERIZE_TIMEOUT_SECONDS: float = float(
        os.environ.get("RASTERIZE_TIMEOUT_SECONDS", "30")
    )
    SNAPSHOT_SIZE: int = int(os.environ.get("SNAPSHOT_SIZE", "1024"))
    EXPORT_SIZE: int = int(os.environ.get("EXPORT_SIZE", "2048"))

    # Blueprint Visualizer pipelines kept in memory across page sessions
    MAX_PIPELINES: int = int(os.environ.get("MAX_PIPELINES", "100"))

    def has_credentials(self) -> bool:
        return bool(self.GEMINI_API_KEY)

    def require_credentials(self) -> str:
        """Returns the API key, or raises if it is not configured."""
        if not self.has_credentials():
            raise MissingCredentialError(
                "Missing API Key. Please ensure GEMINI_API_KEY is configured in the environment."
            )
        return self.GEMINI_API_KEY
