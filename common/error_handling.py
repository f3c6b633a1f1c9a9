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


class GenerationError(Exception):
    """Base exception for blueprint and image generation errors."""

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class MissingCredentialError(GenerationError):
    """The Gemini API key is not configured."""
    pass


class InvalidDrawingError(GenerationError):
    """The model response could not be parsed as an SVG drawing."""
    pass


class NoImageReturnedError(GenerationError):
    """The model call succeeded but returned no inline image part."""
    pass


class NoLayoutError(GenerationError):
    """The layout call returned an empty body."""
    pass


class LayoutParseError(GenerationError):
    """The layout call returned a body that is not valid layout JSON."""
    pass


class RasterizationError(GenerationError):
    """SVG markup could not be decoded into a bitmap."""
    pass
