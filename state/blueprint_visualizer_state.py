"""
State for the Blueprint Visualizer page.
"""

from dataclasses import field
import mesop as me


@me.stateclass
class PageState:
    """State for the Blueprint Visualizer page."""

    # pylint: disable=E3701:invalid-field-call

    prompt: str = ""
    mode: str = "fast"

    # Key into the page's pipeline registry
    session_key: str = ""

    status: str = "idle"
    svg_code: str = ""
    blueprint_image: str = ""
    renders: list[dict] = field(default_factory=list)
    error_message: str = ""
    blueprint_time: float = 0.0
    render_time: float = 0.0

    show_code: bool = False
    show_snackbar: bool = False
    snackbar_message: str = ""

    # Latest PNG prepared for the browser to save
    download_href: str = ""
    download_filename: str = ""
