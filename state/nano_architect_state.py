"""
State for the Nano Architect page.
"""

from dataclasses import field
import mesop as me


@me.stateclass
class PageState:
    """State for the Nano Architect page."""

    # pylint: disable=E3701:invalid-field-call

    view: str = "editor"  # "editor" or "architect"

    # Image editor
    original_image: str = ""
    processed_image: str = ""
    edit_prompt: str = ""
    is_editing: bool = False
    edit_error: str = ""

    # Blueprint builder, serialized SceneEditor
    scene: dict = field(default_factory=dict)
    layout_prompt: str = ""
    is_generating: bool = False
    alert_message: str = ""

    show_snackbar: bool = False
    snackbar_message: str = ""

    # Latest PNG prepared for the browser to save
    download_href: str = ""
    download_filename: str = ""
