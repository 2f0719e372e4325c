"""Configuration panel package."""

from .controller import SAVE_ERROR, SAVE_SUCCESS, TEST_ERROR, TEST_FAILED, ConfigurationPanel
from .render import render_panel
from .state import (
    MESSAGE_TIMEOUT_SECONDS,
    PanelMessage,
    PanelState,
    apply_change,
    apply_form,
    diff_settings,
    toggle_library,
)

__all__ = [
    "ConfigurationPanel",
    "SAVE_ERROR",
    "SAVE_SUCCESS",
    "TEST_ERROR",
    "TEST_FAILED",
    "render_panel",
    "MESSAGE_TIMEOUT_SECONDS",
    "PanelMessage",
    "PanelState",
    "apply_change",
    "apply_form",
    "diff_settings",
    "toggle_library",
]
