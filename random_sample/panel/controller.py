"""Configuration panel controller."""

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional

from random_sample.errors import HostServiceError
from random_sample.library.base import BaseLibraryManager, HostUser
from random_sample.models import QueryResult, RandomSampleRequest
from random_sample.plugin_config.base import BasePluginConfigurationStore
from random_sample.registration import SectionRegistrar, build_section_descriptor
from random_sample.settings import SECTION_KEY, RandomSampleSettings
from .render import render_panel
from .state import PanelMessage, PanelState, apply_change, apply_form, diff_settings, toggle_library


logger = logging.getLogger(__name__)

SAVE_SUCCESS = "Configuration saved successfully!"
SAVE_ERROR = "Error saving configuration"
TEST_FAILED = "Test failed. Check your configuration."
TEST_ERROR = "Test error occurred."

SampleFunction = Callable[[RandomSampleRequest], QueryResult]


class ConfigurationPanel:
    """Operator panel for the random sample section.

    Holds a PanelState and replaces it through the pure functions in
    panel.state; host calls happen only in init, save and test. Every
    host failure is logged and turned into a generic message. Save and
    test are not coordinated with each other.

    Attributes:
        state: Current panel state
    """

    def __init__(
        self,
        library_manager: BaseLibraryManager,
        config_store: BasePluginConfigurationStore,
        registrar: SectionRegistrar,
        sample: SampleFunction,
        user: HostUser,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the panel.

        Args:
            library_manager: Source of the libraries the user can pick
            config_store: Plugin configuration store holding the settings
            registrar: Home-screen section registrar
            sample: Sampling operation the Test action calls
            user: User operating the panel
            clock: Monotonic clock used for message expiry
        """
        self.library_manager = library_manager
        self.config_store = config_store
        self.registrar = registrar
        self.sample = sample
        self.user = user
        self.clock = clock
        self.state = PanelState()

    @property
    def settings(self) -> RandomSampleSettings:
        return self.state.settings

    def init(self) -> PanelState:
        """Fetch available libraries, then load the persisted settings."""
        self._load_available_libraries()
        self._load_configuration()
        return self.state

    def _load_available_libraries(self) -> None:
        try:
            libraries = self.library_manager.get_user_libraries(self.user)
        except HostServiceError as e:
            logger.error(f"Failed to load libraries: {e}")
            return
        self.state = replace(self.state, libraries=tuple(libraries))

    def _load_configuration(self) -> None:
        try:
            raw = self.config_store.load_section(SECTION_KEY)
        except HostServiceError as e:
            logger.error(f"Error loading configuration: {e}")
            return
        self.state = replace(self.state, settings=RandomSampleSettings.from_section(raw))

    def _set_settings(self, settings: RandomSampleSettings) -> None:
        changed = diff_settings(self.state.settings, settings)
        if changed:
            logger.debug(f"Panel settings changed: {changed}")
        self.state = replace(self.state, settings=settings)

    def change(self, name: str, value: Any) -> RandomSampleSettings:
        """Change one scalar input in memory."""
        self._set_settings(apply_change(self.state.settings, name, value))
        return self.state.settings

    def set_library(self, library_id: str, checked: bool) -> RandomSampleSettings:
        """Select or deselect one library in memory."""
        self._set_settings(toggle_library(self.state.settings, library_id, checked))
        return self.state.settings

    def submit_form(self, form: Dict[str, List[str]]) -> RandomSampleSettings:
        """Apply a whole submitted form in memory."""
        self._set_settings(apply_form(self.state.settings, form, self.state.libraries))
        return self.state.settings

    def save(self) -> bool:
        """Persist the settings, then register the section.

        Registration is best-effort: its failure is logged and does not
        change the outcome of the save.

        Returns:
            True if the settings were persisted
        """
        settings = self.state.settings
        try:
            self.config_store.save_section(SECTION_KEY, settings.to_section())
        except HostServiceError as e:
            logger.error(f"Error saving configuration: {e}")
            self.show_message(SAVE_ERROR, "error")
            return False

        result = self.registrar.register(build_section_descriptor(settings), self.user.token)
        if not result.success:
            logger.warning(f"Settings saved but section registration failed: {result.error}")

        self.show_message(SAVE_SUCCESS, "success")
        return True

    def test(self) -> Optional[int]:
        """Run the sampling operation with the in-memory settings.

        Returns:
            Number of items returned, or None if the test failed
        """
        request = self.state.settings.to_request()
        error = request.validation_error()
        if error:
            logger.info(f"Test rejected: {error}")
            self.show_message(TEST_FAILED, "error")
            return None

        try:
            result = self.sample(request)
        except HostServiceError as e:
            logger.error(f"Test error: {e}")
            self.show_message(TEST_ERROR, "error")
            return None

        count = result.total_record_count
        self.show_message(f"Test successful! Found {count} random items.", "success")
        return count

    def show_message(self, text: str, kind: str) -> None:
        self.state = replace(self.state, message=PanelMessage(text, kind, self.clock()))

    def current_message(self) -> Optional[PanelMessage]:
        """The visible message; cleared once it has expired."""
        message = self.state.message
        if message is not None and message.is_expired(self.clock()):
            self.state = replace(self.state, message=None)
            return None
        return message

    def render(self, action_url: str = "") -> str:
        self.current_message()
        return render_panel(self.state, action_url)
