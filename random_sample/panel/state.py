"""Configuration panel state and pure state transitions."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from random_sample.library.base import Item
from random_sample.models import DEFAULT_SAMPLE_SIZE
from random_sample.settings import RandomSampleSettings

# Seconds a panel message stays visible
MESSAGE_TIMEOUT_SECONDS = 5.0

# Largest sample size the panel input accepts
MAX_PANEL_SAMPLE_SIZE = 50

FLAG_FIELDS = {
    "includeMovies": "include_movies",
    "includeTvShows": "include_tv_shows",
    "includeMusic": "include_music",
}


@dataclass(frozen=True)
class PanelMessage:
    """Transient success or error notice."""
    text: str
    kind: str  # "success" or "error"
    created_at: float = 0.0

    def is_expired(self, now: float) -> bool:
        return now - self.created_at >= MESSAGE_TIMEOUT_SECONDS


@dataclass(frozen=True)
class PanelState:
    """Everything the panel renders.

    settings is the in-memory copy the operator edits; it reaches the
    store only on save.
    """
    settings: RandomSampleSettings = field(default_factory=RandomSampleSettings)
    libraries: Tuple[Item, ...] = ()
    message: Optional[PanelMessage] = None


def parse_sample_size(value: Any) -> int:
    """Parse the sample size input, falling back to the default."""
    try:
        size = int(str(value).strip())
    except (TypeError, ValueError):
        return DEFAULT_SAMPLE_SIZE
    return size or DEFAULT_SAMPLE_SIZE


def apply_change(settings: RandomSampleSettings, name: str, value: Any) -> RandomSampleSettings:
    """Return settings with one scalar input changed.

    Args:
        settings: Current settings
        name: Input name (sampleSize, includeMovies, includeTvShows, includeMusic)
        value: Raw input value; checkbox values are their checked state

    Raises:
        KeyError: If name is not a panel input
    """
    if name == "sampleSize":
        return settings.model_copy(update={"sample_size": parse_sample_size(value)})
    if name in FLAG_FIELDS:
        return settings.model_copy(update={FLAG_FIELDS[name]: bool(value)})
    raise KeyError(f"Unknown panel input: {name}")


def toggle_library(settings: RandomSampleSettings, library_id: str, checked: bool) -> RandomSampleSettings:
    """Return settings with a library added to or removed from the selection."""
    selected = list(settings.selected_libraries)
    if checked and library_id not in selected:
        selected.append(library_id)
    elif not checked and library_id in selected:
        selected.remove(library_id)
    return settings.model_copy(update={"selected_libraries": selected})


def apply_form(
    settings: RandomSampleSettings,
    form: Dict[str, List[str]],
    libraries: Tuple[Item, ...]
) -> RandomSampleSettings:
    """Apply a submitted panel form.

    Unchecked checkboxes are absent from a submitted form, so every flag
    and every listed library is set from presence in the form.
    """
    if "sampleSize" in form:
        settings = apply_change(settings, "sampleSize", form["sampleSize"][0])
    for name in FLAG_FIELDS:
        settings = apply_change(settings, name, name in form)

    posted = set(form.get("library", []))
    for library in libraries:
        library_id = library.get("Id")
        if library_id:
            settings = toggle_library(settings, library_id, library_id in posted)
    return settings


def diff_settings(old: RandomSampleSettings, new: RandomSampleSettings) -> List[str]:
    """List the wire names of fields that differ between two settings."""
    before = old.to_section()
    after = new.to_section()
    changed = []
    for key, value in after.items():
        if key == "selectedLibraries":
            if set(value) != set(before.get(key, [])):
                changed.append(key)
        elif before.get(key) != value:
            changed.append(key)
    return changed
