"""Persisted panel settings for the random sample section."""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from random_sample.models import DEFAULT_SAMPLE_SIZE, RandomSampleRequest


logger = logging.getLogger(__name__)

# Key of this feature's section inside the plugin configuration object
SECTION_KEY = "randomSampleConfig"


def _coerce_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def _coerce_sample_size(value: object) -> int:
    if isinstance(value, bool):
        return DEFAULT_SAMPLE_SIZE
    try:
        size = int(value)
    except (TypeError, ValueError):
        return DEFAULT_SAMPLE_SIZE
    return size or DEFAULT_SAMPLE_SIZE


def _coerce_library_ids(value: object) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return list(dict.fromkeys(v for v in value if isinstance(v, str) and v))


class RandomSampleSettings(BaseModel):
    """Operator's choice of libraries, content types and sample size."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    selected_libraries: List[str] = Field(default_factory=list, alias="selectedLibraries")
    sample_size: int = Field(default=DEFAULT_SAMPLE_SIZE, alias="sampleSize")
    include_movies: bool = Field(default=True, alias="includeMovies")
    include_tv_shows: bool = Field(default=True, alias="includeTvShows")
    include_music: bool = Field(default=False, alias="includeMusic")

    @classmethod
    def from_section(cls, raw: Any) -> "RandomSampleSettings":
        """Build settings from a stored section, tolerating bad data.

        A missing or non-object section yields the defaults. Movies and TV
        stay enabled unless explicitly turned off; music stays disabled
        unless explicitly turned on.
        """
        if not isinstance(raw, dict):
            if raw is not None:
                logger.warning(f"Ignoring malformed {SECTION_KEY} section: {type(raw).__name__}")
            return cls()

        return cls(
            selected_libraries=_coerce_library_ids(raw.get("selectedLibraries")),
            sample_size=_coerce_sample_size(raw.get("sampleSize")),
            include_movies=_coerce_bool(raw.get("includeMovies"), True),
            include_tv_shows=_coerce_bool(raw.get("includeTvShows"), True),
            include_music=_coerce_bool(raw.get("includeMusic"), False),
        )

    def to_section(self) -> Dict[str, Any]:
        """Serialize for the plugin configuration store."""
        return self.model_dump(by_alias=True)

    def to_request(self) -> RandomSampleRequest:
        """Build the sampling request these settings describe."""
        return RandomSampleRequest(
            library_ids=list(self.selected_libraries),
            sample_size=self.sample_size,
            include_movies=self.include_movies,
            include_tv_shows=self.include_tv_shows,
            include_music=self.include_music,
        )
