"""Pydantic models for random sample requests and results."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SAMPLE_SIZE = 20


class RandomSampleRequest(BaseModel):
    """Request for a random sample of library items.

    Field aliases match the media server's PascalCase wire format.
    """
    model_config = ConfigDict(populate_by_name=True)

    library_ids: List[str] = Field(default_factory=list, alias="LibraryIds")
    sample_size: Optional[int] = Field(default=DEFAULT_SAMPLE_SIZE, alias="SampleSize")
    include_movies: bool = Field(default=True, alias="IncludeMovies")
    include_tv_shows: bool = Field(default=True, alias="IncludeTvShows")
    include_music: bool = Field(default=False, alias="IncludeMusic")

    @property
    def effective_sample_size(self) -> int:
        """Requested size, with null meaning the default."""
        if self.sample_size is None:
            return DEFAULT_SAMPLE_SIZE
        return self.sample_size

    def validation_error(self) -> Optional[str]:
        """Return why the request must be rejected, or None if it is valid."""
        if not self.library_ids:
            return "At least one library must be selected"
        if self.effective_sample_size < 1:
            return "SampleSize must be a positive integer"
        return None

    def unique_library_ids(self) -> List[str]:
        """Library ids with duplicates removed, first occurrence kept."""
        return list(dict.fromkeys(self.library_ids))


class QueryResult(BaseModel):
    """Sampled item DTOs plus their count."""
    model_config = ConfigDict(populate_by_name=True)

    items: List[Dict[str, Any]] = Field(default_factory=list, alias="Items")
    total_record_count: int = Field(default=0, alias="TotalRecordCount")
