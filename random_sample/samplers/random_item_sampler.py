"""Random item sampler for media server libraries.

This module collects candidate items from a set of libraries through the
host library service and returns an unweighted random sample of them,
converted to the host's transfer representation.
"""

import logging
import random
from typing import List, Optional

from random_sample.library.base import (
    BaseDtoService,
    BaseLibraryManager,
    DtoOptions,
    HostUser,
    Item,
    ItemsQuery,
)
from random_sample.models import QueryResult, RandomSampleRequest


logger = logging.getLogger(__name__)

# Items requested from each library; bounds the cost of one sample
PER_LIBRARY_LIMIT = 1000

MOVIE_TYPES = ["Movie"]
TV_SHOW_TYPES = ["Series", "Episode"]
MUSIC_TYPES = ["Audio", "MusicAlbum"]

# Used when every content-type flag is off
FALLBACK_ITEM_TYPES = ["Movie", "Series"]

SAMPLE_DTO_OPTIONS = DtoOptions(fields=(
    "BasicSyncInfo",
    "CanDelete",
    "CanDownload",
    "PrimaryImageAspectRatio",
    "Overview",
    "Genres",
    "DateCreated",
    "MediaStreams",
    "People",
))


def get_include_item_types(
    include_movies: bool,
    include_tv_shows: bool,
    include_music: bool
) -> List[str]:
    """Map content-type flags to host item types.

    If all flags are off the filter falls back to FALLBACK_ITEM_TYPES
    instead of an empty filter, so a request never silently matches
    nothing. The override is logged at warning level.

    Args:
        include_movies: Add Movie
        include_tv_shows: Add Series and Episode
        include_music: Add Audio and MusicAlbum

    Returns:
        List of host item type names
    """
    types: List[str] = []

    if include_movies:
        types.extend(MOVIE_TYPES)
    if include_tv_shows:
        types.extend(TV_SHOW_TYPES)
    if include_music:
        types.extend(MUSIC_TYPES)

    if not types:
        logger.warning(
            f"No content types selected; falling back to {FALLBACK_ITEM_TYPES}"
        )
        return list(FALLBACK_ITEM_TYPES)

    return types


class RandomItemSampler:
    """Draw a random sample of items from user-selected libraries.

    Candidates are gathered library by library (sequentially), merged into
    one pool, shuffled with a random ordering key per candidate and
    truncated to the requested size. Every candidate has the same chance of
    being selected; a library with more eligible items contributes
    proportionally more of the sample.

    Example:
        >>> sampler = RandomItemSampler(library_manager, dto_service, random_seed=42)
        >>> request = RandomSampleRequest(LibraryIds=["a1", "b2"], SampleSize=6)
        >>> result = sampler.get_random_sample(request, user)
        >>> print(result.total_record_count)  # <= 6

    Attributes:
        library_manager: Host library service used for traversal
        dto_service: Host conversion service used for result assembly
        per_library_limit: Maximum items requested from one library
        random_seed: Optional seed for reproducibility
    """

    def __init__(
        self,
        library_manager: BaseLibraryManager,
        dto_service: BaseDtoService,
        per_library_limit: int = PER_LIBRARY_LIMIT,
        random_seed: Optional[int] = None
    ):
        """Initialize the sampler.

        Args:
            library_manager: Host library service
            dto_service: Host conversion service
            per_library_limit: Maximum items requested from one library
            random_seed: Optional seed for reproducible sampling

        Raises:
            TypeError: If a collaborator has the wrong type
            ValueError: If per_library_limit is not positive
        """
        if not isinstance(library_manager, BaseLibraryManager):
            raise TypeError("library_manager must be a BaseLibraryManager instance")
        if not isinstance(dto_service, BaseDtoService):
            raise TypeError("dto_service must be a BaseDtoService instance")
        if per_library_limit < 1:
            raise ValueError(f"per_library_limit must be positive, got {per_library_limit}")

        self.library_manager = library_manager
        self.dto_service = dto_service
        self.per_library_limit = per_library_limit
        self.random_seed = random_seed

        # One generator per sampler
        self._rng = random.Random(random_seed)

        logger.debug(f"RandomItemSampler initialized (seed={random_seed})")

    def get_random_sample(self, request: RandomSampleRequest, user: HostUser) -> QueryResult:
        """Collect candidates, sample them and convert the selection.

        Args:
            request: Libraries, size and content-type flags
            user: User the host calls run as

        Returns:
            QueryResult with the sampled DTOs

        Raises:
            HostServiceError: If a library query or the conversion fails
        """
        include_types = get_include_item_types(
            request.include_movies,
            request.include_tv_shows,
            request.include_music,
        )

        candidates = self.collect_candidates(request.unique_library_ids(), include_types, user)
        selected = self.sample(candidates, request.effective_sample_size)
        result = self.to_query_result(selected, user)

        logger.info(
            f"Random sample for user {user.name}: {result.total_record_count} of "
            f"{len(candidates)} candidates from {len(request.unique_library_ids())} libraries"
        )
        return result

    def collect_candidates(
        self,
        library_ids: List[str],
        include_item_types: List[str],
        user: HostUser
    ) -> List[Item]:
        """Gather eligible items from each library.

        Libraries that cannot be resolved, or that the user cannot see,
        are skipped. A failing item query is not caught here and aborts
        the whole collection.

        Args:
            library_ids: Library identifiers, each queried once
            include_item_types: Host item types to match
            user: User the host calls run as

        Returns:
            Merged candidate list
        """
        candidates: List[Item] = []

        for library_id in library_ids:
            library = self.library_manager.get_item_by_id(library_id, user)
            if library is None:
                logger.debug(f"Skipping unresolved library {library_id}")
                continue

            query = ItemsQuery(
                parent_id=library.get("Id", library_id),
                include_item_types=include_item_types,
                recursive=True,
                is_virtual_item=False,
                limit=self.per_library_limit,
            )
            library_items = self.library_manager.get_items(query, user)
            logger.debug(f"Library {library_id} contributed {len(library_items)} candidates")
            candidates.extend(library_items)

        return candidates

    def sample(self, candidates: List[Item], sample_size: int) -> List[Item]:
        """Select up to sample_size candidates uniformly without replacement.

        Each candidate is given a random ordering key, the pool is sorted by
        that key and the head is kept. Asking for more than the pool holds
        returns the whole pool in random order.

        Args:
            candidates: Candidate pool
            sample_size: Requested number of items

        Returns:
            Selected candidates in random order
        """
        effective_size = max(0, min(sample_size, len(candidates)))
        if effective_size < sample_size:
            logger.debug(
                f"Requested {sample_size} items but only {len(candidates)} candidates; "
                f"returning {effective_size}"
            )

        shuffled = sorted(candidates, key=lambda _: self._rng.random())
        return shuffled[:effective_size]

    def to_query_result(self, items: List[Item], user: HostUser) -> QueryResult:
        """Convert selected items to DTOs and wrap them with their count."""
        dtos = self.dto_service.get_base_item_dtos(items, SAMPLE_DTO_OPTIONS, user)
        return QueryResult(items=dtos, total_record_count=len(dtos))
