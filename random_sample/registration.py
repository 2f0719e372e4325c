"""Home-screen section registration.

Registration advertises the random sample section to the host's home
screen registry. It is best-effort: failures are logged and reported in
the returned RegistrationResult, never raised.
"""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from random_sample.errors import HostServiceError
from random_sample.library.jellyfin_client import JellyfinClient
from random_sample.settings import RandomSampleSettings


logger = logging.getLogger(__name__)

SECTION_ID = "random-library-sample"
SECTION_DISPLAY_TEXT = "Random Library Sample"
RESULTS_ENDPOINT = "/RandomSample/GetRandomSample"
REGISTER_ENDPOINT = "/HomeScreen/RegisterSection"


@dataclass(frozen=True)
class SectionDescriptor:
    """Payload of a section registration."""
    id: str
    displayText: str
    limit: int
    additionalData: str  # JSON-encoded section parameters
    resultsEndpoint: str

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a registration attempt; callers may ignore it."""
    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


def build_section_descriptor(settings: Optional[RandomSampleSettings] = None) -> SectionDescriptor:
    """Build the fixed descriptor, embedding the current settings.

    Args:
        settings: Panel settings; None registers with empty parameters

    Returns:
        SectionDescriptor for the random sample section
    """
    additional_data = ""
    if settings is not None:
        additional_data = json.dumps({
            "libraryIds": list(settings.selected_libraries),
            "sampleSize": settings.sample_size,
            "includeMovies": settings.include_movies,
            "includeTvShows": settings.include_tv_shows,
            "includeMusic": settings.include_music,
        })

    return SectionDescriptor(
        id=SECTION_ID,
        displayText=SECTION_DISPLAY_TEXT,
        limit=1,
        additionalData=additional_data,
        resultsEndpoint=RESULTS_ENDPOINT,
    )


class SectionRegistrar:
    """Post section descriptors to the host's home-screen registry.

    Re-registering the same section id is assumed to be safe, so callers
    can register on every save and at every startup.
    """

    def __init__(self, client: JellyfinClient):
        self.client = client

    def register(self, descriptor: SectionDescriptor, token: str) -> RegistrationResult:
        """Register a section.

        Args:
            descriptor: Section to advertise
            token: Access token the call runs as

        Returns:
            RegistrationResult describing the outcome
        """
        try:
            response = self.client.post_json(REGISTER_ENDPOINT, token, descriptor.to_payload())
        except HostServiceError as e:
            logger.error(f"Failed to register section '{descriptor.id}': {e}")
            return RegistrationResult(success=False, status_code=e.status_code, error=str(e))

        logger.info(f"Section '{descriptor.id}' registered")
        return RegistrationResult(success=True, status_code=response.status_code)
