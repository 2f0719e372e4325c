"""Random sample router."""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from random_sample.library import BaseLibraryManager, HostUser
from random_sample.models import QueryResult, RandomSampleRequest
from random_sample.samplers import RandomItemSampler
from random_sample.server.dependencies import get_current_user, get_library_manager, get_sampler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/RandomSample")


@router.get("/Libraries")
def get_available_libraries(
    user: HostUser = Depends(get_current_user),
    library_manager: BaseLibraryManager = Depends(get_library_manager),
) -> List[Dict[str, Any]]:
    """List the libraries the caller can choose from."""
    try:
        return library_manager.get_user_libraries(user)
    except Exception:
        logger.exception("Error getting available libraries")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/GetRandomSample", response_model=QueryResult)
def get_random_sample(
    request: RandomSampleRequest,
    user: HostUser = Depends(get_current_user),
    sampler: RandomItemSampler = Depends(get_sampler),
):
    """Return a random sample of items from the selected libraries.

    1. Rejects an empty library selection before touching the host
    2. Collects candidates from each library the caller can see
    3. Samples them uniformly and converts the selection to DTOs

    Host faults are logged and reported as a generic 500.
    """
    error = request.validation_error()
    if error:
        raise HTTPException(status_code=400, detail=error)

    try:
        return sampler.get_random_sample(request, user)
    except Exception:
        logger.exception("Error getting random sample")
        raise HTTPException(status_code=500, detail="Internal server error")
