"""Dependency injection for the server."""

import logging
import re
from functools import lru_cache, partial
from typing import Optional

from fastapi import Depends, HTTPException, Request

from random_sample.errors import ConfigurationError, HostAuthError, HostServiceError
from random_sample.library import (
    BaseDtoService,
    BaseLibraryManager,
    HostUser,
    JellyfinClient,
    JellyfinDtoService,
    JellyfinLibraryManager,
)
from random_sample.panel import ConfigurationPanel
from random_sample.plugin_config import (
    BasePluginConfigurationStore,
    FilePluginConfigurationStore,
    JellyfinPluginConfigurationStore,
)
from random_sample.registration import SectionRegistrar
from random_sample.samplers import RandomItemSampler
from random_sample.server.config import load_server_config
from random_sample.utils.config import Config

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r'Token="([^"]*)"')


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get or create the service configuration singleton."""
    return load_server_config()


@lru_cache(maxsize=1)
def get_jellyfin_client() -> JellyfinClient:
    """Get or create the shared media server client."""
    config = get_config()
    return JellyfinClient(config.host.url, timeout=int(config.host.timeout))


@lru_cache(maxsize=1)
def get_library_manager() -> BaseLibraryManager:
    """Get or create the library manager singleton."""
    return JellyfinLibraryManager(get_jellyfin_client())


@lru_cache(maxsize=1)
def get_dto_service() -> BaseDtoService:
    """Get or create the DTO service singleton."""
    return JellyfinDtoService(get_jellyfin_client())


@lru_cache(maxsize=1)
def get_section_registrar() -> SectionRegistrar:
    """Get or create the section registrar singleton."""
    return SectionRegistrar(get_jellyfin_client())


def build_config_store(config: Config, token: str) -> BasePluginConfigurationStore:
    """Create the configured plugin configuration store for a token."""
    if config.plugin.store == "file":
        return FilePluginConfigurationStore(config.plugin.file_path)
    return JellyfinPluginConfigurationStore(get_jellyfin_client(), config.plugin.id, token)


def parse_access_token(request: Request) -> Optional[str]:
    """Extract the caller's access token.

    Accepts, in order: Authorization (MediaBrowser Token="..." or
    Bearer), X-Emby-Token, X-MediaBrowser-Token, and the api_key query
    parameter.
    """
    authorization = request.headers.get("Authorization", "")
    match = _TOKEN_PATTERN.search(authorization)
    if match and match.group(1):
        return match.group(1)
    if authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
        if token:
            return token

    for header in ("X-Emby-Token", "X-MediaBrowser-Token"):
        token = request.headers.get(header)
        if token:
            return token

    return request.query_params.get("api_key") or None


def get_access_token(request: Request) -> str:
    token = parse_access_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Authorization required")
    return token


def get_current_user(
    token: str = Depends(get_access_token),
    library_manager: BaseLibraryManager = Depends(get_library_manager),
) -> HostUser:
    """Resolve the calling user through the media server."""
    try:
        return library_manager.get_user(token)
    except HostAuthError:
        raise HTTPException(status_code=401, detail="Invalid access token")
    except HostServiceError:
        logger.exception("Error resolving user")
        raise HTTPException(status_code=500, detail="Internal server error")


def get_sampler(
    library_manager: BaseLibraryManager = Depends(get_library_manager),
    dto_service: BaseDtoService = Depends(get_dto_service),
    config: Config = Depends(get_config),
) -> RandomItemSampler:
    """Create a sampler for one request."""
    return RandomItemSampler(
        library_manager,
        dto_service,
        per_library_limit=int(config.sampling.per_library_limit),
    )


def get_config_store(
    user: HostUser = Depends(get_current_user),
    config: Config = Depends(get_config),
) -> BasePluginConfigurationStore:
    try:
        return build_config_store(config, user.token)
    except ConfigurationError:
        logger.exception("Plugin configuration store unavailable")
        raise HTTPException(status_code=500, detail="Internal server error")


def get_configuration_panel(
    user: HostUser = Depends(get_current_user),
    library_manager: BaseLibraryManager = Depends(get_library_manager),
    config_store: BasePluginConfigurationStore = Depends(get_config_store),
    registrar: SectionRegistrar = Depends(get_section_registrar),
    sampler: RandomItemSampler = Depends(get_sampler),
) -> ConfigurationPanel:
    """Create a configuration panel for the calling user."""
    return ConfigurationPanel(
        library_manager=library_manager,
        config_store=config_store,
        registrar=registrar,
        sample=partial(sampler.get_random_sample, user=user),
        user=user,
    )
