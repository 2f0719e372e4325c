"""Main entry point for the application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from starlette.concurrency import run_in_threadpool

from random_sample import __version__
from random_sample.errors import ConfigurationError, HostServiceError
from random_sample.registration import RegistrationResult, build_section_descriptor
from random_sample.server.dependencies import build_config_store, get_config, get_section_registrar
from random_sample.server.routers import health, panel, random_sample
from random_sample.settings import SECTION_KEY, RandomSampleSettings
from random_sample.utils.config import Config, validate_config
from random_sample.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def register_section_on_startup(config: Config) -> Optional[RegistrationResult]:
    """Register the home-screen section with the service API key.

    Best-effort: returns None when startup registration is disabled or
    impossible, otherwise the registration outcome.
    """
    if not config.registration.on_startup:
        return None

    api_key = config.host.api_key
    if not api_key:
        logger.warning("Startup registration skipped: host.api_key is not set")
        return None

    settings = None
    try:
        store = build_config_store(config, api_key)
        settings = RandomSampleSettings.from_section(store.load_section(SECTION_KEY))
    except (ConfigurationError, HostServiceError) as e:
        logger.warning(f"Registering without saved settings: {e}")

    return get_section_registrar().register(build_section_descriptor(settings), api_key)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager: configure logging and register the section."""
    config = get_config()
    setup_logging(config.logging.level, config.logging.log_dir)

    logger.info("=" * 60)
    logger.info(f"Random Library Sample service {__version__} starting...")
    logger.info(f"Media server: {config.host.url} (plugin store: {config.plugin.store})")
    logger.info("=" * 60)

    for warning in validate_config(config):
        logger.warning(warning)

    result = await run_in_threadpool(register_section_on_startup, config)
    if result is not None and not result.success:
        logger.warning(f"Startup registration failed: {result.error}")

    yield

    logger.info("Server shutting down...")


app = FastAPI(
    title="Random Library Sample",
    description="Random samples of media items from selected libraries",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(random_sample.router, tags=["random-sample"])
app.include_router(panel.router, tags=["panel"])


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    config = get_config()
    uvicorn.run(
        "random_sample.server.main:app",
        host=config.server.host,
        port=int(config.server.port),
    )


if __name__ == "__main__":
    run()
