"""Engine configuration via environment variables."""

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    """All configuration loaded from ``QUICK_ACTIONS_*`` env vars or .env file."""

    # Ranking
    default_limit: int = 5

    # History
    history_max: int = 100  # stored entries, oldest dropped first
    recent_limit: int = 10

    # Catalog YAML; packaged default catalog when unset
    catalog_path: str | None = None

    log_level: str = "INFO"

    model_config = {
        "env_prefix": "QUICK_ACTIONS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def configure_logging(settings: EngineSettings | None = None) -> None:
    """Install a root handler for hosts that have none of their own."""
    settings = settings or EngineSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
