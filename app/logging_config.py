# =============================================================================
# app/logging_config.py - Logging Setup
# =============================================================================
# Configures the root logger once per process.
# The serverless runtime installs its own root handler before our code runs,
# so basicConfig alone would be a no-op there; the level is set explicitly.
# =============================================================================

import logging

from app.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Apply format and level from settings to the root logger."""
    level = getattr(logging, settings.log_level)

    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

    # Supabase's HTTP stack is chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
