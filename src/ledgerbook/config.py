"""Runtime settings read from the environment."""

import logging
import os
from typing import Optional


class Settings:
    def __init__(self, database_url: Optional[str], database_path: Optional[str], log_level: str) -> None:
        self.database_url = database_url
        self.database_path = database_path
        self.log_level = log_level


def get_settings() -> Settings:
    """Build settings from LEDGERBOOK_* environment variables.

    LEDGERBOOK_DATABASE_URL wins over LEDGERBOOK_DB_PATH when both are set.
    """
    return Settings(
        database_url=os.getenv("LEDGERBOOK_DATABASE_URL") or None,
        database_path=os.getenv("LEDGERBOOK_DB_PATH") or None,
        log_level=os.getenv("LEDGERBOOK_LOG_LEVEL", "WARNING").upper(),
    )


def configure_logging(level: str) -> None:
    """Configure root logging for command-line use."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("ledgerbook").setLevel(numeric)
