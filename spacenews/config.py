"""
config.py
---------
Upstream endpoints, runtime settings and logging setup.
Settings are read once at process start (env vars, optionally a .env file)
and passed into the fetch/store layers.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict
from rich.logging import RichHandler

# Upstream sources, fetched in this order
NASA_APOD_URL     = "https://api.nasa.gov/planetary/apod"
SPACEX_LAUNCH_URL = "https://api.spacexdata.com/v4/launches/next"
SPACEX_HIST_URL   = "https://api.spacexdata.com/v4/history"
NASA_EONET_URL    = "https://eonet.gsfc.nasa.gov/api/v3/categories/severeStorms"

# Fixed address of the snapshot document
SNAPSHOT_COLLECTION = "spaceNews"
SNAPSHOT_DOC_ID     = "latest"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILE_NAME = "spacenews.log"
HANDLER_NAME = "spacenews"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    nasa_api_key: str = "DEMO_KEY"
    store_credentials_path: Optional[Path] = None
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "space_news"
    http_timeout_seconds: float = 60.0
    fetch_interval_hours: int = 48
    api_scheduler: bool = True
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    @property
    def apod_url(self) -> str:
        return f"{NASA_APOD_URL}?api_key={self.nasa_api_key}"


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the environment (and a .env file when present)."""
    load_dotenv(env_file)

    creds = os.getenv("STORE_CREDENTIALS_PATH", "").strip()
    return Settings(
        nasa_api_key=os.getenv("NASA_API_KEY", "DEMO_KEY"),
        store_credentials_path=Path(creds) if creds else None,
        mongo_url=os.getenv("MONGO_URL", "mongodb://localhost:27017"),
        mongo_database=os.getenv("MONGO_DATABASE", "space_news"),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "60")),
        fetch_interval_hours=int(os.getenv("FETCH_INTERVAL_HOURS", "48")),
        api_scheduler=os.getenv("API_SCHEDULER", "true").strip().lower() in ("1", "true", "yes"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        log_dir=Path(os.getenv("LOG_DIR", "logs")),
    )


def setup_logging(settings: Settings) -> None:
    """Log to logs/spacenews.log and to a rich console handler."""
    root = logging.getLogger()
    if any(h.get_name() == HANDLER_NAME for h in root.handlers):
        return

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(settings.log_dir / LOG_FILE_NAME, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler = RichHandler(show_path=False)

    for handler in (file_handler, console_handler):
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level, logging.INFO))
