"""
config.py
---------
Runtime settings for the launch client.

# Data source: SpaceX API v3 (no auth, no pagination)
#   {base_url}/launches/past
#   {base_url}/launches/upcoming
# Every value can be overridden from the environment:
#   LAUNCHBOARD_BASE_URL, LAUNCHBOARD_TIMEOUT, LAUNCHBOARD_LOG_DIR
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

DEFAULT_BASE_URL = "https://api.spacexdata.com/v3"
DEFAULT_TIMEOUT = 60.0
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_dir: Path = field(default_factory=lambda: Path("logs"))

    @property
    def past_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/launches/past"

    @property
    def upcoming_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/launches/upcoming"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "launchboard.log"

    def with_overrides(self, base_url: Optional[str] = None, timeout: Optional[float] = None) -> "Settings":
        changes = {}
        if base_url:
            changes["base_url"] = base_url
        if timeout is not None:
            changes["timeout"] = timeout
        return replace(self, **changes)


def load_settings() -> Settings:
    base_url = os.getenv("LAUNCHBOARD_BASE_URL", "").strip() or DEFAULT_BASE_URL
    raw_timeout = os.getenv("LAUNCHBOARD_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ValueError(f"LAUNCHBOARD_TIMEOUT must be a number, got {raw_timeout!r}") from None
    log_dir = Path(os.getenv("LAUNCHBOARD_LOG_DIR", "").strip() or "logs")
    return Settings(base_url=base_url, timeout=timeout, log_dir=log_dir)


def setup_logging(settings: Settings, level: int = logging.INFO) -> None:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(settings.log_file),
        level=level,
        format=LOG_FORMAT,
    )
