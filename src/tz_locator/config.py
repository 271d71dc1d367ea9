"""Minimal configuration loader for the timezone lookup CLI and services."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

STRATEGIES = ("default", "preindex", "polygon")
DEFAULT_RELEASE_URL = "https://raw.githubusercontent.com/ringsaturn/tzf-rel-lite/main"


def _as_bool(value: str, *, default: bool = False) -> bool:
    truthy = {"1", "true", "yes", "on"}
    falsy = {"0", "false", "no", "off"}
    text = value.strip().lower()
    if text in truthy:
        return True
    if text in falsy:
        return False
    return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    preindex_file: str
    polygon_file: str
    release_url: str
    strategy: str
    allow_on_edge: bool
    fallback_on_invalid: bool
    download_missing: bool
    log_level: str

    @property
    def preindex_path(self) -> Path:
        return self.data_dir / self.preindex_file

    @property
    def polygon_path(self) -> Path:
        return self.data_dir / self.polygon_file

    @classmethod
    def load(cls) -> "Settings":
        strategy = os.getenv("TZ_LOCATOR_STRATEGY", "default").strip().lower()
        if strategy not in STRATEGIES:
            raise RuntimeError(f"TZ_LOCATOR_STRATEGY must be one of {', '.join(STRATEGIES)}, got {strategy!r}")

        return cls(
            data_dir=Path(os.getenv("TZ_LOCATOR_DATA_DIR", "var/data")).resolve(),
            preindex_file=os.getenv("TZ_LOCATOR_PREINDEX_FILE", "combined-with-oceans.reduce.preindex.bin"),
            polygon_file=os.getenv("TZ_LOCATOR_POLYGON_FILE", "combined-with-oceans.reduce.bin"),
            release_url=os.getenv("TZ_LOCATOR_RELEASE_URL", DEFAULT_RELEASE_URL).rstrip("/"),
            strategy=strategy,
            allow_on_edge=_as_bool(os.getenv("TZ_LOCATOR_ALLOW_ON_EDGE", "true"), default=True),
            fallback_on_invalid=_as_bool(os.getenv("TZ_LOCATOR_FALLBACK_ON_INVALID", "false"), default=False),
            download_missing=_as_bool(os.getenv("TZ_LOCATOR_DOWNLOAD", "false"), default=False),
            log_level=os.getenv("TZ_LOCATOR_LOG_LEVEL", "INFO"),
        )
