"""Fetches tzf release payloads and keeps a local copy."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests

from tz_locator.config import Settings
from tz_locator.errors import DataLoadError

LOGGER = logging.getLogger(__name__)


class ReleaseClient:
    """Reads payload bytes from the data directory, downloading them on demand."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    def preindex_bytes(self) -> bytes:
        return self._load(self._settings.preindex_file)

    def polygon_bytes(self) -> bytes:
        return self._load(self._settings.polygon_file)

    def _load(self, filename: str) -> bytes:
        path = self._settings.data_dir / filename
        if path.is_file():
            return _read(path)
        if not self._settings.download_missing:
            raise DataLoadError(f"payload {path} not found and downloads are disabled")
        return self._download(filename, path)

    def _download(self, filename: str, path: Path) -> bytes:
        url = f"{self._settings.release_url}/{filename}"
        LOGGER.info("Downloading %s", url)
        try:
            response = self._session.get(url, timeout=60)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataLoadError(f"download of {url} failed: {exc}") from exc

        payload = response.content
        if not payload:
            raise DataLoadError(f"download of {url} returned an empty body")

        tmp = path.with_suffix(path.suffix + ".part")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(payload)
            tmp.replace(path)
        except OSError as exc:
            if tmp.exists():
                tmp.unlink()
            raise DataLoadError(f"cannot cache payload at {path}: {exc}") from exc
        LOGGER.info("Cached %d bytes at %s", len(payload), path)
        return payload


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DataLoadError(f"cannot read payload {path}: {exc}") from exc


__all__ = ["ReleaseClient"]
