"""Query contract shared by every finder strategy."""

from __future__ import annotations

from typing import List, Protocol


class Finder(Protocol):
    def data_version(self) -> str:
        ...

    def get_timezone(self, lng: float, lat: float) -> str:
        ...

    def get_timezones(self, lng: float, lat: float) -> List[str]:
        ...


__all__ = ["Finder"]
