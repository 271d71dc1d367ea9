"""Exceptions raised by the timezone finders."""

from __future__ import annotations


class TimezoneLookupError(Exception):
    """Base class for every error raised by tz_locator."""


class InvalidCoordinate(TimezoneLookupError, ValueError):
    """Longitude outside [-180, 180] or latitude outside [-90, 90]."""

    def __init__(self, lng: float, lat: float) -> None:
        super().__init__(f"coordinate out of range: lng={lng}, lat={lat}")
        self.lng = lng
        self.lat = lat


class NoTimezoneFound(TimezoneLookupError, LookupError):
    def __init__(self, lng: float, lat: float) -> None:
        super().__init__(f"no timezone found for lng={lng}, lat={lat}")
        self.lng = lng
        self.lat = lat


class DataLoadError(TimezoneLookupError):
    """A payload could not be read or does not match the expected schema."""


__all__ = ["DataLoadError", "InvalidCoordinate", "NoTimezoneFound", "TimezoneLookupError"]
