"""Combined strategy: tile preindex first, polygon scan as fallback."""

from __future__ import annotations

import logging
from typing import List, Tuple, Type

from tz_locator.data.payloads import Payload
from tz_locator.errors import InvalidCoordinate, NoTimezoneFound, TimezoneLookupError
from tz_locator.finders.polygon import PolygonFinder
from tz_locator.finders.preindex import PreindexFinder

LOGGER = logging.getLogger(__name__)


class DefaultFinder:
    """Fast tile answers with an exact fallback.

    By default an out-of-range coordinate raises ``InvalidCoordinate`` straight
    from the tile index. With ``fallback_on_invalid=True`` every tile failure is
    handed to the polygon finder, which performs no range check and therefore
    reports such points as ``NoTimezoneFound``.
    """

    def __init__(
        self,
        preindex: PreindexFinder,
        polygons: PolygonFinder,
        *,
        fallback_on_invalid: bool = False,
    ) -> None:
        self._preindex = preindex
        self._polygons = polygons
        self._fallback_errors: Tuple[Type[TimezoneLookupError], ...] = (
            (NoTimezoneFound, InvalidCoordinate) if fallback_on_invalid else (NoTimezoneFound,)
        )

    @classmethod
    def from_payloads(
        cls,
        preindex_payload: Payload,
        polygon_payload: Payload,
        *,
        allow_on_edge: bool = True,
        fallback_on_invalid: bool = False,
    ) -> "DefaultFinder":
        return cls(
            PreindexFinder.from_payload(preindex_payload),
            PolygonFinder.from_payload(polygon_payload, allow_on_edge=allow_on_edge),
            fallback_on_invalid=fallback_on_invalid,
        )

    @property
    def preindex(self) -> PreindexFinder:
        return self._preindex

    @property
    def polygons(self) -> PolygonFinder:
        return self._polygons

    def data_version(self) -> str:
        return f"{self._preindex.data_version()}/{self._polygons.data_version()}"

    def get_timezones(self, lng: float, lat: float) -> List[str]:
        try:
            return self._preindex.get_timezones(lng, lat)
        except self._fallback_errors as exc:
            LOGGER.debug("Tile lookup failed (%s); scanning polygons", exc)
        return self._polygons.get_timezones(lng, lat)

    def get_timezone(self, lng: float, lat: float) -> str:
        try:
            return self._preindex.get_timezone(lng, lat)
        except self._fallback_errors as exc:
            LOGGER.debug("Tile lookup failed (%s); scanning polygons", exc)
        return self._polygons.get_timezone(lng, lat)


__all__ = ["DefaultFinder"]
