"""Revisit lookup orchestration.

Coordinates: validate point → concurrent fan-out (spatial query +
cycle calendar) → parse calendar → match → enrich → assemble.

The two upstream fetches run inside an ``asyncio.TaskGroup``.  If
either fails the sibling is cancelled and the first ``UpstreamError``
propagates; no partial result is ever returned.

``RevisitService`` receives its coordinate index and providers through
its constructor.  ``build_service`` wires the production adapters from a
``ServiceConfig``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from landsat_revisit.assembly.assembler import (
    build_aggregate_response,
    build_cells_response,
    build_pathrows_response,
    build_satellites_response,
    build_today_response,
)
from landsat_revisit.calendar.parser import parse_cycle_calendar, today_string
from landsat_revisit.core.constants import DEFAULT_DISPLAY_SATELLITES
from landsat_revisit.core.exceptions import NoMatchError
from landsat_revisit.index.coordinates import load_coordinate_table
from landsat_revisit.matching.matcher import match_aggregate, match_cells, match_today
from landsat_revisit.models.responses import ResponseShape
from landsat_revisit.models.swath import GeoPoint
from landsat_revisit.providers.arcgis import ArcGisSpatialQueryProvider
from landsat_revisit.providers.usgs import UsgsCycleCalendarProvider

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Sequence

    from pydantic import BaseModel

    from landsat_revisit.core.config import ServiceConfig
    from landsat_revisit.index.coordinates import CoordinateIndex
    from landsat_revisit.models.responses import TodayResponse
    from landsat_revisit.models.swath import CycleFact, MalformedCalendarEntry, SwathCell
    from landsat_revisit.providers.base import CycleCalendarProvider, SpatialQueryProvider

logger = logging.getLogger(__name__)


class RevisitService:
    """Answers point lookups and today's-paths queries.

    Args:
        index: Read-only coordinate index shared across requests.
        spatial: Spatial query provider.
        calendar: Cycle calendar provider.
        display_satellites: Satellites listed in the ``satellites`` shape.
        today: Zero-argument callable returning today's ``"M/D/YYYY"`` key.
    """

    def __init__(
        self,
        index: CoordinateIndex,
        spatial: SpatialQueryProvider,
        calendar: CycleCalendarProvider,
        *,
        display_satellites: Sequence[int] = DEFAULT_DISPLAY_SATELLITES,
        today: Callable[[], str] = today_string,
    ) -> None:
        self._index = index
        self._spatial = spatial
        self._calendar = calendar
        self._display_satellites = tuple(display_satellites)
        self._today = today

    @property
    def index(self) -> CoordinateIndex:
        return self._index

    async def lookup(
        self,
        latitude: float,
        longitude: float,
        shape: ResponseShape = ResponseShape.CELLS,
    ) -> BaseModel:
        """Return the revisit answer for a point in the requested *shape*.

        Raises:
            InvalidParamsError: If the coordinates are not finite or out of range.
            NoMatchError: If no cell covers the point, or the aggregate
                view has no date for any satellite.
            UpstreamError: If either upstream call fails.
        """
        point = GeoPoint(latitude=latitude, longitude=longitude)
        logger.info(
            "lookup started | lat=%s | lon=%s | shape=%s",
            point.latitude,
            point.longitude,
            shape.value,
        )

        if shape is ResponseShape.PATHROWS:
            cells = await self._spatial.query_cells(point)
            _require_cells(cells, point)
            return build_pathrows_response(cells, self._index)

        cells, raw_calendar = await _gather_both(
            self._spatial.query_cells(point),
            self._calendar.fetch_calendar(),
        )
        _require_cells(cells, point)
        facts = _parse_calendar(raw_calendar)

        if shape is ResponseShape.CELLS:
            response: BaseModel = build_cells_response(match_cells(cells, facts), self._index)
        elif shape is ResponseShape.AGGREGATE:
            response = build_aggregate_response(
                cells, match_aggregate(cells, facts), self._index
            )
        else:
            response = build_satellites_response(
                cells,
                match_aggregate(cells, facts),
                self._index,
                self._display_satellites,
            )

        logger.info(
            "lookup completed | cells=%d | facts=%d | shape=%s",
            len(cells),
            len(facts),
            shape.value,
        )
        return response

    async def today(self) -> TodayResponse:
        """Return satellite label → paths imaged on today's calendar date.

        Raises:
            NoMatchError: If no satellite has an entry for today.
            UpstreamError: If the calendar cannot be fetched.
        """
        today = self._today()
        facts = _parse_calendar(await self._calendar.fetch_calendar())
        grouped = match_today(facts, today)
        logger.info("today completed | date=%s | satellites=%d", today, len(grouped))
        return build_today_response(grouped)


def _parse_calendar(raw: dict[str, Any]) -> list[CycleFact]:
    malformed: list[MalformedCalendarEntry] = []
    facts = parse_cycle_calendar(raw, malformed=malformed)
    if malformed:
        logger.warning(
            "Calendar tokens dropped | count=%d | satellites=%s",
            len(malformed),
            sorted({entry.satellite for entry in malformed}),
        )
    return facts


def _require_cells(cells: Sequence[SwathCell], point: GeoPoint) -> None:
    if not cells:
        msg = f"No WRS-2 cell covers ({point.latitude}, {point.longitude})"
        raise NoMatchError(msg, stage="spatial_query")


async def _gather_both(
    first: Coroutine[Any, Any, Any],
    second: Coroutine[Any, Any, Any],
) -> tuple[Any, Any]:
    """Run two coroutines concurrently; re-raise the first failure unwrapped."""
    try:
        async with asyncio.TaskGroup() as group:
            first_task = group.create_task(first)
            second_task = group.create_task(second)
    except ExceptionGroup as exc_group:
        raise exc_group.exceptions[0]  # noqa: B904
    return first_task.result(), second_task.result()


def build_service(config: ServiceConfig) -> RevisitService:
    """Wire a ``RevisitService`` with the production adapters.

    Loads the coordinate table immediately.

    Raises:
        CoordinateTableError: If the coordinate table cannot be loaded.
    """
    index = load_coordinate_table(config.coordinate_table_path)
    tz = config.tzinfo
    return RevisitService(
        index,
        ArcGisSpatialQueryProvider(
            config.spatial_query_url,
            token=config.spatial_query_token,
            timeout_s=config.http_timeout_s,
        ),
        UsgsCycleCalendarProvider(config.cycle_calendar_url, timeout_s=config.http_timeout_s),
        display_satellites=config.display_satellites,
        today=lambda: today_string(tz),
    )
