"""Response assembler.

Shapes matched, coordinate-enriched cells into one of the supported
output contracts (see ``ResponseShape``).  Every emitted cell carries
all ten coordinate fields; a cell missing from the coordinate table is
emitted with ``None`` values, never dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from landsat_revisit.calendar.parser import satellite_label
from landsat_revisit.core.exceptions import NoMatchError
from landsat_revisit.models.responses import (
    AggregateResponse,
    CellPayload,
    CellsResponse,
    CellWithDatesPayload,
    PathRowsResponse,
    SatellitesResponse,
    TodayResponse,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from landsat_revisit.index.coordinates import CoordinateIndex
    from landsat_revisit.models.swath import MatchResult, SwathCell


def enrich(results: Iterable[MatchResult], index: CoordinateIndex) -> list[MatchResult]:
    """Fill ``coordinates`` on every result from *index*."""
    enriched = list(results)
    for result in enriched:
        result.coordinates = index.enrich(result.cell)
    return enriched


def _labelled(grouped: dict[int, list[str]]) -> dict[str, list[str]]:
    return {satellite_label(sat): list(dates) for sat, dates in grouped.items()}


def _cell_payload(cell: SwathCell, index: CoordinateIndex) -> CellPayload:
    return CellPayload(path=cell.path, row=cell.row, **index.enrich(cell).to_dict())


def build_cells_response(results: Sequence[MatchResult], index: CoordinateIndex) -> CellsResponse:
    """Per-cell nested shape: each cell lists its own dates."""
    cells = []
    for result in enrich(results, index):
        coordinates = result.coordinates.to_dict() if result.coordinates else {}
        cells.append(
            CellWithDatesPayload(
                path=result.cell.path,
                row=result.cell.row,
                landsat_dates=_labelled(result.landsat_dates),
                **coordinates,
            )
        )
    return CellsResponse(cells=cells)


def build_aggregate_response(
    cells: Sequence[SwathCell],
    grouped: dict[int, list[str]],
    index: CoordinateIndex,
) -> AggregateResponse:
    """Cells plus one shared satellite label → dates mapping.

    Only satellites with at least one date appear in the mapping.

    Raises:
        NoMatchError: If no satellite has any date.
    """
    if not any(grouped.values()):
        msg = "No acquisition dates for the returned cells"
        raise NoMatchError(msg)
    return AggregateResponse(
        cells=[_cell_payload(cell, index) for cell in cells],
        landsat_dates=_labelled(grouped),
    )


def build_satellites_response(
    cells: Sequence[SwathCell],
    grouped: dict[int, list[str]],
    index: CoordinateIndex,
    display_satellites: Sequence[int],
) -> SatellitesResponse:
    """Display shape: a ``landsat<N>`` key for each display satellite.

    Display satellites always appear (possibly empty); other satellites
    are left out.

    Raises:
        NoMatchError: If none of the display satellites has any date.
    """
    if not any(grouped.get(sat) for sat in display_satellites):
        msg = "No acquisition dates for the displayed satellites"
        raise NoMatchError(msg)
    per_satellite = {
        f"landsat{sat}": list(grouped.get(sat, [])) for sat in display_satellites
    }
    return SatellitesResponse(
        cells=[_cell_payload(cell, index) for cell in cells],
        **per_satellite,
    )


def build_pathrows_response(
    cells: Sequence[SwathCell],
    index: CoordinateIndex,
) -> PathRowsResponse:
    """Cells with coordinates only."""
    return PathRowsResponse(cells=[_cell_payload(cell, index) for cell in cells])


def build_today_response(grouped: dict[int, list[int]]) -> TodayResponse:
    """Satellite label → paths imaged today."""
    return TodayResponse({satellite_label(sat): list(paths) for sat, paths in grouped.items()})
