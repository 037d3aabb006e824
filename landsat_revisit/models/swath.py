"""Typed domain records for WRS-2 revisit lookups.

Defines the data structures exchanged between the parser, the matcher,
the coordinate index and the assembler:

- ``GeoPoint``: A validated WGS 84 query point
- ``SwathCell``: One WRS-2 path/row cell returned by the spatial query
- ``CoordinateRecord``: Center and corner coordinates for a cell
- ``CycleFact``: Paths imaged by one satellite on one calendar date
- ``MalformedCalendarEntry``: A calendar token the parser had to drop
- ``MatchResult``: A cell joined with its per-satellite acquisition dates

Design notes:
- Everything except ``MatchResult`` is a frozen dataclass; request
  data is never mutated after it crosses the parse boundary.
- Calendar dates stay as the exact ``"M/D/YYYY"`` source strings and
  are compared by string equality only.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields

from landsat_revisit.core.exceptions import InvalidParamsError


def swath_key(path: int, row: int) -> str:
    """Return the ``"{path}-{row}"`` key shared by the table and the lookups."""
    return f"{path}-{row}"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A WGS 84 point in decimal degrees.

    Raises:
        InvalidParamsError: If either value is not a finite number or
            falls outside the valid WGS 84 range.
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        _check_coordinate("lat", self.latitude, 90.0)
        _check_coordinate("lon", self.longitude, 180.0)


def _check_coordinate(name: str, value: float, limit: float) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        msg = f"{name} must be a number, got {type(value).__name__}"
        raise InvalidParamsError(name, msg)
    if not math.isfinite(value):
        msg = f"{name} must be a finite number, got {value!r}"
        raise InvalidParamsError(name, msg)
    if not -limit <= value <= limit:
        msg = f"{name}={value} is outside [-{limit:g}, {limit:g}]"
        raise InvalidParamsError(name, msg)


@dataclass(frozen=True, slots=True)
class SwathCell:
    """A WRS-2 grid cell identified by its path and row."""

    path: int
    row: int

    @property
    def key(self) -> str:
        return swath_key(self.path, self.row)


@dataclass(frozen=True, slots=True)
class CoordinateRecord:
    """Center and corner coordinates of a WRS-2 cell.

    Every field is optional; a cell missing from the coordinate table is
    represented by ``CoordinateRecord.empty()`` rather than an error.

    Attributes:
        center_lat: Scene center latitude.
        center_lon: Scene center longitude.
        ul_lat: Upper-left corner latitude.
        ul_lon: Upper-left corner longitude.
        ur_lat: Upper-right corner latitude.
        ur_lon: Upper-right corner longitude.
        ll_lat: Lower-left corner latitude.
        ll_lon: Lower-left corner longitude.
        lr_lat: Lower-right corner latitude.
        lr_lon: Lower-right corner longitude.
    """

    center_lat: float | None = None
    center_lon: float | None = None
    ul_lat: float | None = None
    ul_lon: float | None = None
    ur_lat: float | None = None
    ur_lon: float | None = None
    ll_lat: float | None = None
    ll_lon: float | None = None
    lr_lat: float | None = None
    lr_lon: float | None = None

    @classmethod
    def empty(cls) -> CoordinateRecord:
        """Return the missing-record default (all ten fields ``None``)."""
        return cls()

    def to_dict(self) -> dict[str, float | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True, slots=True)
class CycleFact:
    """Paths imaged by one satellite on one calendar date.

    Attributes:
        satellite: Satellite number taken from the ``landsat_<N>`` label.
        date: Calendar key exactly as found in the source (``"M/D/YYYY"``).
        paths: WRS-2 paths imaged that date.
    """

    satellite: int
    date: str
    paths: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class MalformedCalendarEntry:
    """A calendar token dropped by the parser.

    Never surfaced to callers; collected for logging.
    """

    satellite: int
    date: str
    token: str


@dataclass(slots=True)
class MatchResult:
    """A swath cell joined with its acquisition dates.

    Attributes:
        cell: The matched cell.
        coordinates: Enriched coordinates, ``None`` until the assembler runs.
        landsat_dates: Satellite number → dates in first-seen order, no duplicates.
    """

    cell: SwathCell
    coordinates: CoordinateRecord | None = None
    landsat_dates: dict[int, list[str]] = field(default_factory=dict)

    def add_date(self, satellite: int, date: str) -> bool:
        """Record *date* under *satellite*; return ``False`` if already present."""
        return append_unique(self.landsat_dates, satellite, date)


def append_unique(grouped: dict[int, list[str]], satellite: int, date: str) -> bool:
    """Append *date* to ``grouped[satellite]`` unless it is already there."""
    dates = grouped.setdefault(satellite, [])
    if date in dates:
        return False
    dates.append(date)
    return True
