"""Pydantic response schemas for the lookup and today endpoints.

Field names are snake_case in Python and serialised as camelCase
(``centerLat``, ``landsatDates``) via ``model_dump(by_alias=True)``.

Shapes
------
- ``CellsResponse``      — per-cell nested dates.
- ``AggregateResponse``  — cells plus one shared per-satellite date list.
- ``SatellitesResponse`` — cells plus fixed ``landsat7``/``landsat8``/... keys.
- ``PathRowsResponse``   — cells with coordinates only.
- ``TodayResponse``      — satellite label → paths imaged today.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field, RootModel
from pydantic.alias_generators import to_camel


class ResponseShape(enum.Enum):
    """Output shape selected by the ``shape`` query parameter."""

    CELLS = "cells"
    AGGREGATE = "aggregate"
    SATELLITES = "satellites"
    PATHROWS = "pathrows"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_body(self) -> dict[str, object]:
        """Return the JSON-ready dict with camelCase keys."""
        return self.model_dump(by_alias=True)


class CellPayload(_CamelModel):
    """A swath cell with its ten (nullable) coordinate fields."""

    path: int
    row: int
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


class CellWithDatesPayload(CellPayload):
    """A swath cell plus its own satellite label → dates mapping."""

    landsat_dates: dict[str, list[str]] = Field(default_factory=dict)


class CellsResponse(_CamelModel):
    cells: list[CellWithDatesPayload]


class AggregateResponse(_CamelModel):
    cells: list[CellPayload]
    landsat_dates: dict[str, list[str]]


class SatellitesResponse(BaseModel):
    """Display view with one top-level key per display satellite.

    The satellite keys are dynamic (``landsat7``, ``landsat8``, ...), so
    the model allows extra fields and the assembler fills them in.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    cells: list[CellPayload]

    def to_body(self) -> dict[str, object]:
        return self.model_dump(by_alias=True)


class PathRowsResponse(_CamelModel):
    cells: list[CellPayload]


class TodayResponse(RootModel[dict[str, list[int]]]):
    """Satellite label → ascending list of paths imaged today."""

    def to_body(self) -> dict[str, list[int]]:
        return self.model_dump()
