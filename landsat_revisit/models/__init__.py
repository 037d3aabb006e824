"""Data models and schemas.

Defines the data structures used throughout the service:
- swath: GeoPoint, SwathCell, CoordinateRecord, CycleFact, MatchResult
- responses: Pydantic response shapes for the HTTP endpoints
"""

from landsat_revisit.models.swath import (
    CoordinateRecord,
    CycleFact,
    GeoPoint,
    MalformedCalendarEntry,
    MatchResult,
    SwathCell,
    swath_key,
)

__all__ = [
    "CoordinateRecord",
    "CycleFact",
    "GeoPoint",
    "MalformedCalendarEntry",
    "MatchResult",
    "SwathCell",
    "swath_key",
]
