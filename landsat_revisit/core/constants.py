"""Shared service constants — single source of truth.

Centralises the string conventions of the upstream sources (satellite
labels, coordinate table headers) so that only the boundary parsers
know about them.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Cycle calendar conventions
# ---------------------------------------------------------------------------

SATELLITE_LABEL_PREFIX: str = "landsat_"
"""Outer key prefix of the cycle calendar document (``landsat_<N>``)."""

CALENDAR_PATH_FIELD: str = "path"
"""Field of a calendar entry holding the comma-separated path list."""

DEFAULT_CYCLE_CALENDAR_URL: str = (
    "https://landsat.usgs.gov/sites/default/files/landsat_acq/assets/json/cycles_full.json"
)
"""Public USGS acquisition calendar."""

DEFAULT_DISPLAY_SATELLITES: tuple[int, ...] = (7, 8, 9)
"""Satellites always present in the ``satellites`` display shape."""

# ---------------------------------------------------------------------------
# Coordinate table columns
# ---------------------------------------------------------------------------

PATH_COLUMN: str = "PATH"
ROW_COLUMN: str = "ROW"

COORDINATE_COLUMNS: dict[str, str] = {
    "center_lat": "CTR LAT",
    "center_lon": "CTR LON",
    "ul_lat": "UL LAT",
    "ul_lon": "UL LON",
    "ur_lat": "UR LAT",
    "ur_lon": "UR LON",
    "ll_lat": "LL LAT",
    "ll_lon": "LL LON",
    "lr_lat": "LR LAT",
    "lr_lon": "LR LON",
}
"""``CoordinateRecord`` field name → table column header."""

REQUIRED_TABLE_COLUMNS: frozenset[str] = frozenset(
    {PATH_COLUMN, ROW_COLUMN, *COORDINATE_COLUMNS.values()}
)

DEFAULT_COORDINATE_TABLE_PATH: str = "data/wrs2_coordinates.csv"

# ---------------------------------------------------------------------------
# Spatial query
# ---------------------------------------------------------------------------

SPATIAL_PATH_FIELD: str = "PATH"
SPATIAL_ROW_FIELD: str = "ROW"
