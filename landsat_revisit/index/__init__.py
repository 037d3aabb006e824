"""WRS-2 coordinate index (path/row → center and corner coordinates)."""

from landsat_revisit.index.coordinates import (
    CoordinateIndex,
    CoordinateTableError,
    load_coordinate_table,
)

__all__ = ["CoordinateIndex", "CoordinateTableError", "load_coordinate_table"]
