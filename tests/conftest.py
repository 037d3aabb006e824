"""Shared pytest fixtures for the revisit lookup test suite."""

from pathlib import Path
from typing import Any

import pytest

from landsat_revisit.index.coordinates import CoordinateIndex, load_coordinate_table

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def sample_table_csv(data_dir: Path) -> Path:
    """CSV table with cells 44/34, 44/35, 43/34 and an all-blank 43/35."""
    return data_dir / "wrs2_sample.csv"


@pytest.fixture()
def coordinate_index(sample_table_csv: Path) -> CoordinateIndex:
    """Coordinate index loaded from the sample CSV."""
    return load_coordinate_table(sample_table_csv)


# ---------------------------------------------------------------------------
# Calendar fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def raw_calendar() -> dict[str, Any]:
    """A small cycle calendar covering satellites 7, 8 and 9.

    Path 44 is imaged by landsat_8 on 1/1 and 1/17, by landsat_9 on 1/9;
    path 43 by landsat_8 on 1/10 and landsat_7 on 1/2.
    """
    return {
        "landsat_7": {
            "1/2/2024": {"path": "43, 59, 75"},
            "1/3/2024": {"path": "50, 66"},
        },
        "landsat_8": {
            "1/1/2024": {"path": "12, 28, 44, 60"},
            "1/10/2024": {"path": "11, 27, 43"},
            "1/17/2024": {"path": "12, 28, 44"},
        },
        "landsat_9": {
            "1/9/2024": {"path": "44,  60 ,76"},
            "1/10/2024": {"path": "3, 19"},
        },
    }
