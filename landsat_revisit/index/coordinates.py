"""WRS-2 coordinate index.

Builds an in-memory ``"{path}-{row}"`` → ``CoordinateRecord`` mapping
from the static WRS-2 corner table and serves O(1) lookups.

The table is loaded once at startup.  Loading is fail-fast: a missing
file, an unsupported format, missing columns or a non-integer PATH/ROW
raises ``CoordinateTableError`` so the host never starts with a broken
index.  After construction the index is read-only and safe to share
across concurrent requests.

Supported formats:
    - ``.csv``  — read with the stdlib ``csv`` module.
    - ``.xlsx`` — first worksheet, read with ``openpyxl``.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from landsat_revisit.core.constants import (
    COORDINATE_COLUMNS,
    PATH_COLUMN,
    REQUIRED_TABLE_COLUMNS,
    ROW_COLUMN,
)
from landsat_revisit.core.exceptions import PermanentError
from landsat_revisit.models.swath import CoordinateRecord, SwathCell, swath_key

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


class CoordinateTableError(PermanentError):
    """The coordinate table is missing, unreadable or malformed.

    Attributes:
        source: Path (or label) of the offending table.
    """

    default_stage = "coordinate_index"
    default_code = "COORDINATE_TABLE_INVALID"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


class CoordinateIndex:
    """Read-only lookup of WRS-2 cell coordinates keyed by ``"{path}-{row}"``."""

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[str, CoordinateRecord]) -> None:
        self._records = MappingProxyType(dict(records))

    @classmethod
    def build(
        cls,
        rows: Iterable[Mapping[str, Any]],
        *,
        source: str = "<rows>",
    ) -> CoordinateIndex:
        """Build an index from table rows keyed by column header.

        Header matching ignores case and surrounding whitespace.  When a
        key appears twice the first row wins.

        Raises:
            CoordinateTableError: If required columns are missing or a
                value cannot be parsed.
        """
        records: dict[str, CoordinateRecord] = {}
        checked_header = False

        for line_no, raw in enumerate(rows, start=1):
            row = {_normalise_header(k): v for k, v in raw.items() if k is not None}
            if not checked_header:
                _check_columns(row.keys(), source)
                checked_header = True

            path = _parse_int(row.get(PATH_COLUMN), PATH_COLUMN, line_no, source)
            row_num = _parse_int(row.get(ROW_COLUMN), ROW_COLUMN, line_no, source)
            key = swath_key(path, row_num)
            if key in records:
                logger.warning(
                    "Duplicate coordinate row ignored | key=%s | line=%d | source=%s",
                    key,
                    line_no,
                    source,
                )
                continue

            records[key] = CoordinateRecord(
                **{
                    name: _parse_float(row.get(column), column, line_no, source)
                    for name, column in COORDINATE_COLUMNS.items()
                }
            )

        logger.info("Coordinate index built | records=%d | source=%s", len(records), source)
        return cls(records)

    def lookup(self, path: int, row: int) -> CoordinateRecord | None:
        """Return the record for *path*/*row*, or ``None`` when absent."""
        return self._records.get(swath_key(path, row))

    def enrich(self, cell: SwathCell) -> CoordinateRecord:
        """Return the record for *cell*, or the all-``None`` default."""
        record = self.lookup(cell.path, cell.row)
        if record is None:
            logger.debug("No coordinate record | key=%s", cell.key)
            return CoordinateRecord.empty()
        return record

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_coordinate_table(path: str | Path) -> CoordinateIndex:
    """Load the coordinate table at *path* into a ``CoordinateIndex``.

    Raises:
        CoordinateTableError: If the file is missing, has an unsupported
            extension or its contents are malformed.
    """
    table_path = Path(path)
    source = str(table_path)
    if not table_path.is_file():
        raise CoordinateTableError(source, "coordinate table not found")

    suffix = table_path.suffix.lower()
    if suffix == ".csv":
        with table_path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.DictReader(handle)
            if not reader.fieldnames:
                raise CoordinateTableError(source, "table has no header row")
            _check_columns((_normalise_header(h) for h in reader.fieldnames), source)
            index = CoordinateIndex.build(reader, source=source)
    elif suffix == ".xlsx":
        index = CoordinateIndex.build(_iter_xlsx_rows(table_path), source=source)
    else:
        msg = f"unsupported table format {suffix!r} (expected .csv or .xlsx)"
        raise CoordinateTableError(source, msg)

    if not len(index):
        raise CoordinateTableError(source, "table has no data rows")
    return index


def _iter_xlsx_rows(table_path: Path) -> Iterator[dict[str, Any]]:
    """Yield the first worksheet's rows as header → value dicts."""
    source = str(table_path)
    try:
        workbook = load_workbook(table_path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile, OSError, KeyError, ValueError) as exc:
        raise CoordinateTableError(source, f"cannot open workbook: {exc}") from exc

    try:
        rows = workbook.active.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise CoordinateTableError(source, "worksheet is empty")
        columns = [str(h) if h is not None else None for h in header]
        _check_columns((_normalise_header(c) for c in columns if c is not None), source)
        for values in rows:
            if all(v is None for v in values):
                continue
            yield {col: val for col, val in zip(columns, values, strict=False) if col is not None}
    finally:
        workbook.close()


# ---------------------------------------------------------------------------
# Cell parsing helpers
# ---------------------------------------------------------------------------


def _normalise_header(header: str) -> str:
    return " ".join(str(header).split()).upper()


def _check_columns(present: Iterable[str], source: str) -> None:
    missing = REQUIRED_TABLE_COLUMNS - set(present)
    if missing:
        msg = f"missing required column(s): {', '.join(sorted(missing))}"
        raise CoordinateTableError(source, msg)


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: object, column: str, line_no: int, source: str) -> int:
    if _is_blank(value):
        raise CoordinateTableError(source, f"row {line_no}: {column} is empty")
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"row {line_no}: {column}={value!r} is not an integer"
        raise CoordinateTableError(source, msg) from exc
    if not number.is_integer():
        msg = f"row {line_no}: {column}={value!r} is not an integer"
        raise CoordinateTableError(source, msg)
    return int(number)


def _parse_float(value: object, column: str, line_no: int, source: str) -> float | None:
    if _is_blank(value):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        msg = f"row {line_no}: {column}={value!r} is not a number"
        raise CoordinateTableError(source, msg) from exc
