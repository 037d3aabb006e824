"""Cycle calendar parser.

Turns the raw acquisition calendar document::

    {
        "landsat_8": {"1/2/2024": {"path": "12, 13, 44"}, ...},
        "landsat_9": {...},
    }

into an ordered list of ``CycleFact`` records.  This module is the only
place that knows the ``landsat_<N>`` and ``"M/D/YYYY"`` key conventions.

Parsing is lenient per token: a path token that is not an integer is
dropped (and logged as a ``MalformedCalendarEntry``) while the rest of
the entry, and the rest of the calendar, is kept.  A document whose
overall shape is wrong is an upstream failure.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from landsat_revisit.core.constants import CALENDAR_PATH_FIELD, SATELLITE_LABEL_PREFIX
from landsat_revisit.core.exceptions import UpstreamError
from landsat_revisit.models.swath import CycleFact, MalformedCalendarEntry

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import tzinfo

logger = logging.getLogger(__name__)

_SATELLITE_LABEL = re.compile(rf"^{re.escape(SATELLITE_LABEL_PREFIX)}(\d+)$")

CALENDAR_SOURCE = "cycle_calendar"


# ---------------------------------------------------------------------------
# Key conventions
# ---------------------------------------------------------------------------


def satellite_number(label: str) -> int | None:
    """Return ``N`` for a ``"landsat_<N>"`` label, or ``None`` if it does not match."""
    match = _SATELLITE_LABEL.match(label.strip())
    return int(match.group(1)) if match else None


def satellite_label(number: int) -> str:
    """Return the calendar label for satellite *number* (``8`` → ``"landsat_8"``)."""
    return f"{SATELLITE_LABEL_PREFIX}{number}"


def calendar_date_string(day: date) -> str:
    """Format *day* the way the calendar keys are written: ``"M/D/YYYY"``.

    No zero padding; the year is always four digits.
    """
    return f"{day.month}/{day.day}/{day.year:04d}"


def today_string(tz: tzinfo | None = None) -> str:
    """Return today's calendar key in timezone *tz* (local time if ``None``)."""
    return calendar_date_string(datetime.now(tz).date())


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_path_list(
    raw: str,
    *,
    satellite: int = 0,
    date_key: str = "",
    malformed: list[MalformedCalendarEntry] | None = None,
) -> frozenset[int]:
    """Parse ``" 12, 13,13"`` into ``frozenset({12, 13})``.

    Empty tokens (e.g. a trailing comma) are ignored.  Tokens that are
    not integers are skipped and appended to *malformed* when given.
    """
    paths: set[int] = set()
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            paths.add(int(token))
        except ValueError:
            entry = MalformedCalendarEntry(satellite=satellite, date=date_key, token=token)
            if malformed is not None:
                malformed.append(entry)
            logger.warning(
                "Malformed calendar token dropped | satellite=%d | date=%s | token=%r",
                satellite,
                date_key,
                token,
            )
    return frozenset(paths)


def parse_cycle_calendar(
    raw: Mapping[str, Any],
    *,
    malformed: list[MalformedCalendarEntry] | None = None,
) -> list[CycleFact]:
    """Parse the raw cycle calendar into ``CycleFact`` records.

    Args:
        raw: Satellite label → date string → ``{"path": "<csv ints>"}``.
        malformed: Optional list collecting every dropped token.

    Returns:
        One fact per (satellite, date) entry, in document order.

    Raises:
        UpstreamError: If *raw* is not a mapping of mappings.
    """
    if not isinstance(raw, dict):
        msg = f"calendar document must be an object, got {type(raw).__name__}"
        raise UpstreamError(CALENDAR_SOURCE, msg)

    facts: list[CycleFact] = []
    for label, entries in raw.items():
        satellite = satellite_number(str(label))
        if satellite is None:
            logger.warning("Skipping unrecognised calendar key | key=%r", label)
            continue
        if not isinstance(entries, dict):
            msg = f"entries for {label!r} must be an object, got {type(entries).__name__}"
            raise UpstreamError(CALENDAR_SOURCE, msg)

        for date_key, entry in entries.items():
            path_list = entry.get(CALENDAR_PATH_FIELD) if isinstance(entry, dict) else None
            if isinstance(path_list, int) and not isinstance(path_list, bool):
                # Single-path days may be published as a bare number.
                path_list = str(path_list)
            if not isinstance(path_list, str):
                logger.warning(
                    "Skipping calendar entry without a path list | satellite=%d | date=%s",
                    satellite,
                    date_key,
                )
                continue
            paths = parse_path_list(
                path_list,
                satellite=satellite,
                date_key=str(date_key),
                malformed=malformed,
            )
            facts.append(CycleFact(satellite=satellite, date=str(date_key), paths=paths))

    logger.debug("Cycle calendar parsed | facts=%d", len(facts))
    return facts
