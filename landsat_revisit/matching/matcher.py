"""Swath matcher — joins swath cells against cycle calendar facts.

Three modes:

- ``match_cells``     — per-cell dates for every cell the point query returned.
- ``match_aggregate`` — one shared per-satellite date list across all cells.
- ``match_today``     — paths imaged today, grouped by satellite.

Ordering guarantees: cells keep input order; dates within a satellite
keep first-seen order while walking the facts.  A date already recorded
for a satellite is never recorded again.

An empty point match is valid data.  An empty *today* match is not:
no imagery scheduled anywhere today points at a stale calendar, so
``match_today`` raises ``NoMatchError``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from landsat_revisit.core.exceptions import NoMatchError
from landsat_revisit.models.swath import MatchResult, append_unique

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from landsat_revisit.models.swath import CycleFact, SwathCell

logger = logging.getLogger(__name__)


def match_cells(cells: Sequence[SwathCell], facts: Iterable[CycleFact]) -> list[MatchResult]:
    """Return one ``MatchResult`` per cell, in input order.

    Cells without a matching fact keep an empty ``landsat_dates`` mapping.
    """
    facts = list(facts)
    results: list[MatchResult] = []
    for cell in cells:
        result = MatchResult(cell=cell)
        for fact in facts:
            if cell.path in fact.paths:
                result.add_date(fact.satellite, fact.date)
        results.append(result)

    logger.debug(
        "Per-cell match | cells=%d | facts=%d | matched_cells=%d",
        len(results),
        len(facts),
        sum(1 for r in results if r.landsat_dates),
    )
    return results


def match_aggregate(
    cells: Sequence[SwathCell],
    facts: Iterable[CycleFact],
) -> dict[int, list[str]]:
    """Return satellite → dates for facts touching the path of any cell."""
    wanted = {cell.path for cell in cells}
    grouped: dict[int, list[str]] = {}
    for fact in facts:
        if fact.paths & wanted:
            append_unique(grouped, fact.satellite, fact.date)
    return grouped


def match_today(facts: Iterable[CycleFact], today: str) -> dict[int, list[int]]:
    """Return satellite → ascending paths for facts dated exactly *today*.

    Raises:
        NoMatchError: If no fact carries today's date for any satellite.
    """
    grouped: dict[int, set[int]] = {}
    for fact in facts:
        if fact.date == today:
            grouped.setdefault(fact.satellite, set()).update(fact.paths)

    if not grouped:
        msg = f"No calendar entry for {today}"
        raise NoMatchError(msg)

    return {satellite: sorted(paths) for satellite, paths in grouped.items()}
