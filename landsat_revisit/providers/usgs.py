"""USGS acquisition cycle calendar adapter.

Fetches the public ``cycles_full.json`` document, which lists for each
Landsat satellite and each calendar date the WRS-2 paths imaged that
day.  The document is returned unparsed; ``calendar.parser`` owns its
conventions.
"""

from __future__ import annotations

import logging
from typing import Any

from landsat_revisit.core.exceptions import UpstreamError
from landsat_revisit.providers.base import CycleCalendarProvider

logger = logging.getLogger(__name__)


class UsgsCycleCalendarProvider(CycleCalendarProvider):
    """Downloads the acquisition cycle calendar on every call."""

    async def fetch_calendar(self) -> dict[str, Any]:
        body = await self._get_json()
        if not isinstance(body, dict):
            msg = f"calendar document must be an object, got {type(body).__name__}"
            raise UpstreamError(self.source, msg)
        logger.info("Cycle calendar fetched | satellites=%d", len(body))
        return body
