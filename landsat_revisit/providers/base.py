"""Upstream provider abstract base classes.

Defines the contracts for the two upstream collaborators.  The service
interacts exclusively with these interfaces and never knows which
concrete adapter is behind them:

- ``SpatialQueryProvider.query_cells(point)`` — WRS-2 cells covering a point.
- ``CycleCalendarProvider.fetch_calendar()``  — raw acquisition calendar.

Both raise ``UpstreamError`` on transport failures, non-2xx responses
and unparseable payloads.  There is no retry and no caching: every call
goes to the upstream.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING, Any

import httpx

from landsat_revisit.core.exceptions import UpstreamError

if TYPE_CHECKING:
    from landsat_revisit.models.swath import GeoPoint, SwathCell

logger = logging.getLogger(__name__)


class _HttpProvider:
    """Shared plumbing for httpx-backed adapters.

    Args:
        url: Upstream endpoint.
        timeout_s: Per-request timeout in seconds.
        transport: Optional httpx transport (``httpx.MockTransport`` in tests).
    """

    #: Name reported in ``UpstreamError.source`` and logs.
    source: str = ""

    def __init__(
        self,
        url: str,
        *,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout_s = timeout_s
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def _get_json(self, params: dict[str, str] | None = None) -> Any:
        """GET the endpoint and decode its JSON body.

        Raises:
            UpstreamError: On transport failure, non-2xx status or a body
                that is not JSON.
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_s,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(self._url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            msg = f"HTTP {exc.response.status_code} from {self._url}"
            raise UpstreamError(self.source, msg) from exc
        except httpx.HTTPError as exc:
            msg = f"request to {self._url} failed: {exc!r}"
            raise UpstreamError(self.source, msg) from exc
        except ValueError as exc:
            msg = f"response from {self._url} is not valid JSON: {exc}"
            raise UpstreamError(self.source, msg) from exc


class SpatialQueryProvider(_HttpProvider, abc.ABC):
    """Returns the WRS-2 cells intersecting a point."""

    source = "spatial_query"

    @abc.abstractmethod
    async def query_cells(self, point: GeoPoint) -> list[SwathCell]:
        """Return the cells intersecting *point* in upstream order.

        An empty list means the point is covered by no cell; it is not
        an error at this layer.

        Raises:
            UpstreamError: On any upstream failure.
        """


class CycleCalendarProvider(_HttpProvider, abc.ABC):
    """Returns the raw acquisition cycle calendar."""

    source = "cycle_calendar"

    @abc.abstractmethod
    async def fetch_calendar(self) -> dict[str, Any]:
        """Return the raw ``landsat_<N>`` → date → ``{"path": ...}`` mapping.

        Raises:
            UpstreamError: On any upstream failure.
        """
