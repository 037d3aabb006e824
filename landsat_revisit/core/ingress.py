"""Thin ingress boundary helpers for the HTTP entrypoints.

Centralises the transport concerns so that ``function_app.py`` contains
only trigger bindings and handoff:

- **parse_coordinate_param / parse_shape_param** — turn raw query
  parameters into typed values, raising ``InvalidParamsError``.
- **handle_lookup / handle_today** — run a service call and convert the
  outcome (result or domain error) into an ``HttpReply``.
- **error_reply** — map the exception taxonomy onto HTTP status codes
  without leaking upstream internals to the caller.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from landsat_revisit.core.exceptions import (
    InvalidParamsError,
    NoMatchError,
    ServiceError,
    UpstreamError,
    ValidationError,
)
from landsat_revisit.models.responses import ResponseShape

if TYPE_CHECKING:
    from collections.abc import Awaitable, Mapping

    from landsat_revisit.orchestrators.revisit import RevisitService

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HttpReply:
    """Transport-neutral HTTP reply: status code plus JSON body."""

    status_code: int
    body: Any = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Query parameter parsing
# ---------------------------------------------------------------------------


def parse_coordinate_param(params: Mapping[str, str], name: str) -> float:
    """Return query parameter *name* as a finite float.

    Raises:
        InvalidParamsError: If the parameter is missing, not numeric, or
            not finite.
    """
    raw = params.get(name)
    if raw is None or not str(raw).strip():
        raise InvalidParamsError(name, f"missing required parameter '{name}'")
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise InvalidParamsError(name, f"{name} must be a number, got {raw!r}") from exc
    if not math.isfinite(value):
        raise InvalidParamsError(name, f"{name} must be a finite number, got {raw!r}")
    return value


def parse_shape_param(params: Mapping[str, str]) -> ResponseShape:
    """Return the ``shape`` parameter as a ``ResponseShape`` (default ``cells``).

    Raises:
        InvalidParamsError: If the value names no known shape.
    """
    raw = str(params.get("shape") or ResponseShape.CELLS.value).strip().lower()
    try:
        return ResponseShape(raw)
    except ValueError as exc:
        allowed = ", ".join(s.value for s in ResponseShape)
        msg = f"unknown shape {raw!r}; expected one of: {allowed}"
        raise InvalidParamsError("shape", msg) from exc


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def error_reply(exc: Exception, *, correlation_id: str = "") -> HttpReply:
    """Map an exception raised while handling a request to an ``HttpReply``.

    - ``ValidationError`` → 400
    - ``NoMatchError``    → 404
    - ``UpstreamError``   → 500 with an opaque message
    - anything else       → 500 ``INTERNAL_ERROR``
    """
    if isinstance(exc, ValidationError):
        logger.info("Rejected request | code=%s | %s", exc.code, exc.message)
        return HttpReply(400, _error_body(exc.code, exc.message, correlation_id))

    if isinstance(exc, NoMatchError):
        logger.info("No match | stage=%s | %s", exc.stage, exc.message)
        return HttpReply(404, _error_body(exc.code, exc.message, correlation_id))

    if isinstance(exc, UpstreamError):
        exc.correlation_id = exc.correlation_id or correlation_id
        logger.error(
            "Upstream failure | source=%s | error=%s | correlation_id=%s",
            exc.source,
            exc.to_error_dict(),
            correlation_id,
            exc_info=exc,
        )
        return HttpReply(
            500, _error_body(exc.code, UpstreamError.PUBLIC_MESSAGE, correlation_id)
        )

    if isinstance(exc, ServiceError):
        logger.error("Service error | error=%s", exc.to_error_dict(), exc_info=exc)
        return HttpReply(
            500, _error_body(exc.code or "INTERNAL_ERROR", "Internal error", correlation_id)
        )

    logger.error("Unhandled error | correlation_id=%s", correlation_id, exc_info=exc)
    return HttpReply(500, _error_body("INTERNAL_ERROR", "Internal error", correlation_id))


def _error_body(code: str, message: str, correlation_id: str) -> dict[str, object]:
    error: dict[str, object] = {"code": code, "message": message}
    if correlation_id:
        error["correlation_id"] = correlation_id
    return {"error": error}


# ---------------------------------------------------------------------------
# Request handlers
# ---------------------------------------------------------------------------


async def _run(call: Awaitable[Any], *, correlation_id: str) -> HttpReply:
    try:
        result = await call
    except Exception as exc:  # noqa: BLE001
        return error_reply(exc, correlation_id=correlation_id)
    return HttpReply(200, result.to_body())


async def handle_lookup(
    service: RevisitService,
    params: Mapping[str, str],
    *,
    correlation_id: str = "",
) -> HttpReply:
    """Validate ``lat``/``lon``/``shape`` and run ``service.lookup``.

    Parameter errors are returned before the service (and therefore any
    upstream) is called.
    """
    try:
        latitude = parse_coordinate_param(params, "lat")
        longitude = parse_coordinate_param(params, "lon")
        shape = parse_shape_param(params)
    except InvalidParamsError as exc:
        return error_reply(exc, correlation_id=correlation_id)

    return await _run(service.lookup(latitude, longitude, shape), correlation_id=correlation_id)


async def handle_today(service: RevisitService, *, correlation_id: str = "") -> HttpReply:
    """Run ``service.today`` and wrap the outcome."""
    return await _run(service.today(), correlation_id=correlation_id)
