"""Azure Functions entry point — Landsat WRS-2 revisit lookup.

This module registers the HTTP functions using the Python v2
programming model.

All business logic lives in the landsat_revisit package. This file is
purely the wiring layer between Azure Functions bindings and
application code.

Configuration and the coordinate table are loaded once at import so a
bad deployment fails at host startup rather than on the first request.
"""

from __future__ import annotations

import json
import logging
import uuid

import azure.functions as func

from landsat_revisit.core.config import ServiceConfig
from landsat_revisit.core.ingress import HttpReply, handle_lookup, handle_today
from landsat_revisit.orchestrators.revisit import build_service

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

logger = logging.getLogger("landsat_revisit.function_app")

config = ServiceConfig.from_env()
service = build_service(config)

logger.info(
    "Revisit service ready | coordinate_records=%d | calendar_url=%s",
    len(service.index),
    config.cycle_calendar_url,
)


def _correlation_id(req: func.HttpRequest) -> str:
    return req.headers.get("x-correlation-id") or str(uuid.uuid4())


def _to_http_response(reply: HttpReply, correlation_id: str) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(reply.body),
        status_code=reply.status_code,
        mimetype="application/json",
        headers={
            "Access-Control-Allow-Origin": config.cors_allowed_origin,
            "x-correlation-id": correlation_id,
        },
    )


# ---------------------------------------------------------------------------
# HTTP: point lookup
# ---------------------------------------------------------------------------


@app.function_name("lookup")
@app.route(route="lookup", methods=["GET"])
async def lookup(req: func.HttpRequest) -> func.HttpResponse:
    """Return the WRS-2 cells covering ``lat``/``lon`` and their revisit dates.

    Query parameters:
        - ``lat``, ``lon``: decimal degrees (required).
        - ``shape``: ``cells`` (default), ``aggregate``, ``satellites`` or
          ``pathrows``.

    Status codes: 200, 400 (invalid parameters), 404 (no cell or no
    date), 500 (upstream unavailable).
    """
    correlation_id = _correlation_id(req)
    reply = await handle_lookup(service, req.params, correlation_id=correlation_id)
    logger.info(
        "lookup request handled | status=%d | correlation_id=%s",
        reply.status_code,
        correlation_id,
    )
    return _to_http_response(reply, correlation_id)


# ---------------------------------------------------------------------------
# HTTP: paths imaged today
# ---------------------------------------------------------------------------


@app.function_name("today")
@app.route(route="today", methods=["GET"])
async def today(req: func.HttpRequest) -> func.HttpResponse:
    """Return satellite label → WRS-2 paths imaged on today's date.

    Status codes: 200, 404 (no calendar entry for today), 500.
    """
    correlation_id = _correlation_id(req)
    reply = await handle_today(service, correlation_id=correlation_id)
    logger.info(
        "today request handled | status=%d | correlation_id=%s",
        reply.status_code,
        correlation_id,
    )
    return _to_http_response(reply, correlation_id)


# ---------------------------------------------------------------------------
# HTTP: health
# ---------------------------------------------------------------------------


@app.function_name("health")
@app.route(route="health", methods=["GET"])
def health(req: func.HttpRequest) -> func.HttpResponse:
    """Liveness probe for load balancers."""
    reply = HttpReply(
        200,
        {"status": "healthy", "coordinate_records": len(service.index)},
    )
    return _to_http_response(reply, _correlation_id(req))
