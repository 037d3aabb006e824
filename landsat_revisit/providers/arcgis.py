"""ArcGIS feature-layer adapter for WRS-2 spatial queries.

Issues a point-intersection ``query`` against a WRS-2 descending
path/row feature layer and converts the returned features into
``SwathCell`` records.

Both response encodings of the ``query`` operation are accepted:

- Esri JSON (``f=json``): ``{"features": [{"attributes": {"PATH": 12, "ROW": 30}}]}``
- GeoJSON (``f=geojson``): ``{"features": [{"properties": {"PATH": 12, "ROW": 30}}]}``

ArcGIS reports many failures as HTTP 200 with an ``error`` object in the
body; those are upstream errors too.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from landsat_revisit.core.constants import SPATIAL_PATH_FIELD, SPATIAL_ROW_FIELD
from landsat_revisit.core.exceptions import UpstreamError
from landsat_revisit.models.swath import SwathCell
from landsat_revisit.providers.base import SpatialQueryProvider

if TYPE_CHECKING:
    import httpx

    from landsat_revisit.models.swath import GeoPoint

logger = logging.getLogger(__name__)


class ArcGisSpatialQueryProvider(SpatialQueryProvider):
    """Point query against an ArcGIS WRS-2 feature layer.

    Args:
        url: The layer's ``.../FeatureServer/<n>/query`` endpoint.
        token: Opaque credential, passed through as the ``token`` parameter.
        timeout_s: Per-request timeout in seconds.
        transport: Optional httpx transport for tests.
    """

    def __init__(
        self,
        url: str,
        *,
        token: str = "",
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(url, timeout_s=timeout_s, transport=transport)
        self._token = token

    def build_params(self, point: GeoPoint) -> dict[str, str]:
        """Return the query parameters for a point-intersection query."""
        params = {
            "geometry": f"{point.longitude},{point.latitude}",
            "geometryType": "esriGeometryPoint",
            "inSR": "4326",
            "spatialRel": "esriSpatialRelIntersects",
            "outFields": f"{SPATIAL_PATH_FIELD},{SPATIAL_ROW_FIELD}",
            "returnGeometry": "false",
            "f": "json",
        }
        if self._token:
            params["token"] = self._token
        return params

    async def query_cells(self, point: GeoPoint) -> list[SwathCell]:
        body = await self._get_json(self.build_params(point))
        cells = parse_features(body)
        logger.info(
            "Spatial query completed | lat=%s | lon=%s | cells=%d",
            point.latitude,
            point.longitude,
            len(cells),
        )
        return cells


def parse_features(body: Any) -> list[SwathCell]:
    """Convert a feature-layer query response into ``SwathCell`` records.

    Raises:
        UpstreamError: If the body is an error object, lacks a ``features``
            list, or a feature has a missing or non-integer PATH/ROW.
    """
    source = SpatialQueryProvider.source
    if not isinstance(body, dict):
        msg = f"query response must be an object, got {type(body).__name__}"
        raise UpstreamError(source, msg)

    if "error" in body:
        error = body["error"]
        detail = error.get("message", error) if isinstance(error, dict) else error
        raise UpstreamError(source, f"query returned an error: {detail}")

    features = body.get("features")
    if not isinstance(features, list):
        raise UpstreamError(source, "query response has no 'features' list")

    cells: list[SwathCell] = []
    for position, feature in enumerate(features):
        values = _feature_values(feature)
        if values is None:
            raise UpstreamError(source, f"feature {position} has no attributes")
        cells.append(
            SwathCell(
                path=_int_field(values, SPATIAL_PATH_FIELD, position),
                row=_int_field(values, SPATIAL_ROW_FIELD, position),
            )
        )
    return cells


def _feature_values(feature: Any) -> dict[str, Any] | None:
    if not isinstance(feature, dict):
        return None
    for key in ("attributes", "properties"):
        values = feature.get(key)
        if isinstance(values, dict):
            return values
    return None


def _int_field(values: dict[str, Any], name: str, position: int) -> int:
    raw = values.get(name)
    if raw is None:
        # Some layers publish lower-case field names.
        raw = values.get(name.lower())
    if isinstance(raw, bool):
        raw = None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    msg = f"feature {position} has invalid {name}={raw!r}"
    raise UpstreamError(SpatialQueryProvider.source, msg)
