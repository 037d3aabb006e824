"""Upstream provider adapters.

Implements the provider-agnostic adapter pattern:
- SpatialQueryProvider / CycleCalendarProvider: abstract interfaces
- ArcGisSpatialQueryProvider: WRS-2 point query against an ArcGIS feature layer
- UsgsCycleCalendarProvider: USGS acquisition cycle calendar
"""

from landsat_revisit.providers.arcgis import ArcGisSpatialQueryProvider
from landsat_revisit.providers.base import CycleCalendarProvider, SpatialQueryProvider
from landsat_revisit.providers.usgs import UsgsCycleCalendarProvider

__all__ = [
    "ArcGisSpatialQueryProvider",
    "CycleCalendarProvider",
    "SpatialQueryProvider",
    "UsgsCycleCalendarProvider",
]
