"""Landsat WRS-2 revisit lookup service.

Given a geographic point, finds the WRS-2 path/row cells covering it
and the calendar dates on which each Landsat satellite images those
paths, joining a spatial query service with the USGS acquisition cycle
calendar.
"""

__version__ = "0.1.0"
