"""Acquisition cycle calendar parsing."""
