"""Swath matching against cycle calendar facts."""
