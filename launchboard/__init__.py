"""Merged past/upcoming SpaceX launch list with search and detail lookup."""

__version__ = "0.1.0"
