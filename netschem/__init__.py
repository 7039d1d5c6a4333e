"""Hierarchical netlists and schematic symbols with an XML cell format."""

__version__ = "0.1.0"