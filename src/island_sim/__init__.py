"""Procedural island generation with a small plant and animal simulation."""

__version__ = "0.1.0"
