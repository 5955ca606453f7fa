"""Convenant document generation - configuration and shared utilities."""

__version__ = "0.1.0"
