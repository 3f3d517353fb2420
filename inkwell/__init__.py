"""Inkwell: REST API for user-owned blog posts."""

__version__ = "0.1.0"
