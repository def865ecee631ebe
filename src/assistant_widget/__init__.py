"""Floating AI assistant widget."""

__version__ = "0.1.0"
