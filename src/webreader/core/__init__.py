"""Core reader API."""

from .reader import WebReader, read_blocking

__all__ = ["WebReader", "read_blocking"]
