"""Read pipeline for webreader."""

from .base import ReaderPipeline, process

__all__ = ["ReaderPipeline", "process"]
