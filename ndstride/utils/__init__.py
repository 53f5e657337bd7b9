"""Utility functions and helpers."""

from ndstride.utils.config import Config

__all__ = [
    "Config",
]
