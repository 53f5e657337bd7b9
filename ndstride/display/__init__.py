"""Read-only presentation of arrays: text and pandas."""

from ndstride.display.format import format_array, format_info
from ndstride.display.frame import to_frame

__all__ = [
    "format_array",
    "format_info",
    "to_frame",
]
