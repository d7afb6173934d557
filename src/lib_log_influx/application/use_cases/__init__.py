"""Application use cases composing the write pipeline."""

from __future__ import annotations

from .encode_point import PointEncoder, render_message
from .shutdown import create_shutdown
from .write_point import BufferedPointWriter, coerce_interval, create_point_writer

__all__ = [
    "BufferedPointWriter",
    "PointEncoder",
    "coerce_interval",
    "create_point_writer",
    "create_shutdown",
    "render_message",
]
