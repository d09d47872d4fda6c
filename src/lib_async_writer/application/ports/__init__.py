"""Protocols separating the batching policy from concrete collaborators."""

from __future__ import annotations

from .sink import SinkPort
from .writer import TextWriterPort

__all__ = ["SinkPort", "TextWriterPort"]
