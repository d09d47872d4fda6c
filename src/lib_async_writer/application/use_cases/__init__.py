"""Use cases orchestrating the batching policy."""

from __future__ import annotations

from .drain import create_drain_cycle

__all__ = ["create_drain_cycle"]
