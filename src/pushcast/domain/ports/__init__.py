"""Domain port definitions for adapters."""

from __future__ import annotations

from .transport import MulticastTransport, TransientUnavailable

__all__ = ["MulticastTransport", "TransientUnavailable"]
