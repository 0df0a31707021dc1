"""Response selection state."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ResponseSelection:
    """Suggested-response index paired with a politeness tier (0 = most polite)."""

    index: int = 0
    tier: int = 0


__all__ = ["ResponseSelection"]
