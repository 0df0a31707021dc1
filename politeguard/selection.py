"""Suggested-response cursor.

Each customer question carries a handful of canned replies ordered from
most to least polite. The cursor tracks which reply is shown and the tier
the author is steering toward. Both values saturate at their bounds.
"""

from __future__ import annotations

import random

from .state import ResponseSelection

MIN_TIER = 0
MAX_TIER = 3


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class ResponseCursor:
    """Bounded (response index, politeness tier) pair."""

    def __init__(self, response_count: int = 0, *, rng: random.Random | None = None) -> None:
        self._count = max(0, int(response_count))
        self._rng = rng or random.Random()
        self._selection = ResponseSelection()

    @property
    def response_count(self) -> int:
        return self._count

    @property
    def index(self) -> int:
        return self._selection.index

    @property
    def tier(self) -> int:
        return self._selection.tier

    @property
    def selection(self) -> ResponseSelection:
        return ResponseSelection(index=self._selection.index, tier=self._selection.tier)

    def _max_index(self) -> int:
        return max(0, self._count - 1)

    def reset(self, response_count: int | None = None) -> None:
        """Start over, e.g. when another question is selected."""
        if response_count is not None:
            self._count = max(0, int(response_count))
        self._selection = ResponseSelection()

    def select(self, index: int) -> int:
        self._selection.index = _clamp(int(index), 0, self._max_index())
        return self._selection.index

    def next_response(self) -> int:
        return self.select(self._selection.index + 1)

    def previous_response(self) -> int:
        return self.select(self._selection.index - 1)

    def random_response(self) -> int | None:
        """Jump to a random reply; None when there are no replies."""
        if self._count == 0:
            return None
        return self.select(self._rng.randrange(self._count))

    def set_tier(self, tier: int) -> int:
        self._selection.tier = _clamp(int(tier), MIN_TIER, MAX_TIER)
        return self._selection.tier

    def more_polite(self) -> int:
        return self.set_tier(self._selection.tier - 1)

    def less_polite(self) -> int:
        return self.set_tier(self._selection.tier + 1)


__all__ = ["MIN_TIER", "MAX_TIER", "ResponseCursor"]
