"""Minimal observer list shared by the status channel and the view."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ObserverList(Generic[T]):
    """Ordered listeners notified synchronously with each published value.

    A listener that raises is logged and skipped; the remaining listeners
    still receive the value.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def notify(self, value: T) -> None:
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:  # noqa: BLE001
                logger.exception("observer %r failed", listener)


__all__ = ["ObserverList"]
