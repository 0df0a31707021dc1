"""Initialization status channel.

The inference service writes named stage strings here ("Enumerating
devices...", "Model ready", ...); presentation code subscribes to show
progress.
"""

from __future__ import annotations

from collections.abc import Callable

from .observers import ObserverList


class StatusChannel:
    """Publish/subscribe channel of stage-name strings."""

    def __init__(self) -> None:
        self._observers: ObserverList[str] = ObserverList()
        self._latest = ""

    @property
    def latest(self) -> str:
        return self._latest

    def subscribe(self, listener: Callable[[str], None]) -> Callable[[], None]:
        return self._observers.subscribe(listener)

    def publish(self, status: str) -> None:
        self._latest = status
        self._observers.notify(status)


__all__ = ["StatusChannel"]
