"""Runtime and session interfaces for classifier backends.

A ClassifierRuntime knows which devices a compute library exposes and how
to open a session for one of them. A ClassifierSession owns the loaded
model for exactly one device and runs single forward passes.

Usage:
    class MyRuntime(ClassifierRuntime):
        kind = "my"

        def _discover_devices(self) -> list[DeviceDescriptor]:
            return [DeviceDescriptor("my", "cpu", "CPU")]

        def open_session(self, device, model_path) -> ClassifierSession:
            return MySession(...)
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from pathlib import Path

from ..state import DeviceDescriptor, EncodedInput


class ClassifierSession(ABC):
    """A model loaded on one device."""

    device: DeviceDescriptor

    @abstractmethod
    def run(self, encoded: EncodedInput) -> list[float]:
        """Run one forward pass and return the raw per-class scores."""
        ...

    def close(self) -> None:
        """Release model resources. Override for custom cleanup."""


class ClassifierRuntime(ABC):
    """Device enumeration plus session construction for one compute library.

    Device discovery runs at most once per runtime instance; later calls
    return the cached tuple.
    """

    kind: str = ""

    def __init__(self) -> None:
        self._devices: tuple[DeviceDescriptor, ...] | None = None
        self._lock = threading.Lock()

    @abstractmethod
    def _discover_devices(self) -> list[DeviceDescriptor]:
        """Query the library for devices. Called once under lock."""
        ...

    @abstractmethod
    def open_session(self, device: DeviceDescriptor, model_path: Path) -> ClassifierSession:
        """Load the model at ``model_path`` onto ``device``."""
        ...

    def enumerate_devices(self) -> tuple[DeviceDescriptor, ...]:
        devices = self._devices
        if devices is not None:
            return devices

        with self._lock:
            # Double-check after acquiring lock
            if self._devices is None:
                self._devices = tuple(self._discover_devices())
            return self._devices

    @property
    def devices_enumerated(self) -> bool:
        return self._devices is not None


__all__ = ["ClassifierRuntime", "ClassifierSession"]
