"""Compute device descriptor."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeviceDescriptor:
    """An enumerated compute device for a classifier runtime.

    Attributes:
        backend: Runtime kind that produced the device ("onnx" or "torch").
        device_id: Opaque runtime identifier (execution provider or torch device).
        name: Human-readable name for pickers and status lines.
    """

    backend: str
    device_id: str
    name: str

    def matches(self, query: str) -> bool:
        """Case-insensitive match against the id or the display name."""
        wanted = query.strip().lower()
        return wanted in (self.device_id.lower(), self.name.lower())

    def __str__(self) -> str:
        return f"{self.name} ({self.backend}:{self.device_id})"


__all__ = ["DeviceDescriptor"]
