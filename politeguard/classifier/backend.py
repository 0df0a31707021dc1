"""Classifier backend: device choice, session binding and forward passes.

ClassifierBackend owns at most one live ClassifierSession. Rebinding
releases the current session before the new one is created, so two
sessions never hold the same model at once. A failed bind leaves the
backend unbound rather than half-constructed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import BackendUnavailableError, ModelLoadError, NotInitializedError
from ..state import DeviceDescriptor, EncodedInput, Prediction
from .runtime import ClassifierRuntime, ClassifierSession
from .scoring import predict

logger = logging.getLogger(__name__)


class ClassifierBackend:
    """Session lifecycle around a ClassifierRuntime.

    Attributes:
        model_path: Artifact the sessions load.
        preferred_device: Device id or name used when bind() gets no device.
    """

    def __init__(
        self,
        runtime: ClassifierRuntime,
        model_path: str | Path,
        *,
        preferred_device: str | None = None,
    ) -> None:
        self._runtime = runtime
        self.model_path = Path(model_path)
        self.preferred_device = preferred_device
        self._session: ClassifierSession | None = None

    # ============================================================================
    # Device selection
    # ============================================================================

    @property
    def runtime(self) -> ClassifierRuntime:
        return self._runtime

    @property
    def device(self) -> DeviceDescriptor | None:
        session = self._session
        return session.device if session is not None else None

    @property
    def is_bound(self) -> bool:
        return self._session is not None

    def enumerate_devices(self) -> tuple[DeviceDescriptor, ...]:
        return self._runtime.enumerate_devices()

    def resolve_device(self, device: DeviceDescriptor | str | None = None) -> DeviceDescriptor:
        """Pick the device a bind should use.

        Explicit descriptors must be among the enumerated devices; strings
        match a device id or display name; None falls back to the preferred
        device, then to the first enumerated one.

        Raises:
            BackendUnavailableError: No device matches, or none exist.
        """
        devices = self.enumerate_devices()
        available = tuple(d.device_id for d in devices)
        if not devices:
            raise BackendUnavailableError(
                f"{self._runtime.kind} runtime reported no devices",
                available=available,
            )

        if isinstance(device, DeviceDescriptor):
            if device not in devices:
                raise BackendUnavailableError(
                    f"device {device} is not available",
                    requested=device.device_id,
                    available=available,
                )
            return device

        query = device if device is not None else self.preferred_device
        if query is None:
            return devices[0]
        for candidate in devices:
            if candidate.matches(query):
                return candidate
        raise BackendUnavailableError(
            f"device {query!r} is not available (have: {', '.join(available)})",
            requested=query,
            available=available,
        )

    # ============================================================================
    # Session lifecycle
    # ============================================================================

    def bind(self, device: DeviceDescriptor | str | None = None) -> DeviceDescriptor:
        """Bind a session on ``device``, releasing any previous session first.

        Raises:
            BackendUnavailableError: The device is not enumerated.
            ModelLoadError: The artifact is missing or cannot be loaded.
        """
        target = self.resolve_device(device)
        self.release()
        try:
            session = self._runtime.open_session(target, self.model_path)
        except ModelLoadError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise ModelLoadError(
                f"failed to open session for {self.model_path} on {target}: {exc}",
                model_path=str(self.model_path),
            ) from exc
        self._session = session
        logger.info("classifier: bound model=%s device=%s", self.model_path, target)
        return target

    def release(self) -> None:
        session = self._session
        if session is None:
            return
        self._session = None
        try:
            session.close()
        finally:
            logger.info("classifier: released session device=%s", session.device)

    # ============================================================================
    # Inference
    # ============================================================================

    def run(self, encoded: EncodedInput) -> list[float]:
        """Forward pass returning raw scores (index 0 polite, 1 impolite)."""
        session = self._session
        if session is None:
            raise NotInitializedError("no classification session is bound")
        scores = session.run(encoded)
        if not scores:
            raise RuntimeError("classifier returned an empty score vector")
        return scores

    def classify(self, encoded: EncodedInput) -> Prediction:
        return predict(self.run(encoded))


__all__ = ["ClassifierBackend"]
