"""Classifier backend lifecycle exceptions.

These exceptions are raised while binding or running a classification
session and signal that inference cannot proceed.
"""

from .base import PolitenessError


class BackendUnavailableError(PolitenessError):
    """Raised when the requested (or default) device is not available.

    Attributes:
        requested: Device id or name that was asked for, if any.
        available: Ids of the devices the runtime enumerated.
    """

    def __init__(self, message: str, *, requested: str | None = None, available: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.requested = requested
        self.available = available


class ModelLoadError(PolitenessError):
    """Raised when the model artifact is missing or cannot be loaded.

    Attributes:
        model_path: Path that failed to load.
    """

    def __init__(self, message: str, *, model_path: str) -> None:
        super().__init__(message)
        self.model_path = model_path


class NotInitializedError(PolitenessError):
    """Raised when inference is requested before a session is bound."""


__all__ = ["BackendUnavailableError", "ModelLoadError", "NotInitializedError"]
