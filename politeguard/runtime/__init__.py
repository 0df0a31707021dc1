"""Runtime assembly for the analysis stack."""

from .dependencies import RuntimeDeps
from .bootstrap import build_runtime_deps

__all__ = ["RuntimeDeps", "build_runtime_deps"]
