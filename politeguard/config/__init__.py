"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- encoder: sequence length and special-token table
- model: artifact path, runtime kind, device preference, threshold
- timeouts: debounce quiet period and run-step timeout
- status: user-visible stage and status strings
- logging: log level and format
"""

from .encoder import (
    POLITE_MAX_LENGTH,
    PAD_TOKEN_ID,
    UNK_TOKEN_ID,
    CLS_TOKEN_ID,
    SEP_TOKEN_ID,
    SPECIAL_TOKEN_IDS,
)
from .model import (
    POLITE_MODEL_PATH,
    POLITE_BACKEND,
    POLITE_DEVICE,
    SUPPORTED_BACKENDS,
    POLITE_CONFIDENCE_THRESHOLD,
    POLITE_CLASS_INDEX,
    IMPOLITE_CLASS_INDEX,
    POLITE_COMPILE,
    POLITE_ORT_LOG_SEVERITY,
)
from .timeouts import (
    POLITE_DEBOUNCE_MS,
    POLITE_ANALYZE_TIMEOUT_S,
)

__all__ = [
    "POLITE_MAX_LENGTH",
    "PAD_TOKEN_ID",
    "UNK_TOKEN_ID",
    "CLS_TOKEN_ID",
    "SEP_TOKEN_ID",
    "SPECIAL_TOKEN_IDS",
    "POLITE_MODEL_PATH",
    "POLITE_BACKEND",
    "POLITE_DEVICE",
    "SUPPORTED_BACKENDS",
    "POLITE_CONFIDENCE_THRESHOLD",
    "POLITE_CLASS_INDEX",
    "IMPOLITE_CLASS_INDEX",
    "POLITE_COMPILE",
    "POLITE_ORT_LOG_SEVERITY",
    "POLITE_DEBOUNCE_MS",
    "POLITE_ANALYZE_TIMEOUT_S",
]
