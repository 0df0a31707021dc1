"""Debounce and inference timing configuration.

Values are sourced from environment variables with sensible defaults.
"""

from ..helpers.env import env_float


# Quiet period after the last keystroke before inference runs
POLITE_DEBOUNCE_MS = env_float("POLITE_DEBOUNCE_MS", 800.0)

# Hard ceiling on a single run step (encode + forward pass)
POLITE_ANALYZE_TIMEOUT_S = env_float("POLITE_ANALYZE_TIMEOUT_S", 30.0)


__all__ = [
    "POLITE_DEBOUNCE_MS",
    "POLITE_ANALYZE_TIMEOUT_S",
]
