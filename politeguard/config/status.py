"""User-visible status strings.

Initialization stages are published on the service status channel; the
analysis strings are what the debounce orchestrator writes to the view.
"""

STAGE_LOADING_TOKENIZER = "Loading tokenizer..."
STAGE_RESOLVING_MODEL = "Resolving model..."
STAGE_ENUMERATING_DEVICES = "Enumerating devices..."
STAGE_READY_FOR_SELECTION = "Ready for device selection"
STAGE_LOADING_MODEL = "Loading model with {device}..."
STAGE_MODEL_READY = "Model ready"
STAGE_INIT_FAILED = "Initialization failed"

STATUS_RUNNING = "Running inference..."
STATUS_ANALYSIS_ERROR = "Analysis error"

NO_TEXT_DESCRIPTION = "no text to analyze"


__all__ = [
    "STAGE_LOADING_TOKENIZER",
    "STAGE_RESOLVING_MODEL",
    "STAGE_ENUMERATING_DEVICES",
    "STAGE_READY_FOR_SELECTION",
    "STAGE_LOADING_MODEL",
    "STAGE_MODEL_READY",
    "STAGE_INIT_FAILED",
    "STATUS_RUNNING",
    "STATUS_ANALYSIS_ERROR",
    "NO_TEXT_DESCRIPTION",
]
