"""Root logging setup plus per-task ``generation`` / ``device`` log fields.

The debounce orchestrator tags records with the generation it is serving
and the service tags bind records with the target device. Fields not set
in the current context render as ``-``.
"""

from __future__ import annotations

import logging
import contextlib
from collections.abc import Iterator
from contextvars import ContextVar

_FIELDS: dict[str, ContextVar[str]] = {
    "generation": ContextVar("generation", default="-"),
    "device": ContextVar("device", default="-"),
}


@contextlib.contextmanager
def log_context(*, generation: int | None = None, device: str | None = None) -> Iterator[None]:
    """Tag records logged inside the block; unset fields keep their outer value."""
    values = {"generation": generation, "device": device}
    tokens = [(_FIELDS[name], _FIELDS[name].set(str(value))) for name, value in values.items() if value is not None]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


def install_log_context() -> None:
    """Install a LogRecord factory that copies the context fields onto records."""
    if getattr(install_log_context, "_installed", False):
        return

    old_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = old_factory(*args, **kwargs)
        for name, var in _FIELDS.items():
            setattr(record, name, var.get())
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


def configure_logging(level: str | None = None) -> None:
    """Initialize root logging configuration once per process."""
    from politeguard.config.logging import APP_LOG_LEVEL, APP_LOG_FORMAT, APP_LOG_DATEFMT  # noqa: PLC0415

    resolved = (level or APP_LOG_LEVEL).upper()
    install_log_context()
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(level=resolved, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    else:
        root_logger.setLevel(resolved)
        for handler in root_logger.handlers:
            with contextlib.suppress(Exception):
                handler.setLevel(resolved)
                handler.setFormatter(logging.Formatter(APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT))

    logging.getLogger("politeguard").setLevel(resolved)


__all__ = ["configure_logging", "install_log_context", "log_context"]
