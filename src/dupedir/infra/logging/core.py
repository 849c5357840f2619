from __future__ import annotations

"""
Logging Bootstrap.

The root logger gets a single QueueHandler. A QueueListener thread drains
the queue into the stderr and log-file handlers, so writing the log file
costs the indexing loop nothing. The listener is kept on the root logger
itself, which makes configure_logging safe to call more than once and lets
shutdown_logging flush whatever is still queued.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from dupedir.infra.fs import get_user_data_dir
from dupedir.infra.logging.config import _LEVEL_MAP, LoggingConfig
from dupedir.infra.logging.handlers import is_owned, mark_owned, output_handlers

_CONFIGURED_FLAG_ATTR: str = "_dupedir_configured"
_QUEUE_LISTENER_ATTR: str = "_dupedir_queue_listener"

_EMERGENCY_FMT = "dupedir (logging degraded) | %(levelname)s | %(message)s"


def get_default_log_path(file_name: str = "dupedir.log") -> str:
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Route the root logger through a queue listener.

    A second call keeps the running setup; force=True tears it down and
    applies cfg again. When cfg enables no output at all nothing is
    installed and the root logger is left unconfigured.

    Args:
        cfg: Levels, outputs and formats.
        force: Replace an existing setup.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = _resolve_level(cfg.level)
    root.setLevel(level)
    _detach(root)

    try:
        outputs = output_handlers(cfg, level)
        if outputs:
            _attach_queue(root, outputs)
    except (OSError, RuntimeError, ValueError):
        _attach_emergency_console(root)
        root.warning("Queue logging could not start; writing to stderr directly.")
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flush queued records, stop the listener and remove dupedir's handlers."""
    root = logging.getLogger()
    _detach(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# -----------------------------------------------------------------------------
# ROOT LOGGER WIRING
# -----------------------------------------------------------------------------

def _attach_queue(root: logging.Logger, outputs: List[logging.Handler]) -> None:
    records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    listener = QueueListener(records, *outputs, respect_handler_level=True)
    listener.start()

    root.addHandler(mark_owned(QueueHandler(records)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    atexit.register(_stop_listener, listener)


def _attach_emergency_console(root: logging.Logger) -> None:
    _detach(root)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_EMERGENCY_FMT))
    root.addHandler(mark_owned(handler))
    root.setLevel(logging.INFO)


def _detach(root: logging.Logger) -> None:
    """Stop the current listener, if any, then close every owned handler."""
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if is_owned(h)]:
        root.removeHandler(handler)
        handler.close()


def _stop_listener(listener: Optional[QueueListener]) -> None:
    # A listener stopped earlier (by shutdown_logging or a forced reconfigure)
    # is still registered with atexit; its thread is None by then.
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()


def _resolve_level(level: str) -> int:
    return _LEVEL_MAP.get(str(level or "").strip().upper(), logging.INFO)
