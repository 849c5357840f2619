from __future__ import annotations

"""
Output Handlers for the dupedir Logger.

Builds the stderr and rotating-file handlers fed by the queue listener.
Every handler created here carries an ownership mark, which lets the
bootstrap remove its own handlers while leaving those of pytest or other
libraries attached to the root logger untouched.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from dupedir.infra.logging.config import LoggingConfig

_HANDLER_TAG_ATTR: str = "_dupedir_handler"


def mark_owned(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_owned(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def console_handler(cfg: LoggingConfig, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(cfg.console_fmt, datefmt=cfg.datefmt))
    return mark_owned(handler)


def rotating_file_handler(cfg: LoggingConfig, level: int) -> Optional[logging.Handler]:
    """
    Open the rotating log file named by the configuration.

    Returns None, after reporting on stderr, when the file cannot be opened.
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(cfg.log_file)), exist_ok=True)
        handler = RotatingFileHandler(
            cfg.log_file,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        print(f"dupedir: log file disabled, {cfg.log_file}: {e}", file=sys.stderr)
        return None

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return mark_owned(handler)


def output_handlers(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    """Handlers the queue listener dispatches to; empty when no output is enabled."""
    outputs: List[logging.Handler] = []
    if cfg.console:
        outputs.append(console_handler(cfg, level))
    if cfg.log_file:
        fh = rotating_file_handler(cfg, level)
        if fh is not None:
            outputs.append(fh)
    return outputs
