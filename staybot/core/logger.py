"""Logging setup with Loguru."""

import contextvars
import logging
import sys
from pathlib import Path
from types import FrameType
from typing import Any, Dict, Optional

from loguru import logger

# Session id of the browser session driving the current task
session_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "session_id", default=None
)

__all__ = ["session_id_ctx", "setup_logging", "InterceptHandler"]


def _session_patcher(record: Dict[str, Any]) -> None:
    """
    Patch log records with session_id from context.

    Called by Loguru for each record; concurrent sessions run in separate
    tasks, so each record carries the id of the session that emitted it.
    """
    record["extra"].setdefault("session_id", session_id_ctx.get() or "-")


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging records (tenacity, playwright) into Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Any = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame: Optional[FrameType] = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    level: str = "INFO", json_format: bool = False, logs_dir: Optional[str] = "logs"
) -> None:
    """
    Setup Loguru logging.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
        json_format: Serialize the file sink as JSON lines
        logs_dir: Directory for the rotating file sink; None disables it
    """
    logger.remove()
    logger.configure(patcher=_session_patcher)

    console_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<magenta>{extra[session_id]}</magenta> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    logger.add(sys.stdout, format=console_format, level=level, colorize=True)

    if logs_dir:
        path = Path(logs_dir)
        path.mkdir(parents=True, exist_ok=True)
        if json_format:
            logger.add(
                path / "staybot.jsonl",
                format="{message}",
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
                serialize=True,
            )
        else:
            logger.add(
                path / "staybot.log",
                format=(
                    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[session_id]} | "
                    "{name}:{function}:{line} - {message}"
                ),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="zip",
            )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.info(f"Logging initialized (level={level}, json={json_format})")
