from __future__ import annotations

import logging
import sys
from typing import Optional

# ANSI escape sequences for colors
COLORS = {
    "black": "\u001b[30;1m",
    "red": "\u001b[31;1m",
    "green": "\u001b[32;1m",
    "yellow": "\u001b[33;1m",
    "blue": "\u001b[34;1m",
    "magenta": "\u001b[35;1m",
    "cyan": "\u001b[36;1m",
    "white": "\u001b[37;1m",
    "reset": "\u001b[0m",
}

LEVEL_COLORS = {
    logging.DEBUG: "cyan",
    logging.INFO: "white",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "magenta",
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def colorize(text: str, color: Optional[str]) -> str:
    """Wrap ``text`` in the ANSI sequence for ``color`` (unknown colours pass through)."""
    if not color or color not in COLORS:
        return text
    return f"{COLORS[color]}{text}{COLORS['reset']}"


class ColorFormatter(logging.Formatter):
    """Formatter that colours the whole record according to its level."""

    def __init__(self, fmt: str = DEFAULT_FORMAT, datefmt: Optional[str] = None, use_color: bool = True) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_color:
            return message
        return colorize(message, LEVEL_COLORS.get(record.levelno))


def create_logger(
    name: str,
    level: int = logging.INFO,
    *,
    stream=None,
    use_color: Optional[bool] = None,
) -> logging.Logger:
    """
    Return a named logger with a single coloured stream handler attached.

    Calling this repeatedly with the same name reuses the existing handler so
    services that build their own fallback logger do not duplicate output.

    Args:
        name: Logger name, usually ``__name__`` of the calling module.
        level: Minimum level for the logger.
        stream: Optional stream for the handler (defaults to sys.stderr).
        use_color: Force colours on/off. Defaults to colouring TTY streams only.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(getattr(handler, "_canvas_alt_handler", False) for handler in logger.handlers):
        target = stream or sys.stderr
        if use_color is None:
            use_color = bool(getattr(target, "isatty", lambda: False)())
        handler = logging.StreamHandler(target)
        handler.setFormatter(ColorFormatter(use_color=use_color))
        handler._canvas_alt_handler = True
        logger.addHandler(handler)

    return logger


__all__ = ["COLORS", "ColorFormatter", "colorize", "create_logger"]
