"""ANSI colouring for diagnostics printed by ``motif.testing``.

Colours are used only when stdout is a TTY, unless ``FORCE_COLOR`` is set.
``NO_COLOR`` (https://no-color.org/) turns them off.
"""

from __future__ import annotations

import os
import re
import sys
from typing import Literal

_CODES = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "yellow": "\033[33m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "bright_red": "\033[91m",
}

ColorName = Literal["reset", "bold", "dim", "yellow", "cyan", "green", "bright_red"]

_ANSI_RE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def supports_color() -> bool:
    """True if diagnostics should be coloured.

    Read from the environment on each call so a process can toggle
    ``NO_COLOR`` / ``FORCE_COLOR`` after import.
    """
    if os.environ.get("FORCE_COLOR"):
        return True
    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def colorize(text: str, *colors: ColorName) -> str:
    """Wrap ``text`` in the given ANSI codes when colour is enabled.

    Example:
        >>> colorize("M-PAR-001", "bright_red", "bold")
        '\033[91m\033[1mM-PAR-001\033[0m'  # colour enabled
        'M-PAR-001'                        # colour disabled
    """
    if not colors or not supports_color():
        return text
    prefix = "".join(_CODES[color] for color in colors)
    return f"{prefix}{text}{_CODES['reset']}"


def strip_colors(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)


def error_code(text: str) -> str:
    return colorize(text, "bright_red", "bold")


def location(text: str) -> str:
    return colorize(text, "cyan")


def line_number(text: str) -> str:
    return colorize(text, "yellow")


def error_line(text: str) -> str:
    return colorize(text, "bright_red")


def hint(text: str) -> str:
    return colorize(text, "green")


def dim_text(text: str) -> str:
    return colorize(text, "dim")


def format_error_header(code: str | None, message: str) -> str:
    """``CODE: message`` with the code highlighted, or just the message."""
    if code:
        return f"{error_code(code)}: {message}"
    return message


def format_source_line(lineno: int, content: str, is_error: bool = False) -> str:
    """Format one snippet line; the offending line gets a ``>`` marker.

    Example:
        >>> strip_colors(format_source_line(4, "{{#each posts}}", is_error=True))
        '>  4 | {{#each posts}}'
    """
    marker = ">" if is_error else " "
    number = line_number(f"{marker}{lineno:>3}")
    body = error_line(content) if is_error else dim_text(content)
    return f"{number} | {body}"
