"""Terminal color escape codes: the level palette and a stripper."""
from __future__ import annotations

import re

# ESC [ params letter
ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

RESET = "\033[0m"
RED = "\033[31m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
WHITE = "\033[37m"


def strip_ansi(text: str) -> str:
    """Remove every terminal escape sequence from ``text``.

    Repeats until nothing matches: removing one sequence can join an ESC left
    of it with a ``[..m`` tail right of it into a new one.
    """
    text, count = ANSI_ESCAPE.subn("", text)
    while count:
        text, count = ANSI_ESCAPE.subn("", text)
    return text


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"
