"""ANSI escapes for xenops-cli's stderr diagnostics and debug trace.

Lives under ``lib`` because the debug logger colors its request trace and
must not import ``ui_utils``.  ``ui_utils.terminal`` re-exports the names.
"""

import os
import sys
from typing import TextIO

RED = "31"
GRAY = "90"


def supports_color(stream: TextIO | None = None) -> bool:
    """Decide whether escapes may be written to *stream* (default stdout).

    ``NO_COLOR`` disables color outright; a ``FORCE_COLOR`` other than
    ``"0"`` enables it for pipes too.  With neither set, only a TTY is
    colored.
    """
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("FORCE_COLOR", "0") != "0":
        return True
    target = sys.stdout if stream is None else stream
    isatty = getattr(target, "isatty", None)
    return bool(isatty and isatty())


def color(text: str, code: str, enabled: bool) -> str:
    """Wrap *text* in the SGR *code*; a no-op when color is off."""
    return f"\x1b[{code}m{text}\x1b[0m" if enabled else text


def red(text: str, enabled: bool) -> str:
    return color(text, RED, enabled)


def gray(text: str, enabled: bool) -> str:
    return color(text, GRAY, enabled)
