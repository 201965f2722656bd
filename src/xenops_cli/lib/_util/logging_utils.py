"""Utility functions for logging."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable

from ..core.paths import state_root
from .ansi import gray, supports_color

LOG_FILE_NAME = "xenops-cli.log"


def _log_debug(message: str) -> None:
    """Append a simple debug line to the xenops-cli log.

    Writes timestamped lines to ``state_root()/xenops-cli.log``. Best-effort:
    an unwritable state directory never fails the command being traced.
    """
    try:
        log_path = state_root() / LOG_FILE_NAME
        log_path.parent.mkdir(parents=True, exist_ok=True)
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] {message}\n")
    except OSError:
        pass


def debug_tracer(enabled: bool) -> Callable[[str], None] | None:
    """Return a callback echoing RPC traffic to stderr and the log, or None.

    Used for ``--debug``; the transport calls it once per request and reply.
    """
    if not enabled:
        return None

    color_enabled = supports_color(sys.stderr)

    def _trace(line: str) -> None:
        print(gray(f"debug: {line}", color_enabled), file=sys.stderr)
        _log_debug(line)

    return _trace
