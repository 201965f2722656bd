"""Terminal formatting helpers.

Core color functions (``supports_color``, ``color``, ``red``) are
defined in ``xenops_cli.lib._util.ansi`` so that service-layer modules can use
them without a cross-layer dependency.  This module re-exports them and adds
higher-level helpers.
"""

import sys

from xenops_cli.lib._util.ansi import (  # noqa: F401  -- re-exports
    color,
    red,
    supports_color,
)
from xenops_cli.lib.core.model import PowerState

_STATE_COLORS = {
    PowerState.RUNNING: "32",
    PowerState.PAUSED: "33",
    PowerState.SUSPENDED: "34",
    PowerState.HALTED: "90",
}


def power_state(state: PowerState, enabled: bool) -> str:
    """Return the state name colored by power state when *enabled*."""
    return color(state.value, _STATE_COLORS[state], enabled)


def print_error(prog: str, message: str) -> None:
    """Print ``<prog>: error: <message>`` on stderr, red on a TTY."""
    enabled = supports_color(sys.stderr)
    print(f"{prog}: {red('error', enabled)}: {message}", file=sys.stderr)
