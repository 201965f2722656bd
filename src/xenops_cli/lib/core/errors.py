# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Typed failures raised by the client and dispatcher.

Every failure is a :class:`XenopsError` carrying the process exit code the
entry point should use.  Daemon-reported failures keep xenopsd's error code
and arguments verbatim so the user sees exactly what the daemon said.
"""

from __future__ import annotations

from typing import Any

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_UNREACHABLE = 3


class XenopsError(Exception):
    """Base class for every failure a command can report."""

    exit_code = EXIT_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def kind(self) -> str:
        return type(self).__name__


class MissingArgument(XenopsError):
    """A required positional value (VM, metadata file) was not supplied."""

    exit_code = EXIT_USAGE


class ConfigError(XenopsError):
    """The config file could not be read or holds invalid values."""

    exit_code = EXIT_USAGE


class DaemonUnreachable(XenopsError):
    """The control channel could not be opened or failed mid-call."""

    exit_code = EXIT_UNREACHABLE


class DaemonError(XenopsError):
    """A failure reported by xenopsd, e.g. ``["Bad_power_state", "Running", "Halted"]``."""

    def __init__(self, code: str, params: list[Any] | None = None) -> None:
        self.code = code
        self.params = list(params or [])
        text = code
        if self.params:
            text = f"{code}: {', '.join(str(p) for p in self.params)}"
        super().__init__(text)


class NotFound(DaemonError):
    pass


class AmbiguousReference(DaemonError):
    pass


class PowerStateConflict(DaemonError):
    """The VM's current power state does not allow the transition."""


class ResourceConstraint(DaemonError):
    """Not enough memory, disk or another resource to complete the transition."""


class InvalidMetadata(DaemonError):
    pass


_ERROR_KINDS: dict[str, type[DaemonError]] = {
    "Does_not_exist": NotFound,
    "Ambiguous_reference": AmbiguousReference,
    "Bad_power_state": PowerStateConflict,
    "Not_enough_memory": ResourceConstraint,
    "Ballooning_error": ResourceConstraint,
    "No_bootable_device": ResourceConstraint,
    "Not_enough_disk": ResourceConstraint,
    "Invalid_metadata": InvalidMetadata,
    "Failed_to_parse_metadata": InvalidMetadata,
}


def error_from_wire(error: Any) -> DaemonError:
    """Build the typed failure for an ``error`` member of a daemon reply.

    xenopsd encodes errors as ``[code, arg, ...]``; a bare string is a code
    with no arguments.  Anything else is kept as a generic ``Internal_error``.
    """
    if isinstance(error, str):
        code, params = error, []
    elif isinstance(error, list) and error and isinstance(error[0], str):
        code, params = error[0], error[1:]
    else:
        code, params = "Internal_error", [error]
    cls = _ERROR_KINDS.get(code, DaemonError)
    return cls(code, params)
