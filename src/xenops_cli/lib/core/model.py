# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""VM references, power states and transition requests.

Pure data types with no socket I/O.  Power states are only ever decoded from
daemon replies; which transitions are legal is decided by xenopsd alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

_UUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
)


class PowerState(Enum):
    HALTED = "Halted"
    RUNNING = "Running"
    PAUSED = "Paused"
    SUSPENDED = "Suspended"

    @classmethod
    def from_wire(cls, value: Any) -> PowerState:
        """Decode ``"Running"`` or the variant form ``["Running"]``.

        Raises ValueError for anything else.
        """
        if isinstance(value, list) and len(value) == 1:
            value = value[0]
        return cls(value)


class PowerAction(Enum):
    START = "start"
    SHUTDOWN = "shutdown"
    REBOOT = "reboot"
    SUSPEND = "suspend"

    @property
    def method(self) -> str:
        """xenopsd RPC method name, e.g. ``VM.shutdown``."""
        return f"VM.{self.value}"


@dataclass(frozen=True)
class ByName:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ById:
    uuid: str

    def __str__(self) -> str:
        return self.uuid


VmRef = ByName | ById


def parse_vm_ref(text: str | None) -> VmRef | None:
    """Classify user input as a UUID or a (case-sensitive) name.

    Returns None for missing or empty input.
    """
    if not text:
        return None
    if _UUID_RE.fullmatch(text):
        return ById(text.lower())
    return ByName(text)


@dataclass(frozen=True)
class TransitionRequest:
    """One power transition against exactly one VM."""

    vm: VmRef
    action: PowerAction
    # Seconds to wait for a clean shutdown before the daemon forces power-off.
    # None means no graceful phase.
    timeout: float | None = None
    # start only: leave the VM Paused instead of Running
    paused: bool = False
    # suspend only: None lets the daemon pick its default suspend target
    block_device: str | None = None


@dataclass(frozen=True)
class VmSummary:
    """One row of ``VM.list``."""

    id: str
    name: str
    power_state: PowerState
