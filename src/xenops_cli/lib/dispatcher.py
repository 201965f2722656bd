# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Per-command policy between the argument parser and the xenopsd client.

Each ``vm_*`` function turns already-parsed arguments into exactly one
request (plus, for VM names, the ``VM.list`` needed to resolve them):

- missing positionals raise MissingArgument before any RPC is made
- VM names are resolved once; zero or several matches is an error
- power-state legality is never checked here; xenopsd decides and any
  Bad_power_state it reports is passed through untouched
- graceful-then-forced shutdown is requested as a single call carrying the
  timeout; the client never issues a follow-up "force" call
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .core.errors import InvalidMetadata, MissingArgument
from .core.model import (
    PowerAction,
    PowerState,
    TransitionRequest,
    VmRef,
    VmSummary,
    parse_vm_ref,
)
from .rpc.client import XenopsClient


@dataclass(frozen=True)
class TransitionResult:
    vm_id: str
    # None when xenopsd only acknowledged the call
    power_state: PowerState | None


def require_vm(text: str | None, verb: str) -> VmRef:
    """Parse a VM reference, raising MissingArgument when absent."""
    ref = parse_vm_ref(text)
    if ref is None:
        raise MissingArgument(f"the name or UUID of the VM to be {verb} is required")
    return ref


def load_metadata(filename: str | Path) -> dict[str, Any]:
    """Read VM metadata (YAML, or JSON which YAML accepts) from *filename*."""
    path = Path(filename)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidMetadata("Failed_to_parse_metadata", [str(path), str(e)]) from e
    except yaml.YAMLError as e:
        # first line only; PyYAML's marks span several
        reason = str(e).splitlines()[0]
        raise InvalidMetadata("Failed_to_parse_metadata", [str(path), reason]) from e
    if not isinstance(data, dict) or not data:
        raise InvalidMetadata(
            "Failed_to_parse_metadata", [str(path), "expected a non-empty mapping"]
        )
    return data


def vm_add(client: XenopsClient, filename: str | None) -> str:
    """Register the VM described by *filename*; returns the new VM id."""
    if not filename:
        raise MissingArgument("the path to the VM metadata to be registered is required")
    return client.register(load_metadata(filename))


def vm_list(client: XenopsClient) -> list[VmSummary]:
    return client.enumerate()


def vm_remove(client: XenopsClient, vm: str | None) -> str:
    """Unregister a VM; only Halted VMs may be unregistered (xenopsd enforces this)."""
    ref = require_vm(vm, "unregistered")
    vm_id = client.resolve(ref)
    client.unregister(vm_id)
    return vm_id


def vm_transition(client: XenopsClient, request: TransitionRequest) -> TransitionResult:
    """Resolve the request's VM and issue its single power-transition call."""
    vm_id = client.resolve(request.vm)
    state = client.request_power_transition(vm_id, request)
    return TransitionResult(vm_id, state)


def vm_start(client: XenopsClient, vm: str | None, *, paused: bool = False) -> TransitionResult:
    ref = require_vm(vm, "started")
    return vm_transition(client, TransitionRequest(ref, PowerAction.START, paused=paused))


def vm_shutdown(
    client: XenopsClient, vm: str | None, *, timeout: float | None = None
) -> TransitionResult:
    ref = require_vm(vm, "shutdown and powered off")
    return vm_transition(client, TransitionRequest(ref, PowerAction.SHUTDOWN, timeout=timeout))


def vm_reboot(
    client: XenopsClient, vm: str | None, *, timeout: float | None = None
) -> TransitionResult:
    ref = require_vm(vm, "rebooted")
    return vm_transition(client, TransitionRequest(ref, PowerAction.REBOOT, timeout=timeout))


def vm_suspend(
    client: XenopsClient, vm: str | None, *, block_device: str | None = None
) -> TransitionResult:
    ref = require_vm(vm, "suspended")
    return vm_transition(
        client, TransitionRequest(ref, PowerAction.SUSPEND, block_device=block_device)
    )
