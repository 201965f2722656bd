# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Client stub for the xenopsd VM interface.

One method per daemon capability.  Each is a single blocking call; nothing is
retried and transport failures propagate as DaemonUnreachable.
"""

from __future__ import annotations

from typing import Any

from .._util.logging_utils import debug_tracer
from ..core.config import GlobalOptions
from ..core.errors import AmbiguousReference, DaemonUnreachable, NotFound
from ..core.model import (
    ById,
    PowerAction,
    PowerState,
    TransitionRequest,
    VmRef,
    VmSummary,
)
from .transport import Transport, UnixSocketTransport


class XenopsClient:
    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def register(self, metadata: dict[str, Any]) -> str:
        """Register a VM from its metadata and return the new VM id."""
        result = self.transport.call("VM.add", [metadata])
        if not isinstance(result, str) or not result:
            raise DaemonUnreachable(f"malformed VM.add reply: expected a VM id, got {result!r}")
        return result

    def enumerate(self) -> list[VmSummary]:
        """Return the registered VMs in the order xenopsd reports them."""
        result = self.transport.call("VM.list", [])
        if not isinstance(result, list):
            raise DaemonUnreachable("malformed VM.list reply: expected a list")
        return [_summary_from_wire(item) for item in result]

    def unregister(self, vm_id: str) -> None:
        self.transport.call("VM.remove", [vm_id])

    def request_power_transition(self, vm_id: str, request: TransitionRequest) -> PowerState | None:
        """Ask xenopsd to perform *request* on *vm_id*; returns the new state if reported.

        xenopsd blocks until the transition has completed (or failed), including
        any clean-shutdown grace period and the forced fallback after it.
        """
        result = self.transport.call(request.action.method, _transition_params(vm_id, request))
        try:
            return PowerState.from_wire(result)
        except (TypeError, ValueError):
            return None

    def resolve(self, ref: VmRef) -> str:
        """Return the canonical VM id for *ref*.

        UUIDs pass through untouched; xenopsd reports unknown ids itself.
        Names must match exactly one registered VM.
        """
        if isinstance(ref, ById):
            return ref.uuid
        matches = [vm.id for vm in self.enumerate() if vm.name == ref.name]
        if not matches:
            raise NotFound("Does_not_exist", ["VM", ref.name])
        if len(matches) > 1:
            raise AmbiguousReference("Ambiguous_reference", [ref.name, *matches])
        return matches[0]


def _transition_params(vm_id: str, request: TransitionRequest) -> list[Any]:
    if request.action is PowerAction.START:
        return [vm_id, request.paused]
    if request.action is PowerAction.SUSPEND:
        return [vm_id, request.block_device]
    # shutdown and reboot: None asks for an immediate forced power-off
    return [vm_id, request.timeout]


def _summary_from_wire(item: Any) -> VmSummary:
    try:
        return VmSummary(
            id=str(item["id"]),
            name=str(item.get("name", "")),
            power_state=PowerState.from_wire(item["power_state"]),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise DaemonUnreachable(f"malformed VM.list entry {item!r}: {e}") from e


def client_for(options: GlobalOptions) -> XenopsClient:
    """Build a client for the socket named in *options*.

    No connection is made here; each call opens its own.
    """
    transport = UnixSocketTransport(
        options.socket,
        options.connect_timeout,
        trace=debug_tracer(options.debug),
    )
    return XenopsClient(transport)
