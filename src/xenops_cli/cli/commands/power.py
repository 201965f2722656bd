"""Power-state commands: start, shutdown, reboot, suspend."""

from __future__ import annotations

import argparse

from ...lib.core.config import GlobalOptions
from ...lib.dispatcher import (
    TransitionResult,
    vm_reboot,
    vm_shutdown,
    vm_start,
    vm_suspend,
)
from ...lib.rpc.client import XenopsClient
from ..outcome import report_success
from ._common import add_vm_argument, existing_file, non_negative_seconds


def register(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    parents: list[argparse.ArgumentParser],
) -> None:
    """Register the power-state subcommands."""
    # start
    p_start = subparsers.add_parser(
        "start",
        parents=parents,
        help="start a VM",
        description=(
            'Start a VM. Returns when the VM is in the "Running" state, or in the '
            '"Paused" state if --paused is given.'
        ),
    )
    add_vm_argument(p_start, "started")
    p_start.add_argument("--paused", action="store_true", help="Leave the VM in a Paused state.")

    # shutdown
    p_shutdown = subparsers.add_parser(
        "shutdown",
        parents=parents,
        help="shutdown a VM",
        description=(
            "Shutdown a VM. If the VM is running it will be asked to shut down. "
            "If a timeout is given xenopsd waits that long; if no timeout is given "
            "or the timeout expires, the VM is powered off."
        ),
    )
    add_vm_argument(p_shutdown, "shutdown and powered off")
    p_shutdown.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=non_negative_seconds,
        default=None,
        help="Amount of time to wait for the VM to cleanly shut itself down, "
        "before it is powered off.",
    )

    # reboot
    p_reboot = subparsers.add_parser(
        "reboot",
        parents=parents,
        help="reboot a VM",
        description=(
            "Reboot a VM. If the VM is running it will be asked to reboot. "
            "If a timeout is given xenopsd waits that long; if no timeout is given "
            "or the timeout expires, the VM is powered off. It is then powered back on."
        ),
    )
    add_vm_argument(p_reboot, "rebooted")
    p_reboot.add_argument(
        "--timeout",
        metavar="SECONDS",
        type=non_negative_seconds,
        default=None,
        help="Amount of time to wait for the VM to cleanly shut itself down, "
        "before it is powered off and then on.",
    )

    # suspend
    p_suspend = subparsers.add_parser(
        "suspend",
        parents=parents,
        help="suspend a VM",
        description=(
            "Suspend a VM. If the VM is running it will be asked to suspend and its "
            "memory image saved to the block device (xenopsd's default if none is given)."
        ),
    )
    add_vm_argument(p_suspend, "suspended")
    p_suspend.add_argument(
        "--block-device",
        dest="block_device",
        metavar="PATH",
        type=existing_file,
        default=None,
        help="Block device to write the suspend image to.",
    )


def _describe(verb: str, vm: str, result: TransitionResult) -> str:
    line = f"{verb} VM {vm} ({result.vm_id})"
    if result.power_state is not None:
        line += f": now {result.power_state.value}"
    return line


def dispatch(args: argparse.Namespace, client: XenopsClient, options: GlobalOptions) -> bool:
    """Handle start, shutdown, reboot and suspend.  Returns True if handled."""
    if args.cmd == "start":
        result = vm_start(client, args.vm, paused=args.paused)
        report_success(_describe("Started", args.vm, result), options.verbose)
        return True
    if args.cmd == "shutdown":
        result = vm_shutdown(client, args.vm, timeout=args.timeout)
        report_success(_describe("Shut down", args.vm, result), options.verbose)
        return True
    if args.cmd == "reboot":
        result = vm_reboot(client, args.vm, timeout=args.timeout)
        report_success(_describe("Rebooted", args.vm, result), options.verbose)
        return True
    if args.cmd == "suspend":
        result = vm_suspend(client, args.vm, block_device=args.block_device)
        report_success(_describe("Suspended", args.vm, result), options.verbose)
        return True
    return False
