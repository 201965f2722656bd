"""Registration commands: list, add, remove."""

from __future__ import annotations

import argparse

from ...lib.core.config import GlobalOptions
from ...lib.dispatcher import vm_add, vm_list, vm_remove
from ...lib.rpc.client import XenopsClient
from ...ui_utils.terminal import supports_color
from ..outcome import format_vm_list, report_success
from ._common import add_vm_argument, existing_file


def register(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    parents: list[argparse.ArgumentParser],
) -> None:
    """Register the list, add and remove subcommands."""
    # list
    subparsers.add_parser(
        "list",
        parents=parents,
        help="list the VMs registered with xenopsd",
        description=(
            "Lists the VMs registered with the xenopsd service.\n\n"
            'VMs are registered with xenopsd via the "add" command and will be '
            'monitored until the corresponding "remove" command.\n\n'
            "xenopsd will not touch any VMs (and domains) which have not been "
            "explicitly registered."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # add
    p_add = subparsers.add_parser(
        "add",
        parents=parents,
        help="register a new VM with xenopsd",
        description="Registers a new VM with the xenopsd service. Prints the new VM's UUID.",
    )
    p_add.add_argument(
        "filename",
        nargs="?",
        metavar="FILE",
        type=existing_file,
        help="Path to the VM metadata (YAML or JSON) to be registered.",
    )

    # remove
    p_remove = subparsers.add_parser(
        "remove",
        parents=parents,
        help="unregister a VM",
        description=(
            "Unregister a VM.\n\n"
            "The xenopsd service will only manipulate VMs if they are explicitly "
            "registered with it. You should unregister a VM if either:\n"
            "  1. the VM is not needed any more; or\n"
            "  2. you intend to manage the VM on another host or using another toolstack.\n\n"
            "Only Halted VMs may be unregistered; xenopsd reports Bad_power_state otherwise."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_vm_argument(p_remove, "unregistered")


def dispatch(args: argparse.Namespace, client: XenopsClient, options: GlobalOptions) -> bool:
    """Handle list, add and remove.  Returns True if handled."""
    if args.cmd == "list":
        for line in format_vm_list(vm_list(client), supports_color()):
            print(line)
        return True
    if args.cmd == "add":
        vm_id = vm_add(client, args.filename)
        print(vm_id)
        return True
    if args.cmd == "remove":
        vm_id = vm_remove(client, args.vm)
        report_success(f"Unregistered VM {args.vm} ({vm_id})", options.verbose)
        return True
    return False
