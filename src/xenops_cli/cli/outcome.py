# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Turn command results into output lines and exit codes."""

from __future__ import annotations

from ..lib.core.errors import XenopsError
from ..lib.core.model import VmSummary
from ..ui_utils.terminal import power_state, print_error

PROG = "xenops-cli"


def format_vm_list(vms: list[VmSummary], color_enabled: bool = False) -> list[str]:
    """One line per VM, in the order given: ``<name>  <uuid>  <state>``."""
    width = max((len(vm.name) for vm in vms), default=0)
    return [
        f"{vm.name:<{width}}  {vm.id}  {power_state(vm.power_state, color_enabled)}"
        for vm in vms
    ]


def report_failure(err: XenopsError) -> int:
    """Print a single diagnostic line on stderr and return the exit code."""
    # daemon free text may span lines; the diagnostic must not
    message = " ".join(err.message.splitlines())
    print_error(PROG, f"{err.kind}: {message}")
    return err.exit_code


def report_success(message: str, verbose: bool) -> None:
    """Print a confirmation line on stdout in verbose mode."""
    if verbose:
        print(message)
