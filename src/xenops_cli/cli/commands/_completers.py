"""Shared argcomplete completers and helpers for CLI commands."""

from __future__ import annotations

import argparse
from collections.abc import Callable
from typing import Any

from ...lib.core.config import build_options
from ...lib.core.errors import XenopsError
from ...lib.dispatcher import vm_list
from ...lib.rpc.client import client_for


def complete_vm_names(
    prefix: str, parsed_args: argparse.Namespace, **kwargs: object
) -> list[str]:  # pragma: no cover - shell integration
    """Return names of registered VMs matching *prefix* for argcomplete."""
    try:
        options = build_options(
            socket=getattr(parsed_args, "socket", None),
            config=getattr(parsed_args, "config", None),
        )
        names = [vm.name for vm in vm_list(client_for(options))]
    except XenopsError:
        return []
    if prefix:
        names = [n for n in names if n.startswith(prefix)]
    return names


def set_completer(action: argparse.Action, fn: Callable[..., Any]) -> None:
    """Attach an argcomplete completer to *action*."""
    action.completer = fn  # type: ignore[attr-defined]
