"""Argument types and options shared by every subcommand."""

from __future__ import annotations

import argparse
import math
import os

from ...lib.core.config import DEFAULT_SOCKET_PATH
from ._completers import complete_vm_names, set_completer

COMMON_OPTIONS = "common options"


def add_common_options(parser: argparse.ArgumentParser, *, with_defaults: bool) -> None:
    """Add --debug, --verbose, --socket and --config to *parser*.

    The top-level parser carries the real defaults; subcommand parsers use
    ``SUPPRESS`` so that options given before the subcommand are not reset.
    """
    group = parser.add_argument_group(COMMON_OPTIONS, "These options are common to all commands.")
    if with_defaults:
        flag_kw: dict = {"default": False}
        value_kw: dict = {"default": None}
    else:
        flag_kw = value_kw = {"default": argparse.SUPPRESS}
    group.add_argument("--debug", action="store_true", help="Give only debug output.", **flag_kw)
    group.add_argument(
        "-v", "--verbose", action="store_true", help="Give verbose output.", **flag_kw
    )
    group.add_argument(
        "--socket",
        metavar="PATH",
        help=f"Specify path to the server Unix domain socket (default: {DEFAULT_SOCKET_PATH}).",
        **value_kw,
    )
    group.add_argument(
        "--config",
        metavar="PATH",
        help="Read the socket path and connect timeout from this YAML file.",
        **value_kw,
    )


def common_parent() -> argparse.ArgumentParser:
    """Parent parser giving a subcommand the common options."""
    parent = argparse.ArgumentParser(add_help=False)
    add_common_options(parent, with_defaults=False)
    return parent


def existing_file(value: str) -> str:
    """argparse type: a path that must exist (regular file or block device)."""
    if not os.path.exists(value):
        raise argparse.ArgumentTypeError(f"no such file or device: {value!r}")
    return value


def non_negative_seconds(value: str) -> float:
    """argparse type: a finite duration in seconds, >= 0."""
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid duration: {value!r}") from None
    if not math.isfinite(seconds) or seconds < 0:
        raise argparse.ArgumentTypeError(f"duration must be a non-negative number: {value!r}")
    return seconds


def add_vm_argument(parser: argparse.ArgumentParser, verb: str) -> None:
    """Add the optional VM positional; absence is reported by the dispatcher."""
    _a = parser.add_argument(
        "vm",
        nargs="?",
        metavar="VM",
        help=f"The name or UUID of the VM to be {verb}.",
    )
    set_completer(_a, complete_vm_names)
