#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import argparse

import argcomplete

from ..lib.core.config import build_options
from ..lib.core.errors import EXIT_OK, XenopsError
from ..lib.core.version import format_version_string, get_version_info
from ..lib.rpc.client import client_for
from .commands import power, registry
from .commands._common import add_common_options, common_parent
from .outcome import PROG, report_failure

PROJECT_URL = "http://github.com/djs55/xenops-cli"

EXIT_INTERRUPTED = 130

# Order here is the order commands appear in --help.
_COMMAND_MODULES = (registry, power)


def build_parser() -> argparse.ArgumentParser:
    version, revision = get_version_info()

    parser = argparse.ArgumentParser(
        prog=PROG,
        description="interact with the XCP xenopsd VM management service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            f"Use `{PROG} COMMAND --help' for help on a single command.\n"
            "\n"
            f"Check bug reports at {PROJECT_URL}"
        ),
    )
    parser.add_argument(
        "--version", action="version", version=f"{PROG} {format_version_string(version, revision)}"
    )
    add_common_options(parser, with_defaults=True)

    sub = parser.add_subparsers(dest="cmd", metavar="COMMAND")
    parents = [common_parent()]
    for module in _COMMAND_MODULES:
        module.register(sub, parents)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    if args.cmd is None:
        parser.print_help()
        return EXIT_OK

    try:
        options = build_options(
            debug=args.debug,
            verbose=args.verbose,
            socket=args.socket,
            config=args.config,
        )
        client = client_for(options)
        for module in _COMMAND_MODULES:
            if module.dispatch(args, client, options):
                return EXIT_OK
    except XenopsError as e:
        return report_failure(e)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    parser.error(f"Unknown command: {args.cmd}")


if __name__ == "__main__":
    raise SystemExit(main())
