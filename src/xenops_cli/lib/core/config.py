# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Global options shared by every subcommand.

Values come from three layers, highest priority first:

- command-line flags (``--socket``, ``--debug``, ``-v``)
- the YAML config file (``socket:``, ``connect_timeout:``)
- built-in defaults

The result is a frozen :class:`GlobalOptions` built once by the entry point
and handed to the client and dispatcher explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml  # pip install pyyaml

from .errors import ConfigError
from .paths import SYSTEM_CONFIG_DIR, config_root

# xenopsd's JSON-RPC endpoint
DEFAULT_SOCKET_PATH = Path("/var/xapi/xenopsd.json")
DEFAULT_CONNECT_TIMEOUT = 5.0

CONFIG_FILE_NAME = "config.yml"


@dataclass(frozen=True)
class GlobalOptions:
    """Options common to all commands."""

    debug: bool = False
    verbose: bool = False
    socket: Path = field(default=DEFAULT_SOCKET_PATH)
    # Bounds only the connect() to the control socket, never the call itself.
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT


# ---------- Config file ----------


def config_search_paths(explicit: str | Path | None = None) -> list[Path]:
    """Return the ordered list of paths that will be checked for the config file.

    - If *explicit* is given (``--config``), only that single path is considered.
    - Otherwise, check in order:
        1) the user config dir (``~/.config/xenops-cli/config.yml``)
        2) /etc/xenops-cli/config.yml
    """
    if explicit:
        return [Path(explicit).expanduser()]

    paths = [config_root() / CONFIG_FILE_NAME]
    system_cfg = SYSTEM_CONFIG_DIR / CONFIG_FILE_NAME
    if system_cfg not in paths:
        paths.append(system_cfg)
    return paths


def config_path(explicit: str | Path | None = None) -> Path | None:
    """Return the first existing config file, or None.

    An explicit path is returned even if missing so that a typo reads as an
    empty config rather than silently falling back to the system file.
    """
    candidates = config_search_paths(explicit)
    if explicit:
        return candidates[0]
    for c in candidates:
        if c.is_file():
            return c
    return None


def load_config(explicit: str | Path | None = None) -> dict[str, Any]:
    """Load the config file as a mapping (``{}`` when there is none)."""
    path = config_path(explicit)
    if path is None or not path.is_file():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return data


def _config_socket(cfg: dict[str, Any]) -> Path | None:
    value = cfg.get("socket")
    if value is None:
        return None
    if not isinstance(value, str) or not value:
        raise ConfigError("config key 'socket' must be a non-empty path")
    return Path(value).expanduser()


def _config_connect_timeout(cfg: dict[str, Any]) -> float | None:
    value = cfg.get("connect_timeout")
    if value is None:
        return None
    # bool is an int subclass; "connect_timeout: yes" is a mistake
    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        raise ConfigError("config key 'connect_timeout' must be a positive number of seconds")
    return float(value)


def build_options(
    *,
    debug: bool = False,
    verbose: bool = False,
    socket: str | Path | None = None,
    config: str | Path | None = None,
) -> GlobalOptions:
    """Merge flags, config file and defaults into a :class:`GlobalOptions`."""
    cfg = load_config(config)

    socket_path = Path(socket).expanduser() if socket else _config_socket(cfg)
    connect_timeout = _config_connect_timeout(cfg)

    return GlobalOptions(
        debug=debug,
        verbose=verbose,
        socket=socket_path or DEFAULT_SOCKET_PATH,
        connect_timeout=connect_timeout or DEFAULT_CONNECT_TIMEOUT,
    )
