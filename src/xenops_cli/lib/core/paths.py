# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""Platform-aware path resolution for config and state directories."""

import getpass
import os
from pathlib import Path

from platformdirs import user_config_dir, user_state_dir

APP_NAME = "xenops-cli"

SYSTEM_CONFIG_DIR = Path("/etc") / APP_NAME


def _is_root() -> bool:
    """Return True if the current process is running as root."""
    try:
        return os.geteuid() == 0  # type: ignore[attr-defined]
    except AttributeError:
        return getpass.getuser() == "root"


def config_root() -> Path:
    """
    Base directory for the user's config.yml.

    Priority:
      if root   → /etc/xenops-cli
      else      → ~/.config/xenops-cli (platformdirs)
    """
    if _is_root():
        return SYSTEM_CONFIG_DIR
    return Path(user_config_dir(APP_NAME))


def state_root() -> Path:
    """
    Writable state (the debug log).

    Priority:
      if root   → /var/lib/xenops-cli
      else      → ${XDG_STATE_HOME:-~/.local/state}/xenops-cli (platformdirs)
    """
    if _is_root():
        return Path("/var/lib") / APP_NAME
    return Path(user_state_dir(APP_NAME))
