# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""What ``xenops-cli --version`` prints."""

import json
from importlib import metadata


def get_version_info() -> tuple[str, str | None]:
    """Return the package version and, for git checkouts installed by pip,
    the branch or commit they were built from."""
    try:
        from xenops_cli import __version__ as version
    except ImportError:
        version = "unknown"
    return version, _installed_revision()


def _installed_revision(dist_name: str = "xenops-cli") -> str | None:
    # pip leaves direct_url.json behind for ``pip install git+...``; wheels
    # from an index and editable installs of a plain tree carry no vcs_info.
    try:
        raw = metadata.distribution(dist_name).read_text("direct_url.json")
    except (metadata.PackageNotFoundError, OSError, UnicodeDecodeError):
        return None
    try:
        vcs_info = json.loads(raw or "{}").get("vcs_info")
    except (json.JSONDecodeError, AttributeError):
        return None
    if not isinstance(vcs_info, dict):
        return None
    for key in ("requested_revision", "commit_id"):
        value = vcs_info.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def format_version_string(version: str, revision: str | None) -> str:
    """``1.0.0``, or ``1.0.0 [main]`` when the revision is known."""
    return f"{version} [{revision}]" if revision else version
