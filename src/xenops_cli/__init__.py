"""xenops-cli package.

Modules:
- xenops_cli.cli: CLI entry point package (xenops-cli)
- xenops_cli.lib.core: Configuration, paths, data model, errors, version
- xenops_cli.lib.rpc: Control-channel transport and xenopsd client stub
- xenops_cli.lib.dispatcher: Per-command policy (argument checks, VM resolution)
- xenops_cli.cli.outcome: Output rendering and exit codes
- xenops_cli.lib._util: Internal helpers (ansi, logging)
- xenops_cli.ui_utils: Terminal formatting helpers
"""

__all__ = [
    "cli",
    "lib",
    "ui_utils",
]

# Version information - single source of truth using importlib.metadata
try:
    from importlib.metadata import version

    __version__ = version("xenops-cli")
except Exception:
    # Fallback for development mode when package is not installed
    try:
        import tomllib
        from pathlib import Path

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        if pyproject_path.exists():
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
                __version__ = pyproject_data["tool"]["poetry"]["version"]
        else:
            __version__ = "unknown"
    except Exception:
        __version__ = "unknown"
