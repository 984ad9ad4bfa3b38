"""hostblock CLI entry point.

This module allows execution with `python -m hostblock` (which is also how
the elevated helper re-runs an edit) and simply forwards to `hostblock.cli`.
"""

from __future__ import annotations

from .cli import cli


def main() -> None:  # pragma: no cover – convenience wrapper
    """Invoke the hostblock CLI."""
    cli()


if __name__ == "__main__":  # pragma: no cover – executed via `python -m`
    main()
