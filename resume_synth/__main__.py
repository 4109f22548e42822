"""Executable shim so `python -m resume_synth` runs the CLI."""

from __future__ import annotations

from .cli.main import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
