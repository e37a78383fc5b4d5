"""Punto de entrada: ``python -m carelog``."""

from __future__ import annotations

from carelog.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
