"""Module entrypoint: `python -m ksp_mod_admin`."""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
