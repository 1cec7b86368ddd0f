"""Main entry point for running saku_pkg as a module.

This allows running Kalkulator Saku with:
    python -m saku_pkg
    python -m saku_pkg -e "2 + 2"
    python -m saku_pkg -k "7 add 3 equals"

This is equivalent to running:
    python -m saku_pkg.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
