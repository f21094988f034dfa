"""Entry point for ``python -m cli``, equivalent to the ``flatdex`` script."""

from __future__ import annotations

import sys

from cli.main import main


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
