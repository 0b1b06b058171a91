"""Module entrypoint for the niqqud command line."""
from __future__ import annotations

import sys

import app


def main() -> None:
    sys.exit(app.main())


if __name__ == "__main__":
    main()
