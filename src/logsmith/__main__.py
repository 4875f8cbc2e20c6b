"""Module entrypoint.

Allows:
    python -m logsmith
"""

from __future__ import annotations

from logsmith.cli import main

if __name__ == "__main__":
    main()
