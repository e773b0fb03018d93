"""Entry point wrapper for the Riftbound card catalog pipeline."""
from __future__ import annotations

from riftcatalog.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
