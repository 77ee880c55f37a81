"""Entry point for the XcurLab CLI (``python -m xcurlab.cli_entry``)."""

from .cli import main

__all__ = ["main"]

if __name__ == "__main__":
    main()
