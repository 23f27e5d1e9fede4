"""Entry point for ``python -m rigid``."""

from .cli import app

if __name__ == "__main__":
    app()
