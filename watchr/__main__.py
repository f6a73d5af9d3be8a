"""Entrypoint for ``python -m watchr``."""

from watchr.cli import app


if __name__ == "__main__":
    app(prog_name="watchr")
