"""Entry point for ``python -m toastmcp``."""

from toastmcp.cli.commands import app

if __name__ == "__main__":
    app()
