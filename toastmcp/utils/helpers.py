"""Path helpers shared by asset lookup, the audio cache and logging."""

from __future__ import annotations

import sys
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_program_dir() -> Path:
    """Directory containing the running program.

    Frozen builds report the executable; otherwise the launched script
    (console-script shim or ``python path/to/script``) is used.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    argv0 = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if argv0 and argv0 != "-c":
        return Path(argv0).resolve().parent
    return Path.cwd()


def get_bundled_dir() -> Path:
    """Project source root, which ships the bundled icons/ and sounds/."""
    return Path(__file__).resolve().parents[2]


def get_data_path() -> Path:
    """~/.toastmcp, created on demand."""
    return ensure_dir(Path.home() / ".toastmcp")
