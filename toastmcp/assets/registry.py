"""Icon and sound lookup across the configured asset directories.

Each search directory may hold ``icons/*.png`` and ``sounds/*.wav``. Files
under a ``backup/`` folder are archived variants and never listed. Results
are recomputed from the filesystem on every call.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from loguru import logger

from toastmcp.utils.exceptions import AssetNotFoundError

ICONS_FOLDER = "icons"
SOUNDS_FOLDER = "sounds"
ICON_SUFFIX = ".png"
SOUND_SUFFIX = ".wav"

# Platform-standard notification sounds, always playable without a file.
BUILTIN_SOUND_IDS: tuple[str, ...] = (
    "alarm",
    "default",
    "im",
    "incoming_call",
    "mail",
    "reminder",
    "sms",
)


def _is_backup_dir(path: Path) -> bool:
    return path.parent.name.lower() == "backup"


def collect_asset_ids(folders: Iterable[Path], suffix: str) -> list[str]:
    """Sorted, deduplicated stems of ``suffix`` files across ``folders``.

    Unreadable or missing folders are skipped.
    """
    ids: set[str] = set()
    for folder in folders:
        try:
            entries = list(folder.iterdir())
        except OSError as e:
            logger.debug("Skipping asset folder {}: {}", folder, e)
            continue
        for entry in entries:
            if entry.suffix != suffix or _is_backup_dir(entry):
                continue
            ids.add(entry.stem)
    return sorted(ids)


class AssetRegistry:
    """
    Enumerates and resolves icon/sound ids.

    Owns no state beyond the ordered list of search directories.
    """

    def __init__(self, search_dirs: list[Path]):
        self.search_dirs = [Path(d) for d in search_dirs]

    def _folders(self, kind: str) -> list[Path]:
        return [d / kind for d in self.search_dirs]

    def list_icon_ids(self) -> list[str]:
        """Icon ids; an empty list means no icons are installed."""
        return collect_asset_ids(self._folders(ICONS_FOLDER), ICON_SUFFIX)

    def list_sound_ids(self) -> list[str]:
        """Sound ids, or the built-in catalogue when no sound files exist."""
        ids = collect_asset_ids(self._folders(SOUNDS_FOLDER), SOUND_SUFFIX)
        if not ids:
            return list(BUILTIN_SOUND_IDS)
        return ids

    def catalogue(self) -> dict[str, list[str]]:
        return {"icons": self.list_icon_ids(), "sounds": self.list_sound_ids()}

    def _resolve(self, kind: str, file_name: str) -> Path | None:
        for folder in self._folders(kind):
            candidate = folder / file_name
            if candidate.is_file():
                return candidate
        return None

    def resolve_icon(self, icon_id: str) -> Path:
        """Path of ``<id>.png`` in search order.

        Raises:
            AssetNotFoundError: No search directory holds the icon.
        """
        path = self._resolve(ICONS_FOLDER, f"{icon_id}{ICON_SUFFIX}")
        if path is None:
            raise AssetNotFoundError(
                "icon", icon_id, searched=[str(f) for f in self._folders(ICONS_FOLDER)]
            )
        return path

    def find_sound(self, sound_id: str) -> Path | None:
        """Path of ``<id>.wav`` in search order, or None."""
        return self._resolve(SOUNDS_FOLDER, f"{sound_id}{SOUND_SUFFIX}")
