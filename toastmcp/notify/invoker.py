"""The ``notify`` tool: resolve assets, then drive the presenter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict

from toastmcp.assets.registry import AssetRegistry
from toastmcp.audio.cache import AudioCache
from toastmcp.notify.presenter import Presenter, system_sound_cue
from toastmcp.utils.exceptions import AssetNotFoundError

DEFAULT_VOLUME = 0.7


class NotifyInput(BaseModel):
    """Arguments of the notify tool."""
    model_config = ConfigDict(extra="forbid")

    title: str
    message: str
    sound: str
    icon: str


@dataclass(slots=True)
class NotifyOutcome:
    """What was actually done, for logs and CLI output."""

    icon_path: Path
    audio_path: Path | None = None
    cue: str | None = None


class NotificationInvoker:
    """
    Resolves the icon and sound of a NotifyInput and calls the presenter.

    Sound files are played through ``presenter.play_audio`` after volume
    normalization and the toast is shown silently; ids without a file fall
    back to a built-in cue played by the toast itself. Audio and toast are
    separate calls, so either may fail after the other succeeded.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        cache: AudioCache,
        presenter: Presenter,
        volume: float = DEFAULT_VOLUME,
    ):
        self.registry = registry
        self.cache = cache
        self.presenter = presenter
        self.volume = volume

    def notify(self, args: NotifyInput) -> NotifyOutcome:
        """
        Raises:
            AssetNotFoundError: Icon or sound unknown; nothing was played or shown.
            AudioCacheError: The attenuated copy could not be written.
            PlaybackError / PresentationError: A collaborator failed.
        """
        icon_path = self.registry.resolve_icon(args.icon)

        sound_path = self.registry.find_sound(args.sound)
        if sound_path is not None:
            playback_path = self.cache.prepare(sound_path, self.volume)
            logger.info("Playing sound {} from {}", args.sound, playback_path)
            self.presenter.play_audio(playback_path)
            logger.info("Presenting '{}' with icon {}", args.title, args.icon)
            self.presenter.present_notification(args.title, args.message, icon_path, None)
            return NotifyOutcome(icon_path=icon_path, audio_path=playback_path)

        cue = system_sound_cue(args.sound)
        if cue is None:
            raise AssetNotFoundError(
                "sound", args.sound, searched=[str(d / "sounds") for d in self.registry.search_dirs]
            )
        logger.info("Presenting '{}' with icon {} and cue {}", args.title, args.icon, cue)
        self.presenter.present_notification(args.title, args.message, icon_path, cue)
        return NotifyOutcome(icon_path=icon_path, cue=cue)
