"""Tests for the notify tool invoker and its presenter contract."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from toastmcp.assets.registry import AssetRegistry
from toastmcp.audio.cache import AudioCache
from toastmcp.notify.invoker import NotificationInvoker, NotifyInput
from toastmcp.utils.exceptions import AssetNotFoundError, PlaybackError, PresentationError


def _args(**overrides) -> NotifyInput:
    data = {"title": "Build", "message": "Done", "sound": "default", "icon": "bell"}
    data.update(overrides)
    return NotifyInput(**data)


@pytest.fixture
def bell(app_dir: Path) -> Path:
    path = app_dir / "icons" / "bell.png"
    path.write_bytes(b"\x89PNG")
    return path


def test_notify_input_rejects_unknown_and_missing_fields() -> None:
    with pytest.raises(ValidationError):
        NotifyInput.model_validate({"title": "t", "message": "m", "sound": "s"})
    with pytest.raises(ValidationError):
        NotifyInput.model_validate({"title": "t", "message": "m", "sound": "s", "icon": "i", "extra": 1})


def test_builtin_sound_uses_cue_and_single_presenter_call(invoker, presenter, bell: Path) -> None:
    outcome = invoker.notify(_args(sound="mail"))

    assert outcome.cue == "ms-winsoundevent:Notification.Mail"
    assert outcome.audio_path is None
    assert presenter.calls == [("present", "Build", "Done", bell, "ms-winsoundevent:Notification.Mail")]


def test_sound_file_is_normalized_then_played_before_silent_toast(
    invoker, presenter, bell: Path, app_dir: Path, audio_cache: AudioCache, wav_bytes
) -> None:
    (app_dir / "sounds" / "chime.wav").write_bytes(wav_bytes([100, -100]))

    outcome = invoker.notify(_args(sound="chime"))

    expected = audio_cache.cache_dir / "chime_vol50.wav"
    assert outcome.audio_path == expected
    assert presenter.calls == [
        ("play", expected),
        ("present", "Build", "Done", bell, None),
    ]


def test_sound_file_shadows_builtin_cue(invoker, presenter, bell: Path, app_dir: Path, wav_bytes) -> None:
    (app_dir / "sounds" / "default.wav").write_bytes(wav_bytes([1]))
    outcome = invoker.notify(_args(sound="default"))
    assert outcome.cue is None
    assert presenter.calls[0][0] == "play"


def test_missing_icon_has_no_side_effects(invoker, presenter, app_dir: Path, wav_bytes) -> None:
    (app_dir / "sounds" / "chime.wav").write_bytes(wav_bytes([1]))
    with pytest.raises(AssetNotFoundError, match="Icon not found: ghost"):
        invoker.notify(_args(icon="ghost", sound="chime"))
    assert presenter.calls == []


def test_unknown_sound_without_file_is_not_found(invoker, presenter, bell: Path) -> None:
    with pytest.raises(AssetNotFoundError, match="Sound not found: kazoo"):
        invoker.notify(_args(sound="kazoo"))
    assert presenter.calls == []


def test_playback_failure_propagates_before_toast(
    registry: AssetRegistry, audio_cache: AudioCache, bell: Path, app_dir: Path, wav_bytes, make_presenter
) -> None:
    presenter = make_presenter(fail_play=True)
    (app_dir / "sounds" / "chime.wav").write_bytes(wav_bytes([1]))
    invoker = NotificationInvoker(registry, audio_cache, presenter)

    with pytest.raises(PlaybackError):
        invoker.notify(_args(sound="chime"))
    assert [c[0] for c in presenter.calls] == ["play"]


def test_presentation_failure_after_audio_played(
    registry: AssetRegistry, audio_cache: AudioCache, bell: Path, app_dir: Path, wav_bytes, make_presenter
) -> None:
    presenter = make_presenter(fail_present=True)
    (app_dir / "sounds" / "chime.wav").write_bytes(wav_bytes([1]))
    invoker = NotificationInvoker(registry, audio_cache, presenter)

    with pytest.raises(PresentationError):
        invoker.notify(_args(sound="chime"))
    assert [c[0] for c in presenter.calls] == ["play", "present"]

