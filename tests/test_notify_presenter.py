"""Tests for the desktop presenter command construction and error mapping."""

import subprocess
from pathlib import Path

import pytest
from loguru import logger

from toastmcp.notify import presenter as presenter_mod
from toastmcp.notify.presenter import DesktopPresenter, build_toast_xml, system_sound_cue, xml_escape
from toastmcp.utils.exceptions import PlaybackError, PresentationError


class TestToastXml:
    def test_escapes_text_and_silences_without_cue(self, tmp_path: Path) -> None:
        xml = build_toast_xml("A & B", "<hi>", tmp_path / "i.png", None)
        assert "A &amp; B" in xml
        assert "&lt;hi&gt;" in xml
        assert 'silent="true"' in xml
        assert xml_escape('"q"') == "&quot;q&quot;"

    def test_cue_is_embedded(self) -> None:
        xml = build_toast_xml("t", "m", None, "ms-winsoundevent:Notification.Mail")
        assert 'src="ms-winsoundevent:Notification.Mail"' in xml
        assert "silent" not in xml

    def test_cues_cover_builtins(self) -> None:
        assert system_sound_cue("incoming_call") == "ms-winsoundevent:Notification.IncomingCall"
        assert system_sound_cue("default") == "ms-winsoundevent:Notification.Default"
        assert system_sound_cue("chime") is None


class TestLinuxBackend:
    def test_notify_send_command(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        seen = []
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: seen.append(cmd))
        DesktopPresenter(system="Linux").present_notification("T", "M", tmp_path / "i.png")
        assert seen == [["notify-send", "--app-name", "ToastMCP", "--icon", str(tmp_path / "i.png"), "T", "M"]]

    def test_missing_binary_is_presentation_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(cmd, **kw):
            raise FileNotFoundError(cmd[0])

        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(PresentationError, match="notify-send is not available"):
            DesktopPresenter(system="Linux").present_notification("T", "M")

    def test_nonzero_exit_is_presentation_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(cmd, **kw):
            raise subprocess.CalledProcessError(2, cmd, stderr="no dbus")

        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(PresentationError, match="no dbus"):
            DesktopPresenter(system="Linux").present_notification("T", "M")

    def test_play_audio_without_player_is_playback_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(presenter_mod.shutil, "which", lambda name: None)
        with pytest.raises(PlaybackError):
            DesktopPresenter(system="Linux").play_audio(Path("/tmp/x.wav"))

    def test_play_audio_waits_for_player(self, monkeypatch: pytest.MonkeyPatch) -> None:
        ran = []
        monkeypatch.setattr(presenter_mod.shutil, "which", lambda name: f"/usr/bin/{name}")
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: ran.append((cmd, kw["check"])))
        DesktopPresenter(system="Linux").play_audio(Path("/tmp/x.wav"))
        assert ran == [(["/usr/bin/paplay", "/tmp/x.wav"], True)]

    def test_failing_player_is_playback_error(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setattr(presenter_mod.shutil, "which", lambda name: "/bin/false")
        with pytest.raises(PlaybackError, match="exit status 1"):
            DesktopPresenter(system="Linux").play_audio(tmp_path / "x.wav")

    def test_player_timeout_is_playback_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def run(cmd, **kw):
            raise subprocess.TimeoutExpired(cmd, kw["timeout"])

        monkeypatch.setattr(presenter_mod.shutil, "which", lambda name: "/usr/bin/aplay")
        monkeypatch.setattr(subprocess, "run", run)
        with pytest.raises(PlaybackError, match="timed out after 2.0s"):
            DesktopPresenter(system="Linux", timeout=2.0).play_audio(Path("/tmp/x.wav"))

    def test_dropped_cue_is_logged(self, monkeypatch: pytest.MonkeyPatch) -> None:
        messages = []
        monkeypatch.setattr(subprocess, "run", lambda cmd, **kw: None)
        logger.enable("toastmcp")
        sink_id = logger.add(messages.append, level="DEBUG", format="{message}")
        try:
            DesktopPresenter(system="Linux").present_notification("T", "M", None, "ms-winsoundevent:Notification.Mail")
        finally:
            logger.remove(sink_id)
            logger.disable("toastmcp")
        assert any("cannot play cue ms-winsoundevent:Notification.Mail" in m for m in messages)
