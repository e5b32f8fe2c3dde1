"""Presentation and playback collaborators.

The invoker only talks to the ``Presenter`` protocol. ``DesktopPresenter``
shells out to whatever the host platform offers; tests inject fakes.
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from pathlib import Path
from typing import Callable, Protocol

from loguru import logger

from toastmcp.utils.exceptions import PlaybackError, PresentationError, ToastMcpError

APP_ID = "ToastMCP"

# Built-in toast sounds, addressed by the ids the registry falls back to.
SYSTEM_SOUND_CUES: dict[str, str] = {
    "default": "ms-winsoundevent:Notification.Default",
    "im": "ms-winsoundevent:Notification.IM",
    "mail": "ms-winsoundevent:Notification.Mail",
    "reminder": "ms-winsoundevent:Notification.Reminder",
    "sms": "ms-winsoundevent:Notification.SMS",
    "alarm": "ms-winsoundevent:Notification.Alarm",
    "incoming_call": "ms-winsoundevent:Notification.IncomingCall",
}


def system_sound_cue(sound_id: str) -> str | None:
    """Map a built-in sound id to the platform cue identifier."""
    return SYSTEM_SOUND_CUES.get(sound_id)


class Presenter(Protocol):
    """Outbound capability boundary for the OS notification subsystem."""

    def present_notification(
        self,
        title: str,
        message: str,
        icon_path: Path | None = None,
        inline_audio_id: str | None = None,
    ) -> None:
        """Show a toast. Raises PresentationError."""
        ...

    def play_audio(self, path: Path) -> None:
        """Start playing a WAV file. Raises PlaybackError."""
        ...


def xml_escape(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def build_toast_xml(
    title: str,
    message: str,
    icon_path: Path | None = None,
    inline_audio_id: str | None = None,
) -> str:
    """Toast payload for the Windows notification manager."""
    image = ""
    if icon_path is not None:
        image = f'<image placement="appLogoOverride" src="{xml_escape(icon_path.resolve().as_uri())}"/>'
    if inline_audio_id:
        audio = f'<audio src="{xml_escape(inline_audio_id)}"/>'
    else:
        audio = '<audio silent="true"/>'
    return (
        "<toast><visual><binding template=\"ToastGeneric\">"
        f"<text>{xml_escape(title)}</text>"
        f"<text>{xml_escape(message)}</text>"
        f"{image}"
        f"</binding></visual>{audio}</toast>"
    )


def _ps_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class DesktopPresenter:
    """Presenter backed by the platform's notification and audio commands."""

    def __init__(self, system: str | None = None, timeout: float = 10.0):
        self.system = system or platform.system()
        self.timeout = timeout

    def _run(self, command: list[str], fail: Callable[[str], ToastMcpError]) -> None:
        """Run ``command`` to completion; any failure is raised as ``fail(detail)``."""
        try:
            subprocess.run(command, capture_output=True, text=True, check=True, timeout=self.timeout)
        except FileNotFoundError as e:
            raise fail(f"{command[0]} is not available") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip()[-500:] or f"exit status {e.returncode}"
            raise fail(detail) from e
        except subprocess.TimeoutExpired as e:
            raise fail(f"{command[0]} timed out after {self.timeout}s") from e
        except OSError as e:
            raise fail(str(e)) from e

    def present_notification(
        self,
        title: str,
        message: str,
        icon_path: Path | None = None,
        inline_audio_id: str | None = None,
    ) -> None:
        if self.system == "Windows":
            xml = build_toast_xml(title, message, icon_path, inline_audio_id)
            script = (
                "[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null;"
                "[Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime] | Out-Null;"
                "$doc = New-Object Windows.Data.Xml.Dom.XmlDocument;"
                f"$doc.LoadXml({_ps_quote(xml)});"
                "$toast = [Windows.UI.Notifications.ToastNotification]::new($doc);"
                f"[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier({_ps_quote(APP_ID)}).Show($toast)"
            )
            command = ["powershell", "-NoProfile", "-Command", script]
        elif self.system == "Darwin":
            script = f"display notification {_applescript_quote(message)} with title {_applescript_quote(title)}"
            if inline_audio_id:
                logger.debug("No macOS equivalent for cue {}, using the default sound", inline_audio_id)
                script += ' sound name "default"'
            command = ["osascript", "-e", script]
        else:
            command = ["notify-send", "--app-name", APP_ID]
            if icon_path is not None:
                command += ["--icon", str(icon_path)]
            command += [title, message]
            if inline_audio_id:
                logger.debug("notify-send cannot play cue {}, toast will be silent", inline_audio_id)
        logger.debug("Presenting notification via {}", command[0])
        self._run(command, lambda detail: PresentationError(detail, backend=self.system))

    def play_audio(self, path: Path) -> None:
        target = str(path)
        if self.system == "Windows":
            script = f"(New-Object Media.SoundPlayer {_ps_quote(target)}).PlaySync()"
            command = ["powershell", "-NoProfile", "-Command", script]
        elif self.system == "Darwin":
            command = ["afplay", target]
        else:
            player = shutil.which("paplay") or shutil.which("aplay")
            if player is None:
                raise PlaybackError(target, "neither paplay nor aplay is available")
            command = [player, target]
        logger.debug("Playing {} via {}", path.name, command[0])
        self._run(command, lambda detail: PlaybackError(target, detail))


def _applescript_quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
