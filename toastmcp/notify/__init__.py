"""Notification invocation and the presenter boundary."""

from toastmcp.notify.invoker import DEFAULT_VOLUME, NotificationInvoker, NotifyInput, NotifyOutcome
from toastmcp.notify.presenter import DesktopPresenter, Presenter, SYSTEM_SOUND_CUES, system_sound_cue

__all__ = [
    "DEFAULT_VOLUME",
    "NotificationInvoker",
    "NotifyInput",
    "NotifyOutcome",
    "DesktopPresenter",
    "Presenter",
    "SYSTEM_SOUND_CUES",
    "system_sound_cue",
]
