"""User-visible notifications and the error boundary for view actions."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from mpl_site.errors import AuthError, RegistrationError, SiteError

REAUTH_PROMPT = "Session expired. Please login again."

_logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")


class NotificationLevel(StrEnum):
    """Severity of a transient notification."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"
    REAUTH = "reauth"


@dataclass(frozen=True)
class Notification:
    """Transient message shown to the viewer."""

    level: NotificationLevel
    message: str


NotificationListener = Callable[[Notification], None]
Confirm = Callable[[str], bool]


@dataclass
class Notifier:
    """Collects notifications and forwards them to listeners."""

    history: list[Notification] = field(default_factory=list)
    _listeners: list[NotificationListener] = field(
        default_factory=list, init=False, repr=False
    )

    def subscribe(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def success(self, message: str) -> None:
        self._emit(Notification(NotificationLevel.SUCCESS, message))

    def info(self, message: str) -> None:
        self._emit(Notification(NotificationLevel.INFO, message))

    def error(self, message: str) -> None:
        self._emit(Notification(NotificationLevel.ERROR, message))

    def reauth(self, message: str = REAUTH_PROMPT) -> None:
        self._emit(Notification(NotificationLevel.REAUTH, message))

    @property
    def errors(self) -> list[Notification]:
        """Return error and re-authentication notifications."""
        return [
            item
            for item in self.history
            if item.level in {NotificationLevel.ERROR, NotificationLevel.REAUTH}
        ]

    @property
    def last(self) -> Notification | None:
        return self.history[-1] if self.history else None

    def _emit(self, notification: Notification) -> None:
        self.history.append(notification)
        _logger.debug("Notify %s: %s", notification.level, notification.message)
        for listener in list(self._listeners):
            listener(notification)


async def run_action(
    notifier: Notifier,
    action: Callable[[], Awaitable[ResultT]],
    *,
    success: str | None = None,
    failure: str = "Something went wrong. Please try again.",
) -> ResultT | None:
    """Run a view action, turning every failure into a notification."""
    try:
        result = await action()
    except AuthError as exc:
        _logger.info("Action rejected for authorization: %s", exc.message)
        notifier.reauth()
        return None
    except SiteError as exc:
        if isinstance(exc, RegistrationError) and isinstance(exc.cause, AuthError):
            _logger.info("Upload %s not saved: session rejected", exc.image.external_id)
            notifier.reauth(f"Image uploaded but not saved. {REAUTH_PROMPT}")
            return None
        _logger.error("Action failed: %s", exc.message)
        notifier.error(exc.message)
        return None
    except Exception:
        _logger.exception("Unexpected failure in view action")
        notifier.error(failure)
        return None
    if success:
        notifier.success(success)
    return result


async def attempt(
    notifier: Notifier,
    action: Callable[[], Awaitable[object]],
    *,
    success: str | None = None,
) -> bool:
    """Like ``run_action`` for actions without a result; True on success."""

    async def marked() -> bool:
        await action()
        return True

    return bool(await run_action(notifier, marked, success=success))
