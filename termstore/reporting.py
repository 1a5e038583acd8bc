"""Default collaborators for user-facing error display and confirmation.

The storage layer never talks to a UI directly. It calls an error
reporter ``(message, param)`` when a failure must reach the user, and a
confirmation callback ``(prompt) -> Confirmation`` when the host key vault
wants to migrate a key. Applications plug in their own; the defaults here
log and decline.
"""

import logging
from typing import Callable, Optional

from .types import Confirmation

logger = logging.getLogger(__name__)

ErrorReporter = Callable[[str, Optional[str]], None]
ConfirmCallback = Callable[[str], Confirmation]


def format_error(message: str, param: Optional[str] = None) -> str:
    text = f"Error: {message}"
    if param:
        text += f"\n{param}"
    return text


def log_reporter(message: str, param: Optional[str] = None) -> None:
    """Report an error by logging it."""
    logger.error(format_error(message, param))


def cancel_all(prompt: str) -> Confirmation:
    """Confirmation callback that never changes anything."""
    logger.debug(f"Declining confirmation: {prompt.splitlines()[0] if prompt else ''}")
    return Confirmation.CANCEL
