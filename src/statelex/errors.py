"""Exception classes for statelex.

Invalid *input* is never an exception: state functions report it as an
ordinary error-tagged item (see ``Lexer.errorf``). The exceptions here
signal misuse of the engine itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from statelex.location import SourceLocation


class StatelexError(Exception):
    """Base exception for all statelex errors.

    Subclass this for specific error categories.
    """

    pass


def _with_location(message: str, location: SourceLocation | None) -> str:
    if location is None:
        return message
    return f"{location} {message}"


class CursorMisuseError(StatelexError):
    """A cursor primitive was called out of order.

    Raised when ``backup()`` is called twice without an intervening
    ``next()``, or before any ``next()`` at all.
    """

    def __init__(
        self,
        message: str,
        position: int,
        location: SourceLocation | None = None,
    ) -> None:
        """Initialize cursor misuse error.

        Args:
            message: Description of the misuse
            position: Cursor position (storage offset) at the time of misuse
            location: Resolved source location (optional)
        """
        self.message = message
        self.position = position
        self.location = location
        super().__init__(_with_location(message, location))


class ScanStateError(StatelexError):
    """The scan lifecycle was violated.

    Raised when a scan is driven twice, a threaded scan is started twice,
    or a state function hands back something that is not a state.
    """

    def __init__(self, name: str, message: str) -> None:
        """Initialize scan state error.

        Args:
            name: Diagnostic name of the scan
            message: Description of the violation
        """
        self.name = name
        self.message = message
        super().__init__(f"scan {name!r}: {message}")


class ScanStalledError(ScanStateError):
    """The state graph kept transitioning without making progress.

    Only raised when ``ScanConfig.max_idle_steps`` is set.
    """

    def __init__(self, name: str, position: int, steps: int) -> None:
        self.position = position
        self.steps = steps
        super().__init__(
            name,
            f"{steps} transitions at offset {position} without consuming or emitting",
        )


class ChannelClosedError(StatelexError):
    """The emission channel is closed.

    Raised to a producer blocked in ``send()`` when the consumer cancels,
    and to a consumer receiving from a closed, drained channel.
    """

    pass
