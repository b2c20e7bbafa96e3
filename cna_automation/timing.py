# ================================================================================
# Timing Module
# ================================================================================
#
# Pause durations, settle delays and the bounded poll loop used by every wait
# in the fixture layer.
#
# Key Features:
#   - Named pause lengths (milliseconds) shared by browser and fixture code
#   - Named settle delays for animated dialogs and auto-dismiss timers
#   - Pre-configured poll policies (attempts x interval)
#   - poll_until: NOT_PRESENT -> PRESENT | TIMEOUT state machine
#
# Usage:
#   TimeDelay.do_pause(SettleDelay.DIALOG_CLOSE)
#   found = poll_until(lambda: browser.exists_no_wait(locator), POLL_POLICIES["message_box"])
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from loguru import logger


class TimeDelay:
    """Standard pause lengths in milliseconds."""

    MINIMUM = 1
    SMALL = 100
    MEDIUM = 1000
    LARGE = 3000
    MAXIMUM = 5000
    EXTRA_MAXIMUM = 30000
    MASSIVE = 600000

    DEFAULT_TIMEOUT = 8000
    DEFAULT_INTERVAL = 50

    @staticmethod
    def do_pause(milliseconds: int) -> None:
        """Block the calling thread for the given number of milliseconds."""
        if milliseconds <= 0:
            return
        time.sleep(milliseconds / 1000.0)

    @classmethod
    def do_small_pause(cls) -> None:
        cls.do_pause(cls.SMALL)

    @classmethod
    def do_medium_pause(cls) -> None:
        cls.do_pause(cls.MEDIUM)

    @classmethod
    def do_large_pause(cls) -> None:
        cls.do_pause(cls.LARGE)

    @classmethod
    def do_maximum_pause(cls) -> None:
        cls.do_pause(cls.MAXIMUM)


class SettleDelay:
    """
    Fixed waits that cover UI animation and timers rather than a condition.

    These encode measured behaviour of the CNA2.0 UI. Replacing one with a
    zero-delay poll needs re-verification against the target application.
    """

    DIALOG_CLOSE = 4000          # Kendo window close animation
    POPUP_OPEN = 1000            # popup window fade-in before its close icon is live
    CONFIRMATION_RESPONSE = 4000  # confirmation dialog fade-out after a response
    DELETE_REFRESH = 3000        # grid refresh after a delete confirmation
    BEFORE_CLOSE = 2000          # pending requests before the browser is closed
    LAYOUT_SWITCH = 2000         # iframe swap after a layout map change
    MENU_HOVER = 1000            # portal top menu drop-down
    PORTAL_HOME = 1000           # portal home page redirect
    REPORT_VIEW = 10000          # report viewer window or iframe creation
    MENU_COLLAPSE = 500          # portal menu collapse after a menu click
    CALENDAR_NAVIGATE = 500      # calendar month header redraw


@dataclass
class PollPolicy:
    """
    Bounded poll configuration.

    Attributes:
        attempts: Maximum number of predicate evaluations
        interval_ms: Pause between two evaluations
    """
    attempts: int = 15
    interval_ms: int = 1000

    @property
    def timeout_ms(self) -> int:
        return self.attempts * self.interval_ms


# Pre-configured poll policies
POLL_POLICIES: Dict[str, PollPolicy] = {
    "element": PollPolicy(attempts=30, interval_ms=1000),
    "no_element": PollPolicy(attempts=10, interval_ms=1000),
    "spinner": PollPolicy(attempts=120, interval_ms=1000),
    "enabled_state": PollPolicy(attempts=15, interval_ms=1000),
    "message_box": PollPolicy(attempts=15, interval_ms=1000),
    "loading_image": PollPolicy(attempts=15, interval_ms=1000),
}


def get_poll_policy(name: str) -> PollPolicy:
    """
    Get a pre-configured poll policy.

    Raises:
        KeyError: If the policy name is unknown
    """
    return POLL_POLICIES[name]


def poll_until(
    predicate: Callable[[], bool],
    policy: Optional[PollPolicy] = None,
    description: str = "",
) -> bool:
    """
    Evaluate ``predicate`` until it is true or the policy is exhausted.

    Args:
        predicate: Zero-argument callable returning a truthy value when done
        policy: Attempts and interval; defaults to 15 x 1 second
        description: Text used in the debug log on timeout

    Returns:
        True as soon as the predicate holds, False after the last attempt
    """
    policy = policy or PollPolicy()
    for attempt in range(policy.attempts):
        if predicate():
            return True
        if attempt < policy.attempts - 1:
            TimeDelay.do_pause(policy.interval_ms)
    if description:
        logger.debug(
            f"Gave up waiting for {description} after {policy.attempts} attempts "
            f"({policy.timeout_ms} ms)"
        )
    return False


class BrowserTiming:
    """Pause collaborator handed to the fixture; tests replace it to run instantly."""

    def do_pause(self, milliseconds: int) -> None:
        TimeDelay.do_pause(milliseconds)

    def do_pause_seconds(self, seconds: int) -> None:
        self.do_pause(seconds * 1000)


__all__ = [
    "TimeDelay",
    "SettleDelay",
    "PollPolicy",
    "POLL_POLICIES",
    "get_poll_policy",
    "poll_until",
    "BrowserTiming",
]
