"""Weekly content windows for rotating Mythic+ build data."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Final, Protocol

# datetime.weekday() numbering: Monday is 0.
RESET_WEEKDAY: Final[int] = 2


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def _localnow() -> datetime:
    return datetime.now().astimezone()


class ContentWindow(StrEnum):
    THIS_WEEK = "this-week"
    LAST_WEEK = "last-week"

    @property
    def fallback(self) -> ContentWindow:
        """The opposite window, tried when the primary one has no data."""

        if self is ContentWindow.THIS_WEEK:
            return ContentWindow.LAST_WEEK
        return ContentWindow.THIS_WEEK


def primary_window(*, clock: Clock = _localnow, reset_weekday: int = RESET_WEEKDAY) -> ContentWindow:
    """Pick the window to query first.

    Right after the weekly reset the aggregation site has little data for the new
    week, so on the reset day last week's builds are preferred.
    """

    if clock().weekday() == reset_weekday:
        return ContentWindow.LAST_WEEK
    return ContentWindow.THIS_WEEK


__all__ = ["RESET_WEEKDAY", "Clock", "ContentWindow", "primary_window"]
