"""
Kendo date picker pop-up.

The header link ``div[1]/div[1]/a[2]`` shows "Month Year"; ``a[1]`` and
``a[3]`` move one month back or forward. Days are laid out in a 6 x 7 grid.
"""

from __future__ import annotations

import calendar as _calendar
from typing import Tuple

from cna_automation.timing import SettleDelay, TimeDelay
from cna_automation.widgets.controls import Widget


MONTHS = list(_calendar.month_name)[1:]
DAY_ROWS = 6
DAY_COLUMNS = 7
MAX_MONTH_STEPS = 12 * 500


def parse_calendar_date(input_date: str) -> Tuple[int, int, int]:
    """
    Validate a "MM/DD/YYYY" string.

    Returns:
        (month, day, year)

    Raises:
        ValueError: On an out-of-range month, day or year
    """
    month_text, day_text, year_text = input_date.split("/")
    month, day, year = int(month_text), int(day_text), int(year_text)
    if month < 1 or month > 12:
        raise ValueError(f"The month value of {month} is invalid.")
    if day < 0 or day > 31:
        raise ValueError(f"The day value of {day} is invalid.")
    if year < 1900 or year > 2400:
        raise ValueError(f"The year value of {year} is invalid.")
    month_name = MONTHS[month - 1]
    if month_name == "February":
        if day > 29:
            raise ValueError("February only has 29 days in a leap year.")
        if day == 29 and not _calendar.isleap(year):
            raise ValueError(f"{year} is not a leap year; February only has 28 days.")
    if month_name in ("April", "June", "September", "November") and day > 30:
        raise ValueError(f"{month_name} only has 30 days.")
    return month, day, year


class Calendar(Widget):

    def _header(self) -> Tuple[str, int]:
        text = self._browser.get_text(f"{self._locator}/div[1]/div[1]/a[2]")
        month_name, year = text.split(" ")
        return month_name, int(year)

    def _navigate(self, forward: bool) -> None:
        link = "a[3]" if forward else "a[1]"
        self._browser.click(f"{self._locator}/div[1]/div[1]/{link}")
        TimeDelay.do_pause(SettleDelay.CALENDAR_NAVIGATE)

    def _select_day(self, day: int) -> bool:
        TimeDelay.do_medium_pause()
        # Days above 25 can only be in the last weeks of the grid; skip the
        # leading rows so the previous month's trailing days are not matched
        first_row = 4 if day > 25 else 1
        for row in range(first_row, DAY_ROWS + 1):
            for column in range(1, DAY_COLUMNS + 1):
                cell = f"{self._locator}/div/table[1]/tbody/tr[{row}]/td[{column}]/a"
                if not self._browser.exists(cell):
                    raise ValueError(f"Calendar day locator '{cell}' not found.")
                if self._browser.get_text(cell) == str(day):
                    return self._browser.click(cell)
        return False

    def set_calendar_date(self, input_date: str) -> bool:
        """Pick "MM/DD/YYYY" by paging the month header, then clicking the day."""
        month, day, year = parse_calendar_date(input_date)
        target = year * 12 + (month - 1)
        for _ in range(MAX_MONTH_STEPS):
            month_name, current_year = self._header()
            current = current_year * 12 + MONTHS.index(month_name.capitalize())
            if current == target:
                return self._select_day(day)
            self._navigate(forward=target > current)
        return False


__all__ = ["Calendar", "parse_calendar_date"]
