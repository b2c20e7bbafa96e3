"""
================================================================================
Grid Widgets
================================================================================

Kendo grid addressing for the driver layer.

A grid with id ``G`` renders either as a scrolling grid

    //div[@id='G']/div[@class='k-grid-header']/div/table/thead/tr   (headers)
    //div[@id='G']/div[@class='k-grid-content']/table/tbody         (rows)

or, for small grids, as a plain table

    //div[@id='G']/table/thead/tr
    //div[@id='G']/table/tbody

The pager sits in ``//div[@id='G']/div[3]``.

Features:
    - Column lookup by header text (cached, case-insensitive) or data-field id
    - Cell widgets resolved through ordered helper paths (text box, finder,
      pencil button, combo box)
    - Page navigation and "a - b of N items" pager arithmetic
    - Row check boxes for multi-line delete

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union

from loguru import logger
from selenium.common.exceptions import WebDriverException

from cna_automation.browser.browser import Browser
from cna_automation.widgets.controls import Button, ComboBox, Label, TextBox, Widget


DELETE_ROW_COLUMN = "deleteRowColumn"
HIDDEN_COLUMN_PREFIX = "hiddenAtColumn"
MAX_ROWS_PER_PAGE = 10
FINDER_GRID_MARKER = "div_finder_grid"
FINDER_GRID_ROWS_PER_PAGE = 5

# Inner controls of a cell, tried in order
TEXT_BOX_HELPERS = ("/span/span/input[2]", "/span/span/input", "/input", "/div/div/input", "")
FINDER_BUTTON_HELPERS = ("/input[2]", "/input", "/div/div[2]/input")
PENCIL_BUTTON_HELPER = "/div/span[2]/input"
COMBO_BOX_HELPERS = ("/span/select",)

_PAGE_ITEMS = re.compile(r"^\s*\d+\s*-\s*(\d+)\s*of\s*(\d+)")


# =============================================================================
# Pager arithmetic
# =============================================================================

def parse_page_items(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse a pager label such as "11 - 20 of 31 items".

    Returns:
        (last item on the page, total items), or None for "No items to display"
    """
    if "-" not in text:
        return None
    match = _PAGE_ITEMS.match(text)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


def items_on_page(text: str, per_page: int = MAX_ROWS_PER_PAGE) -> int:
    """
    Number of rows on the current page.

    Examples:
        >>> items_on_page("31 - 31 of 31 items")
        1
        >>> items_on_page("11 - 20 of 31 items")
        10
        >>> items_on_page("No items to display")
        0
    """
    parsed = parse_page_items(text)
    if parsed is None:
        return 0
    last_item = parsed[0]
    count = last_item % per_page
    if count == 0 and last_item > 0:
        count = per_page
    return count


def total_items(text: str) -> int:
    parsed = parse_page_items(text)
    return 0 if parsed is None else parsed[1]


def parse_line_numbers(lines: str) -> List[int]:
    """Split "3,4,7,10" (or "3") into 1-based row numbers."""
    numbers = [int(line.strip()) for line in (lines or "").split(",") if line.strip()]
    if not numbers:
        raise ValueError("The line numbers must be non-empty.")
    return numbers


# =============================================================================
# Widgets
# =============================================================================

class TableNavigation(Widget):
    """Pager bar under a grid."""

    def first_button(self) -> Button:
        return Button(f"{self._locator}/a[@title='Go to the first page']", self._browser)

    def previous_button(self) -> Button:
        return Button(f"{self._locator}/a[@title='Go to the previous page']", self._browser)

    def next_button(self) -> Button:
        return Button(f"{self._locator}/a[@title='Go to the next page']", self._browser)

    def last_button(self) -> Button:
        return Button(f"{self._locator}/a[@title='Go to the last page']", self._browser)

    def current_page_text_box(self) -> TextBox:
        return TextBox(f"{self._locator}/span[1]/input", self._browser)

    def total_pages_label(self) -> Label:
        return Label(f"{self._locator}/span[1]", self._browser)

    def page_items_label(self) -> Label:
        return Label(f"{self._locator}/span[2]", self._browser)


class Table(Widget):
    """
    Kendo grid addressed by 1-based row and column indices.

    Usage:
        >>> table = Table("grdOrderLines", browser)
        >>> table.get_index_of_column("Item Number")
        3
        >>> table.get_field(1, 3).get_text()
        'A1-103/0'
    """

    def __init__(self, locator: str, browser: Browser):
        super().__init__(locator, browser)
        self._header_row = f"//div[@id='{locator}']/div[@class='k-grid-header']/div/table/thead/tr"
        self._data_body = f"//div[@id='{locator}']/div[@class='k-grid-content']/table/tbody"
        self._column_headers: Optional[List[str]] = None
        self._column_ids: Optional[List[str]] = None

    # =========================================================================
    # Locators
    # =========================================================================

    def _adjust_layout(self) -> None:
        scrolling_header = f"//div[@id='{self._locator}']/div[@class='k-grid-header']/div/table/thead/tr"
        if self._header_row == scrolling_header and not self._browser.exists_no_wait(self._header_row):
            self._header_row = f"//div[@id='{self._locator}']/table/thead/tr"
            self._data_body = f"//div[@id='{self._locator}']/table/tbody"

    @property
    def header_row_locator(self) -> str:
        self._adjust_layout()
        return self._header_row

    @property
    def data_body_locator(self) -> str:
        self._adjust_layout()
        return self._data_body

    def cell_locator(self, row: int, column: int) -> str:
        return f"{self.data_body_locator}/tr[{row}]/td[{column}]"

    def header_locator(self, column: int) -> str:
        return f"{self.header_row_locator}/th[{column}]"

    def row_check_box_locator(self, row: int) -> str:
        return f"{self.data_body_locator}/tr[{row}]/td[1]/span/input"

    @staticmethod
    def _validate_column(column: int, column_name: str = "") -> None:
        if column <= 0:
            raise LookupError(
                f"The specified column name, {column_name}, or column index {column} "
                f"do not represent a valid column in this Table"
            )

    @staticmethod
    def _validate_row(row: int) -> None:
        if row < 1 or row > MAX_ROWS_PER_PAGE:
            raise IndexError(
                f"Row index {row} is out of range. Row numbers start at 1 and "
                f"cannot be larger than {MAX_ROWS_PER_PAGE}"
            )

    # =========================================================================
    # Column resolution
    # =========================================================================

    def get_index_of_column(self, column_name: str) -> int:
        """
        Resolve a header text to its 1-based index (0 when absent).

        Hidden columns are recorded as ``hiddenAtColumnN`` and blank headers
        as ``deleteRowColumn`` so they still take up an index.
        """
        if self._column_headers is None:
            self._column_headers = []
        for index, header in enumerate(self._column_headers, start=1):
            if header.lower() == column_name.lower():
                return index

        index = len(self._column_headers)
        while True:
            index += 1
            header = self.header_locator(index)
            if not self._browser.exists(header):
                return 0
            style = self._browser.get_attribute(header, "style") or ""
            if style.startswith("display") and "none" in style:
                text = f"{HIDDEN_COLUMN_PREFIX}{index}"
            else:
                text = self._browser.get_text(header)
                if text in ("", "&nbsp;"):
                    text = DELETE_ROW_COLUMN
            self._column_headers.append(text)
            if text.lower() == column_name.lower():
                return index

    def get_index_of_column_by_id(self, column_id: str) -> int:
        """Resolve a header ``data-field`` to its 1-based index (0 when absent)."""
        if self._column_ids is None:
            self._column_ids = []
        for index, field in enumerate(self._column_ids, start=1):
            if field.lower() == column_id.lower():
                return index

        index = len(self._column_ids)
        while True:
            index += 1
            header = self.header_locator(index)
            if not self._browser.exists(header):
                return 0
            field = self._browser.get_attribute(header, "data-field") or ""
            self._column_ids.append(field)
            if field.lower() == column_id.lower():
                return index

    def reset_column_headings(self) -> None:
        self._column_headers = None
        self._column_ids = None

    def get_column_name_by_index(self, column: int) -> Optional[str]:
        try:
            return self._browser.get_text(self.header_locator(column))
        except WebDriverException:
            return None

    def is_column_hidden(self, column: int) -> bool:
        header = self.header_locator(column)
        if not self._browser.exists(header):
            raise LookupError(
                "Either we've reached the end of the header row or there may be a change "
                "to the structure of the html of the table element"
            )
        return "display: none" in (self._browser.get_attribute(header, "style") or "")

    # =========================================================================
    # Cells
    # =========================================================================

    def _column_index(self, column: Union[int, str]) -> int:
        if isinstance(column, str):
            return self.get_index_of_column(column)
        return column

    def get_field(self, row: int, column: Union[int, str]) -> Optional[Widget]:
        """
        Widget for a data cell: a TextBox when the cell is in edit mode,
        otherwise a Label. None when the cell is not rendered.
        """
        column_index = self._column_index(column)
        self._validate_column(column_index, column if isinstance(column, str) else "")
        self._validate_row(row)
        cell = self.cell_locator(row, column_index)
        if not self._browser.exists(cell):
            return None
        if "k-edit-cell" in (self._browser.get_attribute(cell, "class") or ""):
            return self.get_text_box_field(row, column_index)
        return Label(cell, self._browser)

    def _first_helper(self, cell: str, helpers, use_wait: bool = False) -> Optional[str]:
        exists = self._browser.exists if use_wait else self._browser.exists_no_wait
        for helper in helpers:
            if exists(cell + helper):
                return cell + helper
        return None

    def _inner_widget(self, row: int, column: Union[int, str], helpers, widget_cls, use_wait=False):
        column_index = self._column_index(column)
        self._validate_column(column_index, column if isinstance(column, str) else "")
        self._validate_row(row)
        locator = self._first_helper(self.cell_locator(row, column_index), helpers, use_wait)
        if locator is None:
            raise LookupError("This locator does not exist or does not identify a known widget")
        return widget_cls(locator, self._browser)

    def get_text_box_field(self, row: int, column: Union[int, str]) -> TextBox:
        return self._inner_widget(row, column, TEXT_BOX_HELPERS, TextBox)

    def get_finder_button_field(self, row: int, column: Union[int, str]) -> Button:
        return self._inner_widget(row, column, FINDER_BUTTON_HELPERS, Button)

    def get_pencil_button_field(self, row: int, column: Union[int, str]) -> Button:
        return self._inner_widget(row, column, (PENCIL_BUTTON_HELPER,), Button, use_wait=True)

    def get_combo_box_field(self, row: int, column: Union[int, str]) -> ComboBox:
        return self._inner_widget(row, column, COMBO_BOX_HELPERS, ComboBox, use_wait=True)

    def get_header_field(self, column: int) -> Label:
        self._validate_column(column)
        return Label(self.header_locator(column), self._browser)

    def is_cell_data_present(self, column: int, row: int) -> bool:
        # Rows are counted from the header here, hence the offset
        try:
            text = self._browser.get_text(self.cell_locator(row + 1, column))
        except WebDriverException as e:
            logger.debug(f"Cell ({row}, {column}) of '{self._locator}' unreadable: {e}")
            return False
        return bool(text)

    def delete_row(self, row: int) -> bool:
        delete_link = self.cell_locator(row, self.get_index_of_column(DELETE_ROW_COLUMN)) + "/a"
        return self._browser.click(delete_link)

    def get_column_count(self) -> int:
        column = 1
        while self._browser.exists(self.cell_locator(1, column)):
            column += 1
        return column - 1

    def wait_for_table_to_load(self) -> bool:
        second = self.get_field(1, 2)
        third = self.get_field(1, 3)
        if second is None or third is None:
            return False
        return self._browser.wait_for_element(second.locator) and self._browser.wait_for_element(third.locator)

    # =========================================================================
    # Paging
    # =========================================================================

    def navigation(self) -> TableNavigation:
        return TableNavigation(f"//div[@id='{self._locator}']/div[3]", self._browser)

    @property
    def rows_per_page(self) -> int:
        if FINDER_GRID_MARKER in self._locator:
            return FINDER_GRID_ROWS_PER_PAGE
        return MAX_ROWS_PER_PAGE

    def _page_items_text(self) -> str:
        return (self.navigation().page_items_label().get_text() or "").strip()

    def get_current_page(self) -> str:
        return self.navigation().current_page_text_box().get_text()

    def get_total_pages(self) -> str:
        text = self.navigation().total_pages_label().get_text() or ""
        return text.replace("Pageof", "").strip()

    def go_to_page(self, page: str) -> bool:
        page_box = self.navigation().current_page_text_box()
        page_box.click()
        if not page_box.type_without_wait_for_clickable(page):
            return False
        page_box.click()
        return self._browser.click_by_return(page_box.locator)

    def navigate(self, action: str) -> bool:
        navigation = self.navigation()
        buttons = {
            "first": navigation.first_button,
            "next": navigation.next_button,
            "previous": navigation.previous_button,
            "last": navigation.last_button,
        }
        button = buttons.get(action.lower())
        if button is None:
            return False
        return button().click()

    def get_items_on_current_page(self) -> int:
        return items_on_page(self._page_items_text(), self.rows_per_page)

    def get_total_items(self) -> int:
        return total_items(self._page_items_text())

    def get_cell_row_idx_by_value(self, column: int, value: str) -> int:
        """Search every page for ``value`` in ``column``; -1 when not found."""
        pages = int(self.get_total_pages())
        for page in range(1, pages + 1):
            if page != 1:
                self.go_to_page(str(page))
            for row in range(1, self.get_items_on_current_page() + 1):
                field = self.get_field(row, column)
                if field is not None and field.get_text() == value:
                    return row
        return -1

    # =========================================================================
    # Row check boxes
    # =========================================================================

    def select_lines_for_delete(self, lines: str) -> bool:
        """
        Tick the delete check box of each listed row ("2,4" or "3").

        Out-of-range rows are skipped in a list; a single out-of-range row fails.
        """
        numbers = parse_line_numbers(lines)
        if "," not in lines:
            if not 1 <= numbers[0] <= MAX_ROWS_PER_PAGE:
                return False
        for line in numbers:
            if not 1 <= line <= MAX_ROWS_PER_PAGE:
                continue
            check_box = self.row_check_box_locator(line)
            self._browser.select_check_box(check_box)
            if not self._browser.is_selected(check_box):
                return False
        return True

    def unselect_lines_for_delete(self, lines: str) -> bool:
        numbers = parse_line_numbers(lines)
        if "," not in lines:
            if not 1 <= numbers[0] <= MAX_ROWS_PER_PAGE:
                return False
        for line in numbers:
            if not 1 <= line <= MAX_ROWS_PER_PAGE:
                continue
            check_box = self.row_check_box_locator(line)
            if self._browser.is_selected(check_box):
                self._browser.click(check_box)
            if self._browser.is_selected(check_box):
                return False
        return True

    def _checked_rows(self, rows: int) -> List[bool]:
        return [self._browser.is_selected(self.row_check_box_locator(row)) for row in range(1, rows + 1)]

    def is_all_checked(self) -> bool:
        return all(self._checked_rows(self.get_items_on_current_page()))

    def is_all_unchecked(self) -> bool:
        return not any(self._checked_rows(self.get_items_on_current_page()))

    def get_checked_items_to_delete(self) -> int:
        rows = items_on_page(self._page_items_text(), MAX_ROWS_PER_PAGE)
        return sum(self._checked_rows(rows))


__all__ = [
    "Table",
    "TableNavigation",
    "DELETE_ROW_COLUMN",
    "items_on_page",
    "parse_line_numbers",
    "parse_page_items",
    "total_items",
]
