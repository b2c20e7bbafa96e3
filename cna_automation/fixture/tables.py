"""
================================================================================
Table Strategy
================================================================================

Grid operations for the ``genericOnePageTable`` / ``Table`` widget types.

Editable cells only render their inner control (text box, combo box, finder
or pencil button) once the cell is activated. Activation clicks the cell
natively and then again through jQuery, addressing the cell with one of two
layouts:

    grid content rows   div#G > div.k-grid-content > table > tbody > tr:eq(r) > td:eq(c)
    plain table rows    div#G > table > tbody > tr:eq(r) > td:eq(c)

Rows and columns are 1-based for callers and 0-based inside the script. When
neither layout holds the cell the action returns False.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from cna_automation.fixture.widget import WidgetStrategy
from cna_automation.widgets.table import MAX_ROWS_PER_PAGE, Table, parse_line_numbers


class TableStrategy(WidgetStrategy):
    friendly_type = "OnePageTable"
    driver_class = Table

    # =========================================================================
    # Cell activation
    # =========================================================================

    def _cell_script(self, row: int, column: int) -> Optional[str]:
        grid_content_cell = (
            f"//div[@id='{self.locator}']/div[@class='k-grid-content']/table/tbody/tr[{row}]/td[{column}]"
        )
        plain_cell = f"//div[@id='{self.locator}']/table/tbody/tr[{row}]/td[{column}]"
        row_index, column_index = row - 1, column - 1
        if self.browser.exists_no_wait(grid_content_cell):
            return (
                f'$("div#{self.locator} > div.k-grid-content > table > tbody > '
                f'tr:eq({row_index}) > td:eq({column_index})").click();'
            )
        if self.browser.exists(plain_cell):
            return (
                f'$("div#{self.locator} > table > tbody > '
                f'tr:eq({row_index}) > td:eq({column_index})").click();'
            )
        return None

    def activate_cell(self, row: int, column: int) -> bool:
        """Click a cell natively, then by script, so its inner control renders."""
        self.click_cell(row, column)
        script = self._cell_script(row, column)
        if script is None:
            logger.warning(f"Cell ({row}, {column}) of table '{self.locator}' matches no known grid layout")
            return False
        self.browser.execute_javascript_return_string(script)
        return True

    # =========================================================================
    # Cell clicks
    # =========================================================================

    def click_cell(self, row: int, column: int) -> bool:
        field = self.driver.get_field(row, column)
        return field is not None and field.click()

    def click_cell_by_column_name(self, column_name: str, row: int) -> bool:
        return self.click_cell(row, self.driver.get_index_of_column(column_name))

    def click_cell_by_column_id(self, column_id: str, row: int) -> bool:
        return self.click_cell(row, self.driver.get_index_of_column_by_id(column_id))

    def click_finder_in_cell(self, row: int, column: int) -> bool:
        if not self.activate_cell(row, column):
            return False
        return self.driver.get_finder_button_field(row, column).click()

    def click_finder_in_cell_by_column_name(self, column_name: str, row: int) -> bool:
        return self.click_finder_in_cell(row, self.driver.get_index_of_column(column_name))

    def click_pencil_button_in_cell(self, row: int, column: int) -> bool:
        if not self.activate_cell(row, column):
            return False
        return self.driver.get_pencil_button_field(row, column).click()

    def delete_row(self, row: int) -> bool:
        return self.driver.delete_row(row)

    # =========================================================================
    # Cell content
    # =========================================================================

    def get_cell_text(self, row: int, column: int) -> Optional[str]:
        field = self.driver.get_field(row, column)
        return None if field is None else field.get_text()

    def get_cell_text_by_column_name(self, column_name: str, row: int) -> Optional[str]:
        return self.get_cell_text(row, self.driver.get_index_of_column(column_name))

    def get_selected_cell(self, column_name: str, row: int) -> str:
        return self.driver.get_combo_box_field(row, column_name).get_selected_value()

    def wait_for_cell_content(self, column_name: str, row: int, content: str) -> bool:
        field = self.driver.get_field(row, column_name)
        return field is not None and field.wait_for_content(content)

    def get_cell_row_idx_by_value(self, column: int, value: str) -> int:
        return self.driver.get_cell_row_idx_by_value(column, value)

    def is_cell_data_present(self, column: int, row: int) -> bool:
        return self.driver.is_cell_data_present(column, row)

    def select_from_cell(self, row: int, column: int, value: str) -> bool:
        if not self.activate_cell(row, column):
            return False
        self.driver.get_combo_box_field(row, column).select_combo_box(value, True)
        return self.get_cell_text(row, column) == value

    def select_from_cell_by_column_name(self, column_name: str, row: int, value: str) -> bool:
        return self.select_from_cell(row, self.driver.get_index_of_column(column_name), value)

    def select_from_cell_without_validation(self, row: int, column: int, value: str) -> bool:
        if not self.activate_cell(row, column):
            return False
        self.driver.get_combo_box_field(row, column).select_combo_box(value, False)
        return True

    def type_into_cell(self, row: int, column: int, value: str) -> bool:
        if not self.activate_cell(row, column):
            return False
        return self.driver.get_text_box_field(row, column).type_into_cell(value, True)

    def type_into_cell_by_column_name(self, column_name: str, row: int, value: str) -> bool:
        return self.type_into_cell(row, self.driver.get_index_of_column(column_name), value)

    def type_into_cell_without_tab(self, row: int, column: int, value: str) -> bool:
        if not self.activate_cell(row, column):
            return False
        return self.driver.get_text_box_field(row, column).type_into_cell(value, False)

    # =========================================================================
    # Columns
    # =========================================================================

    def get_header_cell_text(self, column: int) -> Optional[str]:
        return self.driver.get_column_name_by_index(column)

    def get_index_of_column(self, column_name: str) -> int:
        return self.driver.get_index_of_column(column_name)

    def get_index_of_column_by_id(self, column_id: str) -> int:
        return self.driver.get_index_of_column_by_id(column_id)

    def is_column_hidden(self, column: int) -> bool:
        return self.driver.is_column_hidden(column)

    def wait_for_table_to_load(self) -> bool:
        return self.driver.wait_for_table_to_load()

    # =========================================================================
    # Paging
    # =========================================================================

    def get_current_page(self) -> str:
        return self.driver.get_current_page()

    def get_total_pages(self) -> str:
        return self.driver.get_total_pages()

    def go_to_page(self, page: str) -> bool:
        return self.driver.go_to_page(page)

    def navigate(self, action: str) -> bool:
        if not action:
            raise ValueError("The navigation action must be non-empty.")
        return self.driver.navigate(action)

    # =========================================================================
    # Line selection
    # =========================================================================

    def _scroll_home(self, lines: str) -> None:
        # The check box column is off screen once the grid scrolled right
        first_line = parse_line_numbers(lines)[0]
        if not 1 <= first_line <= MAX_ROWS_PER_PAGE:
            return
        field = self.driver.get_field(first_line, 1)
        if field is not None:
            field.click()

    def select_lines_for_delete(self, lines: str) -> bool:
        self._scroll_home(lines)
        return self.driver.select_lines_for_delete(lines)

    def unselect_lines_for_delete(self, lines: str) -> bool:
        self._scroll_home(lines)
        return self.driver.unselect_lines_for_delete(lines)

    def is_all_checked(self) -> bool:
        return self.driver.is_all_checked()

    def is_all_unchecked(self) -> bool:
        return self.driver.is_all_unchecked()

    def get_total_items(self) -> int:
        return self.driver.get_total_items()

    def get_checked_items_to_delete(self) -> int:
        return self.driver.get_checked_items_to_delete()


__all__ = ["TableStrategy"]
