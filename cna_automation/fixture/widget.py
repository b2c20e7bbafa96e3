"""
================================================================================
Fixture Widget
================================================================================

The single operation surface every test-table action goes through.

A FixtureWidget binds a configured widget name to a locator and to a
per-variant strategy object. Operations every control understands (existence,
visibility, enabled state, hover, tab, waits) are answered by the strategy's
driver widget directly. Every other operation is looked up on the strategy;
a variant that does not implement it fails with UnsupportedOperationError
naming the widget, the variant and the operation.

Usage:
    >>> widget = FixtureWidget("saveButton", "btnSave", "OE1100_", browser, ButtonStrategy)
    >>> widget.click()
    True
    >>> widget.check()
    UnsupportedOperationError: 'saveButton' is a 'Button' which does not support 'check'

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, List, Optional, Type

from cna_automation.exceptions import UnsupportedOperationError
from cna_automation.widgets.controls import IMAGE_WAIT_SECONDS, Widget


class WidgetStrategy:
    """
    Base of the per-variant strategies.

    Subclasses set ``friendly_type`` and ``driver_class`` and define only the
    operations their control supports.
    """

    friendly_type = ""
    driver_class: Type[Widget] = Widget

    def __init__(self, widget_name: str, locator: str, browser):
        self.widget_name = widget_name
        self.locator = locator
        self.browser = browser
        self.driver = self.driver_class(locator, browser)

    @property
    def wait_target_locator(self) -> str:
        return self.locator


class FixtureWidget:
    """
    A named, immutable widget of a layout map form.

    Args:
        name: Name used in test tables
        widget_id: Element id in the page
        id_base: Form-wide id prefix (``definitionID + "_"``)
        browser: Browser used by the driver widget
        strategy_class: WidgetStrategy subclass for the variant

    Raises:
        ValueError: On an empty name, id or id base, or a missing browser
    """

    def __init__(self, name: str, widget_id: str, id_base: str, browser, strategy_class: Type[WidgetStrategy]):
        if not name:
            raise ValueError("The widget name must be non-empty.")
        if not widget_id:
            raise ValueError("The widget ID must be non-empty.")
        if not id_base:
            raise ValueError("The form-wide ID base must be non-empty.")
        if browser is None:
            raise ValueError("The automation browser object must be non-null.")
        self._name = name
        self._id_base = id_base
        # Ids in CNA2.0 pages are already unique, the form prefix is not applied
        self._locator = widget_id
        self._browser = browser
        self._strategy = strategy_class(name, self._locator, browser)

    def __repr__(self) -> str:
        return f"FixtureWidget({self._name!r}, {self.friendly_type!r}, {self._locator!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def locator(self) -> str:
        return self._locator

    @property
    def id_base(self) -> str:
        return self._id_base

    @property
    def friendly_type(self) -> str:
        return self._strategy.friendly_type

    @property
    def strategy(self) -> WidgetStrategy:
        return self._strategy

    @property
    def wait_target_locator(self) -> str:
        return self._strategy.wait_target_locator

    def supports(self, operation: str) -> bool:
        return callable(getattr(self._strategy, operation, None))

    def _perform(self, operation: str, *args: Any) -> Any:
        action = getattr(self._strategy, operation, None)
        if not callable(action):
            raise UnsupportedOperationError(self._name, self.friendly_type, operation)
        return action(*args)

    # =========================================================================
    # Operations every variant supports
    # =========================================================================

    def exists(self) -> bool:
        return self._strategy.driver.exists()

    def is_visible(self) -> bool:
        return self._strategy.driver.is_visible()

    def is_disabled(self) -> bool:
        return self._strategy.driver.is_disabled()

    def is_editable(self) -> bool:
        return self._strategy.driver.is_editable()

    def hover(self) -> None:
        self._strategy.driver.hover()

    def press_tab(self) -> bool:
        return self._strategy.driver.press_tab()

    def wait_for(self) -> bool:
        return self._browser.wait_for_element(self.wait_target_locator)

    def wait_for_not_visible(self) -> bool:
        return self._browser.wait_for_no_element(self.wait_target_locator)

    def wait_until_disabled(self) -> bool:
        return self._strategy.driver.wait_until_disabled()

    def wait_until_enabled(self) -> bool:
        return self._strategy.driver.wait_until_enabled()

    def wait_for_image(self, timeout_seconds: int = IMAGE_WAIT_SECONDS) -> bool:
        return self._strategy.driver.wait_for_image(timeout_seconds)

    def press_key_sequence(self, key_to_hold: str, char_to_press: str) -> bool:
        return self._strategy.driver.press_key_sequence(key_to_hold, char_to_press)

    # =========================================================================
    # Clicks, check boxes and selection
    # =========================================================================

    def click(self) -> bool:
        return self._perform("click")

    def click_by_return(self) -> bool:
        return self._perform("click_by_return")

    def check(self) -> bool:
        return self._perform("check")

    def check_by_label(self) -> bool:
        return self._perform("check_by_label")

    def uncheck(self) -> bool:
        return self._perform("uncheck")

    def is_checked(self) -> bool:
        return self._perform("is_checked")

    def is_selected(self) -> bool:
        return self._perform("is_selected")

    def select(self) -> bool:
        return self._perform("select")

    def select_value(self, option: str) -> bool:
        return self._perform("select_value", option)

    def select_option(self, option: str) -> bool:
        return self._perform("select_option", option)

    def select_by_index(self, index: int) -> bool:
        return self._perform("select_by_index", index)

    def deselect(self, option: str) -> bool:
        return self._perform("deselect", option)

    def deselect_all(self) -> bool:
        return self._perform("deselect_all")

    def select_all(self) -> bool:
        return self._perform("select_all")

    def get_all_options(self) -> List[str]:
        return self._perform("get_all_options")

    def get_selected_options(self) -> List[str]:
        return self._perform("get_selected_options")

    def select_calendar_date(self, date: str) -> bool:
        return self._perform("select_calendar_date", date)

    # =========================================================================
    # Text
    # =========================================================================

    def get_text(self) -> Optional[str]:
        return self._perform("get_text")

    def get_place_holder_text(self) -> Optional[str]:
        return self._perform("get_place_holder_text")

    def clear(self) -> bool:
        return self._perform("clear")

    def clear_and_validate(self, default_value: str) -> bool:
        return self._perform("clear_and_validate", default_value)

    def type(self, value: str) -> bool:
        return self._perform("type", value)

    def type_telephone_number(self, value: str) -> bool:
        return self._perform("type_telephone_number", value)

    def type_by_javascript(self, value: str) -> bool:
        return self._perform("type_by_javascript", value)

    def type_no_tab(self, value: str) -> bool:
        return self._perform("type_no_tab", value)

    def type_with_ctrl_a_del(self, value: str) -> bool:
        return self._perform("type_with_ctrl_a_del", value)

    def type_without_wait_for_clickable(self, value: str) -> bool:
        return self._perform("type_without_wait_for_clickable", value)

    def type_without_tab(self, value: str) -> bool:
        return self._perform("type_without_tab", value)

    def type_without_clear(self, value: str) -> bool:
        return self._perform("type_without_clear", value)

    def type_without_clear_and_without_tab(self, value: str) -> bool:
        return self._perform("type_without_clear_and_without_tab", value)

    def wait_for_content(self, content: str) -> bool:
        return self._perform("wait_for_content", content)

    # =========================================================================
    # Tables
    # =========================================================================

    def click_cell(self, row: int, column: int) -> bool:
        return self._perform("click_cell", row, column)

    def click_cell_by_column_name(self, column_name: str, row: int) -> bool:
        return self._perform("click_cell_by_column_name", column_name, row)

    def click_cell_by_column_id(self, column_id: str, row: int) -> bool:
        return self._perform("click_cell_by_column_id", column_id, row)

    def click_finder_in_cell(self, row: int, column: int) -> bool:
        return self._perform("click_finder_in_cell", row, column)

    def click_finder_in_cell_by_column_name(self, column_name: str, row: int) -> bool:
        return self._perform("click_finder_in_cell_by_column_name", column_name, row)

    def click_pencil_button_in_cell(self, row: int, column: int) -> bool:
        return self._perform("click_pencil_button_in_cell", row, column)

    def delete_row(self, row: int) -> bool:
        return self._perform("delete_row", row)

    def get_cell_row_idx_by_value(self, column: int, value: str) -> int:
        return self._perform("get_cell_row_idx_by_value", column, value)

    def get_cell_text(self, row: int, column: int) -> Optional[str]:
        return self._perform("get_cell_text", row, column)

    def get_cell_text_by_column_name(self, column_name: str, row: int) -> Optional[str]:
        return self._perform("get_cell_text_by_column_name", column_name, row)

    def get_selected_cell(self, column_name: str, row: int) -> str:
        return self._perform("get_selected_cell", column_name, row)

    def wait_for_cell_content(self, column_name: str, row: int, content: str) -> bool:
        return self._perform("wait_for_cell_content", column_name, row, content)

    def get_header_cell_text(self, column: int) -> Optional[str]:
        return self._perform("get_header_cell_text", column)

    def get_index_of_column(self, column_name: str) -> int:
        return self._perform("get_index_of_column", column_name)

    def get_index_of_column_by_id(self, column_id: str) -> int:
        return self._perform("get_index_of_column_by_id", column_id)

    def is_cell_data_present(self, column: int, row: int) -> bool:
        return self._perform("is_cell_data_present", column, row)

    def is_column_hidden(self, column: int) -> bool:
        return self._perform("is_column_hidden", column)

    def select_from_cell(self, row: int, column: int, value: str) -> bool:
        return self._perform("select_from_cell", row, column, value)

    def select_from_cell_by_column_name(self, column_name: str, row: int, value: str) -> bool:
        return self._perform("select_from_cell_by_column_name", column_name, row, value)

    def select_from_cell_without_validation(self, row: int, column: int, value: str) -> bool:
        return self._perform("select_from_cell_without_validation", row, column, value)

    def type_into_cell(self, row: int, column: int, value: str) -> bool:
        return self._perform("type_into_cell", row, column, value)

    def type_into_cell_by_column_name(self, column_name: str, row: int, value: str) -> bool:
        return self._perform("type_into_cell_by_column_name", column_name, row, value)

    def type_into_cell_without_tab(self, row: int, column: int, value: str) -> bool:
        return self._perform("type_into_cell_without_tab", row, column, value)

    def wait_for_table_to_load(self) -> bool:
        return self._perform("wait_for_table_to_load")

    def get_current_page(self) -> str:
        return self._perform("get_current_page")

    def get_total_pages(self) -> str:
        return self._perform("get_total_pages")

    def go_to_page(self, page: str) -> bool:
        return self._perform("go_to_page", page)

    def navigate(self, action: str) -> bool:
        return self._perform("navigate", action)

    def select_lines_for_delete(self, lines: str) -> bool:
        return self._perform("select_lines_for_delete", lines)

    def unselect_lines_for_delete(self, lines: str) -> bool:
        return self._perform("unselect_lines_for_delete", lines)

    def is_all_checked(self) -> bool:
        return self._perform("is_all_checked")

    def is_all_unchecked(self) -> bool:
        return self._perform("is_all_unchecked")

    def get_total_items(self) -> int:
        return self._perform("get_total_items")

    def get_checked_items_to_delete(self) -> int:
        return self._perform("get_checked_items_to_delete")


__all__ = ["FixtureWidget", "WidgetStrategy"]
