"""
================================================================================
Driver Widgets
================================================================================

Thin per-control wrappers around the Browser. Each widget owns one locator
and forwards to the Browser with the Kendo-specific locator adjustments the
CNA2.0 controls need (wrapper spans, aria-owns aliases, div based list boxes).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import List, Optional

from selenium.common.exceptions import WebDriverException

from cna_automation.browser.browser import Browser
from cna_automation.timing import POLL_POLICIES, TimeDelay, poll_until


IMAGE_WAIT_SECONDS = 60


class Widget:
    """Base driver widget: a locator bound to a browser."""

    def __init__(self, locator: str, browser: Browser):
        if not locator:
            raise ValueError("The locator of a widget must be specified")
        if browser is None:
            raise ValueError("The browser must be specified")
        self._locator = locator
        self._browser = browser

    @property
    def locator(self) -> str:
        return self._locator

    @property
    def browser(self) -> Browser:
        return self._browser

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._locator!r})"

    def is_visible(self) -> bool:
        return self._browser.is_visible(self._locator)

    def exists(self) -> bool:
        return self._browser.exists(self._locator)

    def is_disabled(self) -> bool:
        return self._browser.is_disabled(self._locator)

    def is_editable(self) -> bool:
        return self._browser.is_editable(self._locator)

    def hover(self) -> None:
        self._browser.hover(self._locator)

    def press_tab(self) -> bool:
        return self._browser.press_key(self._locator, "TAB")

    def wait_for_element(self) -> bool:
        return self._browser.wait_for_element(self._locator)

    def wait_for_no_element(self) -> bool:
        return self._browser.wait_for_no_element(self._locator)

    def wait_for_content(self, content: str) -> bool:
        return self._browser.wait_for_content(self._locator, content)

    def wait_until_disabled(self) -> bool:
        return poll_until(self.is_disabled, POLL_POLICIES["enabled_state"])

    def wait_until_enabled(self) -> bool:
        return poll_until(lambda: not self.is_disabled(), POLL_POLICIES["enabled_state"])

    def wait_for_image(self, timeout_seconds: int = IMAGE_WAIT_SECONDS) -> bool:
        # The locator doubles as the image file name
        return self._browser.wait_for_image(self._locator, timeout_seconds)

    def press_key_sequence(self, key_to_hold: str, char_to_press: str) -> bool:
        return self._browser.press_key_sequence(key_to_hold, char_to_press)


class Button(Widget):

    def click(self) -> bool:
        return self._browser.click(self._locator)

    def click_by_return(self) -> bool:
        return self._browser.click_by_return(self._locator)

    def click_and_wait_for_either(self, element_one: str, element_two: str) -> bool:
        return self._browser.click_and_wait_for_either(self._locator, element_one, element_two)

    def get_text(self) -> Optional[str]:
        try:
            return self._browser.get_text(self._locator)
        except WebDriverException:
            return None


class CheckBox(Widget):

    def select(self) -> bool:
        return self._browser.select_check_box(self._locator)

    def clear(self) -> bool:
        return self._browser.clear_check_box(self._locator)

    def select_by_label(self) -> bool:
        return self._browser.click(self._locator)

    def is_selected(self) -> bool:
        return self._browser.is_selected(self._locator)


class RadioButton(Widget):

    def select(self) -> bool:
        return self._browser.select_radio_button(self._locator)

    def is_selected(self) -> bool:
        return self._browser.is_selected(self._locator)


class Tab(Widget):
    """Kendo tab strip item; its panel is found through aria-controls."""

    def select(self) -> bool:
        if not self._browser.select_tab(self._locator):
            return False
        return poll_until(self.is_selected, POLL_POLICIES["element"], f"tab '{self._locator}' to open")

    def is_disabled(self) -> bool:
        return self._browser.is_disabled_for_tab(self._locator)

    def is_selected(self) -> bool:
        panel = self._browser.get_attribute(self._locator, "aria-controls")
        return self._browser.get_attribute(panel, "aria-expanded") == "true"


class Label(Widget):

    def get_text(self) -> Optional[str]:
        """Visible text, falling back to innerHTML for empty-looking labels."""
        try:
            text = self._browser.get_text(self._locator)
            if not text:
                return self._browser.get_attribute(self._locator, "innerHTML")
            return text
        except WebDriverException:
            return None

    def click(self) -> bool:
        return self._browser.click(self._locator)


class TextBox(Widget):

    def is_editable(self) -> bool:
        return self._browser.is_visible(self._locator) and not self._browser.is_disabled(self._locator)

    def is_disabled(self) -> bool:
        return self._browser.is_visible(self._locator) and self._browser.is_disabled(self._locator)

    def clear(self) -> bool:
        return self._browser.clear_text(self._locator)

    def clear_and_validate(self, default_value: str) -> bool:
        return self._browser.clear_and_validate_field(self._locator, default_value)

    def click(self) -> bool:
        return self._browser.click(self._locator)

    def type(self, value: str, tab: bool = True) -> bool:
        return self._browser.type(self._locator, value, tab)

    def type_by_javascript(self, value: str) -> bool:
        return self._browser.type_by_javascript(self._locator, value)

    def type_with_ctrl_a_del(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_with_ctrl_a_del(self._locator, value, tab)

    def type_without_wait_for_clickable(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_without_wait_for_clickable(self._locator, value, tab)

    def type_into_cell(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_into_cell(self._locator, value, tab)

    def type_without_clear(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_without_clear(self._locator, value, tab)

    def get_text(self) -> str:
        return self._browser.get_text(self._locator)

    def get_place_holder_text(self) -> Optional[str]:
        return self._browser.get_place_holder_text(self._locator)

    def get_calendar_button(self) -> Optional[Button]:
        alias = self._browser.get_attribute(self._locator, "aria-owns")
        if alias is None:
            return None
        button = f"//span[@aria-controls='{alias}']"
        if not self._browser.exists(button):
            return None
        return Button(button, self._browser)

    def get_calendar_widget(self):
        from cna_automation.widgets.calendar import Calendar

        alias = self._browser.get_attribute(self._locator, "aria-owns")
        if alias is None:
            return None
        return Calendar(f"//div[@id='{alias}']", self._browser)


class NumberTextBox(Widget):
    """Kendo numeric text box; the visible wrapper is the input's parent span."""

    @property
    def wrapper_locator(self) -> str:
        return f"//input[@id='{self._locator}']/.."

    def clear(self) -> bool:
        return self._browser.clear_text(self._locator)

    def clear_and_validate(self, default_value: str) -> bool:
        return self._browser.clear_and_validate_field(self._locator, default_value)

    def click(self) -> bool:
        return self._browser.click(self.wrapper_locator)

    def type(self, value: str, tab: bool = True) -> bool:
        self.click()
        self._browser.clear_by_ctrl_a_delete(self._locator)
        return self.type_without_clear(value, tab)

    def type_telephone_number(self, value: str, tab: bool = True) -> bool:
        self.click()
        self.clear()
        return self._browser.type_tel_num_without_clear(self._locator, value, tab)

    def type_without_clear(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_without_clear(self._locator, value, tab)

    def get_text(self) -> str:
        return self._browser.get_text(self.wrapper_locator)


class PasswordTextBox(Widget):

    def clear(self) -> bool:
        return self._browser.clear_text(self._locator)

    def click(self) -> bool:
        return self._browser.click(self._locator)

    def type(self, value: str, tab: bool = True) -> bool:
        return self._browser.type(self._locator, value, tab)

    def type_without_clear(self, value: str, tab: bool = True) -> bool:
        return self._browser.type_without_clear(self._locator, value, tab)

    def get_text(self) -> str:
        return self._browser.get_text(self._locator)


class ComboBox(Widget):
    """Kendo drop-down list backed by a ``<select>`` element."""

    def select_combo_box(self, option: str, validate: bool = True) -> bool:
        self._browser.click_by_javascript(self._locator)
        if option in self._browser.get_all_options(self._locator):
            self._browser.execute_javascript_return_string(
                f"$('select').find('option:contains({option})').attr(\"selected\",true)"
            )
            TimeDelay.do_medium_pause()
            if validate:
                return self.get_selected_value() == option
            return True
        # Close the opened drop-down again
        self._browser.click(self._locator)
        TimeDelay.do_medium_pause()
        return False

    def select_combo_box_by_index(self, index: int) -> bool:
        options = self._browser.get_all_options(self._locator)
        if index < 1 or index > len(options):
            return False
        self._browser.click(self._locator)
        self._browser.select_combo_box_by_index(self._locator, index - 1)
        if "/table/" in self._locator:
            return True
        return self.get_selected_value() == options[index - 1]

    def is_editable(self) -> bool:
        if not self._browser.is_visible(self._locator):
            return False
        return (self._browser.get_attribute(self._locator, "aria-disabled") or "").strip() == "false"

    def is_disabled(self) -> bool:
        if not self._browser.is_visible(self._locator):
            return False
        return (self._browser.get_attribute(self._locator, "aria-disabled") or "").strip() != "false"

    def get_all_options(self) -> List[str]:
        return self._browser.get_all_options(self._locator)

    def get_selected_value(self) -> str:
        return self._browser.get_text(self._locator)


class ComboBoxFinder(Widget):
    """Kendo combo box whose options live in a detached animation container."""

    @property
    def dynamic_locator(self) -> str:
        if "/table/" in self._locator:
            return f"{self._locator}/.."
        return f"//select[@id='{self._locator}']/.."

    def _open_script(self, list_alias: str) -> str:
        toggle = f"//span[@aria-owns='{list_alias}']/span/span"
        return f'return document.evaluate("{toggle}", document, null, 9, null).singleNodeValue.click();'

    def select_combo_box(self, option: str, validate: bool = True) -> bool:
        list_alias = self._browser.get_attribute(self.dynamic_locator, "aria-owns")
        open_script = self._open_script(list_alias)
        self._browser.execute_javascript_return_string(open_script)
        index = 1
        while True:
            item = (
                "//div[@class='k-animation-container' and contains(@style,'display: block')]"
                f"/div/ul[@id='{list_alias}']/li[{index}]"
            )
            if not self._browser.exists_no_wait(item):
                # Option not offered: close the list again
                self._browser.execute_javascript_return_string(open_script)
                TimeDelay.do_medium_pause()
                return False
            text = self._browser.get_attribute(item, "innerHTML") or ""
            if text.strip() == option:
                self._browser.execute_javascript_return_string(
                    f'return document.evaluate("{item}", document, null, 9, null).singleNodeValue.click();'
                )
                TimeDelay.do_medium_pause()
                if validate and "/table/" not in self._locator:
                    return self.get_selected_value() == option
                return True
            index += 1

    def select_combo_box_by_index(self, index: int) -> bool:
        list_alias = self._browser.get_attribute(self.dynamic_locator, "aria-owns")
        self._browser.execute_javascript_return_string(
            f"$(\"[aria-owns='{list_alias}'] > span > span\").click();"
        )
        self._browser.execute_javascript_return_string(
            f'$("div.k-animation-container > div > ul#{list_alias} > li:eq({index - 1})").click();'
        )
        return True

    def is_editable(self) -> bool:
        return (
            self._browser.is_visible(self.dynamic_locator)
            and not self._browser.is_disabled(self.dynamic_locator)
        )

    def get_all_options(self) -> List[str]:
        return self._browser.get_all_options(self._locator)

    def get_selected_value(self) -> str:
        return self._browser.get_text(self.dynamic_locator)

    def wait_for_content(self, content: str) -> bool:
        return self._browser.wait_for_content(self.dynamic_locator, content)


class ListBox(Widget):
    """Kendo multi-select list rendered as ``div`` rows under the list id."""

    def get_all_options(self) -> List[str]:
        return self._browser.get_all_options_from_list_box(self._locator)

    def get_selected_options(self) -> List[str]:
        return self._browser.get_selected_options_from_list_box(self._locator)

    def select(self, option: str) -> bool:
        return self._browser.select_from_list(self._locator, option)

    def select_option(self, option: str) -> bool:
        index = 1
        item = f"//div[@id='{self._locator}']/div[{index}]"
        while self._browser.exists_no_wait(item):
            if self._browser.get_text(item) == option:
                return self._browser.click(item)
            index += 1
            item = f"//div[@id='{self._locator}']/div[{index}]"
        return False

    def deselect(self, option: str) -> bool:
        return self._browser.deselect_from_list(self._locator, option)

    def deselect_all(self) -> bool:
        return self._browser.remove_all_selections(self._locator)

    def select_all(self) -> bool:
        return self._browser.select_all_selections(self._locator)


__all__ = [
    "Widget",
    "Button",
    "CheckBox",
    "RadioButton",
    "Tab",
    "Label",
    "TextBox",
    "NumberTextBox",
    "PasswordTextBox",
    "ComboBox",
    "ComboBoxFinder",
    "ListBox",
]
