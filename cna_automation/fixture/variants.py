"""
Per-variant strategies for the plain controls.

Each class lists exactly the operations its control supports; anything not
defined here is reported as unsupported by FixtureWidget.
"""

from __future__ import annotations

from typing import List, Optional

from cna_automation.fixture.widget import WidgetStrategy
from cna_automation.timing import TimeDelay
from cna_automation.widgets.controls import (
    Button,
    CheckBox,
    ComboBox,
    ComboBoxFinder,
    Label,
    ListBox,
    NumberTextBox,
    PasswordTextBox,
    RadioButton,
    Tab,
    TextBox,
)


class ButtonStrategy(WidgetStrategy):
    friendly_type = "Button"
    driver_class = Button

    def click(self) -> bool:
        return self.driver.click()

    def click_by_return(self) -> bool:
        return self.driver.click_by_return()

    def get_text(self) -> Optional[str]:
        return self.driver.get_text()


class CheckBoxStrategy(WidgetStrategy):
    friendly_type = "CheckBox"
    driver_class = CheckBox

    def check(self) -> bool:
        return self.driver.select()

    def check_by_label(self) -> bool:
        return self.driver.select_by_label()

    def is_checked(self) -> bool:
        return self.driver.is_selected()

    def uncheck(self) -> bool:
        return self.driver.clear()


class _OptionsMixin:
    """``get_all_options`` wrapped so driver failures name the widget."""

    def get_all_options(self) -> List[str]:
        try:
            options = self.driver.get_all_options()
            if options is None:
                raise ValueError(f"Widget '{self.widget_name}' produced a null set of options.")
        except Exception as e:
            raise ValueError(f"Could not get the options for widget '{self.widget_name}'.") from e
        return options


class ComboBoxStrategy(_OptionsMixin, WidgetStrategy):
    friendly_type = "ComboBox"
    driver_class = ComboBox

    def get_text(self) -> str:
        return self.driver.get_selected_value()

    def select_value(self, option: str) -> bool:
        return self.driver.select_combo_box(option, True)

    def select_by_index(self, index: int) -> bool:
        return self.driver.select_combo_box_by_index(index)


class ComboBoxFinderStrategy(_OptionsMixin, WidgetStrategy):
    friendly_type = "ComboBoxFinder"
    driver_class = ComboBoxFinder

    def get_text(self) -> str:
        return self.driver.get_selected_value()

    def select_value(self, option: str) -> bool:
        return self.driver.select_combo_box(option)

    def select_by_index(self, index: int) -> bool:
        return self.driver.select_combo_box_by_index(index)


class LabelStrategy(WidgetStrategy):
    friendly_type = "Label"
    driver_class = Label

    def get_text(self) -> Optional[str]:
        return self.driver.get_text()

    def click(self) -> bool:
        return self.driver.click()


class ListBoxStrategy(_OptionsMixin, WidgetStrategy):
    friendly_type = "ListBox"
    driver_class = ListBox

    def get_selected_options(self) -> List[str]:
        try:
            return self.driver.get_selected_options()
        except Exception as e:
            raise ValueError(f"Could not get the options for widget '{self.widget_name}'.") from e

    def get_text(self) -> str:
        # Selected entries, comma separated
        return ",".join(self.driver.get_selected_options())

    def select_value(self, option: str) -> bool:
        return self.driver.select(option)

    def select_option(self, option: str) -> bool:
        return self.driver.select_option(option)

    def deselect(self, option: str) -> bool:
        return self.driver.deselect(option)

    def deselect_all(self) -> bool:
        return self.driver.deselect_all()

    def select_all(self) -> bool:
        return self.driver.select_all()


class RadioButtonStrategy(WidgetStrategy):
    friendly_type = "RadioButton"
    driver_class = RadioButton

    def is_selected(self) -> bool:
        return self.driver.is_selected()

    def select(self) -> bool:
        return self.driver.select()


class TabStrategy(WidgetStrategy):
    friendly_type = "Tab"
    driver_class = Tab

    def is_selected(self) -> bool:
        return self.driver.is_selected()

    def select(self) -> bool:
        return self.driver.select()


class _TextEntryMixin:
    """Typing operations shared by the text box variants."""

    def clear(self) -> bool:
        return self.driver.clear()

    def click(self) -> bool:
        return self.driver.click()

    def type(self, value: str) -> bool:
        return self.driver.type(value)

    def type_without_tab(self, value: str) -> bool:
        return self.driver.type(value, False)

    def type_without_clear(self, value: str) -> bool:
        return self.driver.type_without_clear(value)

    def type_without_clear_and_without_tab(self, value: str) -> bool:
        return self.driver.type_without_clear(value, False)


class TextBoxStrategy(_TextEntryMixin, WidgetStrategy):
    friendly_type = "TextBox"
    driver_class = TextBox

    def get_text(self) -> str:
        return self.driver.get_text()

    def get_place_holder_text(self) -> Optional[str]:
        return self.driver.get_place_holder_text()

    def clear_and_validate(self, default_value: str) -> bool:
        return self.driver.clear_and_validate(default_value)

    def type_by_javascript(self, value: str) -> bool:
        return self.driver.type_by_javascript(value)

    def type_no_tab(self, value: str) -> bool:
        return self.driver.type(value, False)

    def type_with_ctrl_a_del(self, value: str) -> bool:
        return self.driver.type_with_ctrl_a_del(value)

    def type_without_wait_for_clickable(self, value: str) -> bool:
        return self.driver.type_without_wait_for_clickable(value)

    def select_calendar_date(self, date: str) -> bool:
        button = self.driver.get_calendar_button()
        calendar = self.driver.get_calendar_widget()
        if button is None or calendar is None:
            raise ValueError(f"Widget '{self.widget_name}' has no calendar attached.")
        button.click()
        TimeDelay.do_medium_pause()
        return calendar.set_calendar_date(date)

    def wait_for_content(self, content: str) -> bool:
        return self.driver.wait_for_content(content)


class _PlainTextBoxMixin:
    """
    Text box operations the number and password boxes run on their input
    element as if it were a plain text box.
    """

    @property
    def text_box(self) -> TextBox:
        return TextBox(self.locator, self.browser)

    def get_text(self) -> str:
        return self.driver.get_text()

    def get_place_holder_text(self) -> Optional[str]:
        return self.text_box.get_place_holder_text()

    def type_by_javascript(self, value: str) -> bool:
        return self.text_box.type_by_javascript(value)

    def type_no_tab(self, value: str) -> bool:
        return self.driver.type(value, False)

    def type_with_ctrl_a_del(self, value: str) -> bool:
        return self.text_box.type_with_ctrl_a_del(value)

    def type_without_wait_for_clickable(self, value: str) -> bool:
        return self.text_box.type_without_wait_for_clickable(value)


class NumberTextBoxStrategy(_PlainTextBoxMixin, _TextEntryMixin, WidgetStrategy):
    friendly_type = "NumberTextBox"
    driver_class = NumberTextBox

    def type_telephone_number(self, value: str) -> bool:
        return self.driver.type_telephone_number(value)


class PasswordTextBoxStrategy(_PlainTextBoxMixin, _TextEntryMixin, WidgetStrategy):
    friendly_type = "PasswordTextBox"
    driver_class = PasswordTextBox


__all__ = [
    "ButtonStrategy",
    "CheckBoxStrategy",
    "ComboBoxStrategy",
    "ComboBoxFinderStrategy",
    "LabelStrategy",
    "ListBoxStrategy",
    "NumberTextBoxStrategy",
    "PasswordTextBoxStrategy",
    "RadioButtonStrategy",
    "TabStrategy",
    "TextBoxStrategy",
]
