"""Driver widgets: one Selenium-facing wrapper per Kendo control."""

from cna_automation.widgets.calendar import Calendar, parse_calendar_date
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
    Widget,
)
from cna_automation.widgets.message_box import MessageBox
from cna_automation.widgets.table import Table, TableNavigation

__all__ = [
    "Widget",
    "Button",
    "Calendar",
    "CheckBox",
    "ComboBox",
    "ComboBoxFinder",
    "Label",
    "ListBox",
    "MessageBox",
    "NumberTextBox",
    "PasswordTextBox",
    "RadioButton",
    "Tab",
    "Table",
    "TableNavigation",
    "TextBox",
    "parse_calendar_date",
]
