"""Fixture layer: layout maps, the widget capability model and the test-table façade."""

from cna_automation.fixture.configuration import (
    ConfigurationParser,
    ConfigurationParserFactory,
    FixtureProperties,
    FormLayout,
)
from cna_automation.fixture.generic_web_fixture import GenericWebFixture
from cna_automation.fixture.message_boxes import MESSAGE_BOX_LOCATORS, MessageBoxes, MessageDialogResponse
from cna_automation.fixture.registry import DEFAULT_WIDGET_TYPES, FixtureWidgetRegistry, default_registry
from cna_automation.fixture.session import UiSession
from cna_automation.fixture.widget import FixtureWidget, WidgetStrategy

__all__ = [
    "ConfigurationParser",
    "ConfigurationParserFactory",
    "DEFAULT_WIDGET_TYPES",
    "FixtureProperties",
    "FixtureWidget",
    "FixtureWidgetRegistry",
    "FormLayout",
    "GenericWebFixture",
    "MESSAGE_BOX_LOCATORS",
    "MessageBoxes",
    "MessageDialogResponse",
    "UiSession",
    "WidgetStrategy",
    "default_registry",
]
