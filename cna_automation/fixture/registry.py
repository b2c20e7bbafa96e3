"""
Widget type registry.

Maps the ``type`` attribute of a layout-map ``<widget>`` element to the
strategy that implements it. A registry is an ordinary value: the layout
parser receives one explicitly, so tests can build their own.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Type

from loguru import logger

from cna_automation.fixture.tables import TableStrategy
from cna_automation.fixture.variants import (
    ButtonStrategy,
    CheckBoxStrategy,
    ComboBoxFinderStrategy,
    ComboBoxStrategy,
    LabelStrategy,
    ListBoxStrategy,
    NumberTextBoxStrategy,
    PasswordTextBoxStrategy,
    RadioButtonStrategy,
    TabStrategy,
    TextBoxStrategy,
)
from cna_automation.fixture.widget import FixtureWidget, WidgetStrategy


# Layout-map type name -> strategy, alphabetical by strategy
DEFAULT_WIDGET_TYPES: Dict[str, Type[WidgetStrategy]] = {
    "genericButton": ButtonStrategy,
    "genericCheckBox": CheckBoxStrategy,
    "cnaListBox": ComboBoxStrategy,
    "cnaListBoxFinder": ComboBoxFinderStrategy,
    "label": LabelStrategy,
    "genericListBox": ListBoxStrategy,
    "NumberTextBox": NumberTextBoxStrategy,
    "genericPasswordTextBox": PasswordTextBoxStrategy,
    "genericRadioButton": RadioButtonStrategy,
    "cnaTab": TabStrategy,
    "genericOnePageTable": TableStrategy,
    "Table": TableStrategy,
    "genericTextBox": TextBoxStrategy,
}


class FixtureWidgetRegistry:
    """
    Type name to strategy table used to create FixtureWidgets.

    Usage:
        >>> registry = default_registry()
        >>> registry.create("saveButton", "btnSave", "genericButton", "OE1100_", browser)
        FixtureWidget('saveButton', 'Button', 'btnSave')
    """

    def __init__(self, widget_types: Optional[Dict[str, Type[WidgetStrategy]]] = None):
        self._widget_types: Dict[str, Type[WidgetStrategy]] = dict(widget_types or {})

    def __contains__(self, widget_type: str) -> bool:
        return widget_type in self._widget_types

    def __iter__(self) -> Iterator[str]:
        return iter(self._widget_types)

    def __len__(self) -> int:
        return len(self._widget_types)

    def register(self, widget_type: str, strategy_class: Type[WidgetStrategy]) -> None:
        if not widget_type:
            raise ValueError("The widget type must be non-empty.")
        self._widget_types[widget_type] = strategy_class

    def strategy_for(self, widget_type: str) -> Optional[Type[WidgetStrategy]]:
        return self._widget_types.get(widget_type)

    def create(
        self,
        widget_name: str,
        widget_id: str,
        widget_type: str,
        id_base: str,
        browser,
    ) -> Optional[FixtureWidget]:
        """
        Build the FixtureWidget for a layout-map entry.

        Returns:
            The widget, or None for a type this registry does not know
        """
        strategy_class = self._widget_types.get(widget_type)
        if strategy_class is None:
            logger.warning(
                f"Widget '{widget_name}' is of type '{widget_type}' which is not supported for FitNesse tests."
            )
            return None
        return FixtureWidget(widget_name, widget_id, id_base, browser, strategy_class)


def default_registry() -> FixtureWidgetRegistry:
    """Registry holding every built-in widget type."""
    return FixtureWidgetRegistry(DEFAULT_WIDGET_TYPES)


__all__ = ["FixtureWidgetRegistry", "DEFAULT_WIDGET_TYPES", "default_registry"]
