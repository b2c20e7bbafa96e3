"""
================================================================================
Layout Map Configuration
================================================================================

Parses a UI layout map into FixtureProperties.

Layout map format:
    <ui name="OE1100" application="OE" menuName="Order Entry"
        category="Transactions" applicationfullname="Order Entry">
      <form definitionID="OE1100" existenceValidationWidget="btnSave" type="main">
        <widget name="saveButton" id="btnSave" type="genericButton"/>
        <widget name="detailGrid" id="grdDetails" type="genericOnePageTable">
          <widget name="itemColumn" id="ItemNumber" type="label"/>
        </widget>
      </form>
      <form definitionID="OE1100F" existenceValidationWidget="btnFind" type="popup" name="finder">
        ...
      </form>
    </ui>

Widgets are built in two phases: every FixtureWidget is created once and never
modified, then the parent/child graph of each form is kept as an arena of
WidgetNode records that refer to each other by index. A widget whose type is
not registered is skipped and its children attach to the nearest registered
ancestor.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger

from cna_automation.exceptions import ConfigurationError
from cna_automation.fixture.registry import FixtureWidgetRegistry, default_registry
from cna_automation.fixture.widget import FixtureWidget


UI_TAG = "ui"
FORM_TAG = "form"
WIDGET_TAG = "widget"

MAIN_FORM = "main"
POPUP_FORM = "popup"
REDIRECTED = "redirected"


# =============================================================================
# Widget arena
# =============================================================================

@dataclass
class WidgetNode:
    """One widget of a form plus its links, by arena index."""
    index: int
    widget: FixtureWidget
    parent: Optional[int] = None
    children: Dict[str, int] = field(default_factory=dict)


class FormLayout:
    """
    The widgets of one ``<form>`` element.

    Attributes:
        name: "" for the main form, otherwise the popup name
        definition_id: Form definition id
        existence_validation_widget: Name of the widget proving the form is open
    """

    def __init__(self, name: str, definition_id: str, existence_validation_widget: str):
        self.name = name
        self.definition_id = definition_id
        self.existence_validation_widget = existence_validation_widget
        self.nodes: List[WidgetNode] = []
        self._by_name: Dict[str, int] = {}

    @property
    def id_base(self) -> str:
        return f"{self.definition_id}_"

    def __contains__(self, widget_name: str) -> bool:
        return widget_name in self._by_name

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, widget: FixtureWidget, parent: Optional[int] = None) -> int:
        index = len(self.nodes)
        self.nodes.append(WidgetNode(index, widget, parent))
        self._by_name[widget.name] = index
        if parent is not None:
            parent_node = self.nodes[parent]
            if widget.name in parent_node.children:
                raise ConfigurationError(
                    f"This fixture widget already contains a child widget named '{widget.name}'."
                )
            parent_node.children[widget.name] = index
        return index

    def get(self, widget_name: str) -> Optional[FixtureWidget]:
        index = self._by_name.get(widget_name)
        return None if index is None else self.nodes[index].widget

    def parent_of(self, widget_name: str) -> Optional[FixtureWidget]:
        index = self._by_name.get(widget_name)
        if index is None or self.nodes[index].parent is None:
            return None
        return self.nodes[self.nodes[index].parent].widget

    def children_of(self, widget_name: str) -> Dict[str, FixtureWidget]:
        index = self._by_name.get(widget_name)
        if index is None:
            return {}
        return {name: self.nodes[child].widget for name, child in self.nodes[index].children.items()}

    def widget_names(self) -> List[str]:
        return [node.widget.name for node in self.nodes]


# =============================================================================
# Properties
# =============================================================================

class FixtureProperties:
    """Everything known about one UI after its layout map was parsed."""

    def __init__(
        self,
        browser,
        ui_name: str,
        ui_menu_name: str,
        category: str,
        application: str,
        application_full_name: str,
        forms: Dict[str, FormLayout],
    ):
        if browser is None:
            raise ConfigurationError("The automation browser object must be non-null.")
        if ui_name is None:
            raise ConfigurationError("The UI name must be non-empty.")
        if application is None:
            raise ConfigurationError("The application name must be non-empty.")
        if not forms:
            raise ConfigurationError("The fixture widget map must be non-empty.")
        self.browser = browser
        self.ui_name = ui_name
        self.ui_menu_name = ui_menu_name
        self.category = category
        self.application = application
        self.application_full_name = application_full_name
        self.forms = forms
        self.iframe: Optional[str] = None

        sign_in_widget = self.get_existence_validation_widget("")
        if sign_in_widget is None:
            raise ConfigurationError("The main form must have an existence validation widget.")
        self.sign_in_validation_element = sign_in_widget.wait_target_locator
        if not self.sign_in_validation_element:
            raise ConfigurationError("The sign-in validation widget must have a non-empty wait target locator.")

    def form_names(self) -> List[str]:
        return list(self.forms)

    def has_form(self, form_name: Optional[str]) -> bool:
        return (form_name or "") in self.forms

    def get_form(self, form_name: Optional[str]) -> Optional[FormLayout]:
        return self.forms.get(form_name or "")

    def get_fixture_widget(self, form_name: Optional[str], widget_name: str) -> Optional[FixtureWidget]:
        form = self.get_form(form_name)
        return None if form is None else form.get(widget_name)

    def get_existence_validation_widget(self, form_name: Optional[str]) -> Optional[FixtureWidget]:
        form = self.get_form(form_name)
        return None if form is None else form.get(form.existence_validation_widget)

    def get_url(self) -> str:
        """
        Path of the UI below the tenant, e.g. "/OE/OE1100".

        Returns "" for redirected UIs, which are reached through the portal menu.
        """
        if self.application.lower() == REDIRECTED or self.ui_name.lower() == REDIRECTED:
            return ""
        return f"/{self.application}/{self.ui_name}"


# =============================================================================
# Parser
# =============================================================================

class ConfigurationParser:
    """
    Layout map parser bound to a widget registry and a browser.

    Raises:
        ConfigurationError: From every ``parse*`` method on invalid input
    """

    def __init__(self, registry: FixtureWidgetRegistry, browser):
        if registry is None:
            raise ConfigurationError("The fixture widget registry must be non-null.")
        self.registry = registry
        self.browser = browser

    def parse(self, configuration_path: str) -> FixtureProperties:
        if not configuration_path:
            raise ConfigurationError("The configuration path must be non-empty.")
        path = Path(configuration_path)
        if not path.is_file():
            raise ConfigurationError(f"'{configuration_path}' is not the path to an existing file.")
        try:
            root = ET.parse(path).getroot()
        except ET.ParseError as e:
            raise ConfigurationError(
                f"The configuration file '{configuration_path}' could not be parsed into a DOM document. {e}"
            ) from e
        logger.debug(f"Parsing layout map {path}")
        return self.parse_element(root)

    def parse_string(self, text: str) -> FixtureProperties:
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ConfigurationError(f"The layout map could not be parsed into a DOM document. {e}") from e
        return self.parse_element(root)

    def parse_element(self, root: ET.Element) -> FixtureProperties:
        if root.tag != UI_TAG:
            raise ConfigurationError(f"The configuration DOM document must contain a root '{UI_TAG}' element.")
        ui_name = root.get("name")
        if ui_name is None:
            raise ConfigurationError(
                f"The '{UI_TAG}' element must contain a 'name' attribute with a non-empty value."
            )
        application = root.get("application")
        if application is None:
            raise ConfigurationError(
                f"The '{UI_TAG}' element must contain a 'application' attribute with a non-empty value."
            )

        forms: Dict[str, FormLayout] = {}
        found_main_form = False
        for form_element in root.iter(FORM_TAG):
            form = self._parse_form(form_element, found_main_form)
            if form.name == "":
                found_main_form = True
            forms[form.name] = form

        if not found_main_form:
            raise ConfigurationError(
                f"There must be one '{FORM_TAG}' element whose 'type' attribute has a value of '{MAIN_FORM}'"
            )
        properties = FixtureProperties(
            self.browser,
            ui_name,
            root.get("menuName", ""),
            root.get("category", ""),
            application,
            root.get("applicationfullname", ""),
            forms,
        )
        logger.debug(
            f"Layout map for UI '{ui_name}' loaded: "
            + ", ".join(f"{name or 'main'} ({len(form)} widgets)" for name, form in forms.items())
        )
        return properties

    def _parse_form(self, form_element: ET.Element, found_main_form: bool) -> FormLayout:
        definition_id = form_element.get("definitionID", "")
        if not definition_id:
            raise ConfigurationError(
                f"All '{FORM_TAG}' elements must have 'definitionID' attributes with non-empty values."
            )
        existence_widget = form_element.get("existenceValidationWidget", "")
        if not existence_widget:
            raise ConfigurationError(
                f"The '{FORM_TAG}' element must contain an 'existenceValidationWidget' attribute "
                f"with a non-empty value."
            )

        form_type = form_element.get("type", "")
        if form_type == MAIN_FORM:
            if found_main_form:
                raise ConfigurationError(
                    f"There can only be one '{FORM_TAG}' element whose 'type' attribute has a value of "
                    f"'{MAIN_FORM}'."
                )
            form_name = ""
        elif form_type == POPUP_FORM:
            form_name = form_element.get("name", "")
            if not form_name:
                raise ConfigurationError(
                    f"Each '{FORM_TAG}' element whose 'type' is '{POPUP_FORM}' must have a 'name' "
                    f"attribute with a non-empty value."
                )
        else:
            raise ConfigurationError(
                f"Each '{FORM_TAG}' elements must have a 'type' attribute whose value is either "
                f"'{MAIN_FORM}' or '{POPUP_FORM}'."
            )

        form = FormLayout(form_name, definition_id, existence_widget)
        self._populate(form, form_element, None, set())
        if len(form) == 0:
            raise ConfigurationError(
                f"The '{FORM_TAG}' element with a 'definitionID' of '{definition_id}' must contain at "
                f"least one child '{WIDGET_TAG}' element."
            )
        if existence_widget not in form:
            raise ConfigurationError(
                f"An existence validation widget with a 'name' of '{existence_widget}' must exist among "
                f"the '{WIDGET_TAG}' elements of the form whose 'definitionID' is '{definition_id}'."
            )
        return form

    def _populate(self, form: FormLayout, element: ET.Element, parent: Optional[int], seen: set) -> None:
        for widget_element in element.findall(WIDGET_TAG):
            widget_name = widget_element.get("name", "")
            if not widget_name:
                raise ConfigurationError(
                    f"All '{WIDGET_TAG}' elements must have 'name' attributes with non-empty values."
                )
            if widget_name in seen:
                raise ConfigurationError(
                    f"The form can only contain one '{WIDGET_TAG}' element whose 'name' attribute has "
                    f"the value of '{widget_name}'."
                )
            widget_id = widget_element.get("id", "")
            if not widget_id:
                raise ConfigurationError(
                    f"All '{WIDGET_TAG}' elements must have 'id' attributes with non-empty values."
                )
            widget_type = widget_element.get("type", "")
            if not widget_type:
                raise ConfigurationError(
                    f"All '{WIDGET_TAG}' elements must have 'type' attributes with non-empty values."
                )

            widget = self.registry.create(widget_name, widget_id, widget_type, form.id_base, self.browser)
            if widget is None:
                self._populate(form, widget_element, parent, seen)
                continue
            seen.add(widget_name)
            index = form.add(widget, parent)
            self._populate(form, widget_element, index, seen)


class ConfigurationParserFactory:
    """Builds a parser for a browser; the façade receives one of these."""

    def __init__(self, registry: Optional[FixtureWidgetRegistry] = None):
        self.registry = registry or default_registry()

    def create_parser(self, browser) -> ConfigurationParser:
        return ConfigurationParser(self.registry, browser)


__all__ = [
    "ConfigurationParser",
    "ConfigurationParserFactory",
    "FixtureProperties",
    "FormLayout",
    "WidgetNode",
]
