"""
================================================================================
Unit Test Configuration
================================================================================

Fixtures shared by the fixture-layer unit tests.

Key Features:
- FakeBrowser: an in-memory page keyed by locator that answers the Browser
  calls made by widgets, strategies and the fixture façade
- Pauses recorded instead of slept, so poll loops finish instantly
- A sample OE1100 layout map and a matching order-lines grid

================================================================================
"""

import re
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional

import pytest
from selenium.common.exceptions import NoSuchElementException, NoSuchFrameException, TimeoutException

from cna_automation.browser.browser import AlertState
from cna_automation.timing import BrowserTiming, TimeDelay


# ================================================================================
# Fake page
# ================================================================================

NUMERIC_WRAPPER = re.compile(r"^//input\[@id='(.+)'\]/\.\.$")


class FakeElement:
    """
    One element of the fake page.

    ``displayed`` is either a bool or an iterator of bools consumed one per
    visibility check (exhausted iterators read as hidden).
    """

    def __init__(
        self,
        text: str = "",
        attributes: Optional[Dict[str, str]] = None,
        displayed=True,
        selected: bool = False,
        options: Optional[List[str]] = None,
        on_click: Optional[Callable[[], None]] = None,
    ):
        self.text = text
        self.attributes = dict(attributes or {})
        self.displayed = displayed
        self.selected = selected
        self.options = list(options or [])
        self.selected_options: List[str] = []
        self.on_click = on_click
        self.clicks = 0

    def is_displayed(self) -> bool:
        if isinstance(self.displayed, bool):
            return self.displayed
        return next(self.displayed, False)

    def click(self) -> None:
        self.clicks += 1
        if self.attributes.get("type") == "checkbox":
            self.selected = not self.selected
        if self.on_click is not None:
            self.on_click()


class FakeSwitchTo:

    def __init__(self):
        self.frames: List[str] = []
        self.current_frame: Optional[str] = None

    def frame(self, name: str) -> None:
        if name not in self.frames:
            raise NoSuchFrameException(name)
        self.current_frame = name


class FakeBrowser:
    """In-memory stand-in for cna_automation.browser.Browser."""

    def __init__(self):
        self.elements: Dict[str, FakeElement] = {}
        self.driver = SimpleNamespace(switch_to=FakeSwitchTo())
        self.current_url = "https://erp01/TENANT1/Core/Home"
        self.landing_url: Optional[str] = None
        self.title = "Sage 300"
        self.alert_state = AlertState.ABSENT
        self.specific_ui = ("menu_OE1100", "iframe_OE1100")
        self.iframe: Optional[str] = None

        self.clicked: List[str] = []
        self.typed: List[tuple] = []
        self.scripts: List[str] = []
        self.opened: List[str] = []
        self.sign_ins: List[tuple] = []
        self.closed = False
        self.close_forced: Optional[bool] = None

    # Page setup

    def add(self, locator: str, text: str = "", **kwargs) -> FakeElement:
        element = FakeElement(text, **kwargs)
        self.elements[locator] = element
        return element

    def remove(self, locator: str) -> None:
        self.elements.pop(locator, None)

    def _element(self, locator: str) -> FakeElement:
        if locator not in self.elements:
            raise TimeoutException(f"No element '{locator}'")
        return self.elements[locator]

    # Lookup and state

    def find_element(self, locator: str) -> FakeElement:
        return self._element(locator)

    def find_element_no_wait(self, locator: str) -> FakeElement:
        if locator not in self.elements:
            raise NoSuchElementException(f"No element '{locator}'")
        return self.elements[locator]

    def exists(self, locator: str) -> bool:
        return locator in self.elements

    def exists_no_wait(self, locator: str) -> bool:
        return locator in self.elements

    def is_visible(self, locator: str) -> bool:
        return locator in self.elements and self.elements[locator].is_displayed()

    def is_disabled(self, locator: str) -> bool:
        return self._element(locator).attributes.get("disabled") == "true"

    def is_disabled_for_tab(self, locator: str) -> bool:
        return "k-state-disabled" in self._element(locator).attributes.get("class", "")

    def is_editable(self, locator: str) -> bool:
        return self.is_visible(locator) and not self.is_disabled(locator)

    def is_selected(self, locator: str) -> bool:
        return locator in self.elements and self.elements[locator].selected

    def get_attribute(self, locator: str, name: str) -> Optional[str]:
        if locator not in self.elements:
            return None
        return self.elements[locator].attributes.get(name)

    def get_text(self, locator: str) -> str:
        # A Kendo numeric wrapper shows the value of the input it wraps
        wrapped = NUMERIC_WRAPPER.match(locator)
        if wrapped:
            locator = wrapped.group(1)
        if locator not in self.elements:
            return ""
        return self.elements[locator].text.strip()

    def get_place_holder_text(self, locator: str) -> Optional[str]:
        return self._element(locator).attributes.get("placeholder")

    # Scripts and clicks

    def execute_javascript(self, script: str) -> bool:
        self.scripts.append(script)
        return False

    def execute_javascript_return_string(self, script: str) -> Optional[str]:
        self.scripts.append(script)
        return None

    def click(self, locator: str) -> bool:
        self._element(locator).click()
        self.clicked.append(locator)
        return True

    def click_by_return(self, locator: str) -> bool:
        return self.click(locator)

    def click_by_javascript(self, locator: str) -> bool:
        return self.click(locator)

    def click_no_wait(self, locator: str) -> bool:
        return self.click(locator)

    def click_and_wait_for_either(self, locator: str, element_one: str, element_two: str) -> bool:
        self.click(locator)
        return self.exists(element_one) or bool(element_two and self.exists(element_two))

    def hover(self, locator: str) -> None:
        self._element(locator)

    def wait_for_clickable(self, locator: str, seconds: float = 20) -> bool:
        return self.exists(locator)

    def wait_for_presence(self, locator: str, seconds: float = 20) -> bool:
        return self.exists(locator)

    # Typing

    def _type(self, locator: str, value: str, tab: bool, clear: bool = True) -> bool:
        element = self._element(locator)
        element.text = value if clear else element.text + value
        self.typed.append((locator, value, tab))
        return True

    def type(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab)

    def type_by_javascript(self, locator: str, value: str) -> bool:
        return self._type(locator, value, False)

    def type_with_ctrl_a_del(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab)

    def type_into_cell(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab)

    def type_without_wait_for_clickable(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab)

    def type_without_clear(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab, clear=False)

    def type_tel_num_without_clear(self, locator: str, value: str, tab: bool = True) -> bool:
        return self._type(locator, value, tab, clear=False)

    def press_key(self, locator: str, key: str) -> bool:
        self._element(locator)
        return True

    def clear_text(self, locator: str) -> bool:
        self._element(locator).text = ""
        return True

    def clear_by_ctrl_a_delete(self, locator: str) -> bool:
        return self.clear_text(locator)

    def clear_and_validate_field(self, locator: str, default_value: str) -> bool:
        element = self._element(locator)
        element.text = element.attributes.get("default", "")
        return element.text == default_value

    # Check boxes, tabs, combo and list boxes

    def select_radio_button(self, locator: str) -> bool:
        self._element(locator).selected = True
        return True

    def select_check_box(self, locator: str) -> bool:
        self._element(locator).selected = True
        return True

    def clear_check_box(self, locator: str) -> bool:
        self._element(locator).selected = False
        return True

    def select_tab(self, locator: str) -> bool:
        return self.click(locator)

    def select_combo_box_by_index(self, locator: str, index: int) -> bool:
        element = self._element(locator)
        element.text = element.options[index]
        return True

    def get_all_options(self, locator: str) -> List[str]:
        return list(self._element(locator).options)

    def get_all_options_from_list_box(self, list_id: str) -> List[str]:
        return list(self._element(list_id).options)

    def get_selected_options_from_list_box(self, list_id: str) -> List[str]:
        return list(self._element(list_id).selected_options)

    def select_from_list(self, locator: str, option: str) -> bool:
        element = self._element(locator)
        if option not in element.options:
            return False
        element.selected_options.append(option)
        return True

    def deselect_from_list(self, locator: str, option: str) -> bool:
        element = self._element(locator)
        if option not in element.selected_options:
            return False
        element.selected_options.remove(option)
        return True

    def remove_all_selections(self, locator: str) -> bool:
        self._element(locator).selected_options = []
        return True

    def select_all_selections(self, locator: str) -> bool:
        element = self._element(locator)
        element.selected_options = list(element.options)
        return True

    # Waits

    def wait_for_spinner_gone(self) -> bool:
        return True

    def wait_for_element(self, locator: str) -> bool:
        return self.is_visible(locator)

    def wait_for_no_element(self, locator: str) -> bool:
        return not self.is_visible(locator)

    def wait_for_content(self, locator: str, content: str) -> bool:
        return self.get_text(locator) == content

    def wait_for_no_requests(self) -> bool:
        return True

    def wait_for_ui_ready(self, locator: str) -> bool:
        return self.exists(locator)

    def wait_for_image(self, image: str, timeout_seconds: Optional[int] = None) -> bool:
        self.opened.append(f"image:{image}:{timeout_seconds}")
        return True

    def press_key_sequence(self, key_to_hold: str, char_to_press: str) -> bool:
        return True

    # Windows, frames and alerts

    def navigate_to(self, url: str) -> None:
        self.opened.append(url)
        self.current_url = url

    def get_current_window_title(self) -> str:
        return self.title

    def switch_to_new_window(self) -> bool:
        return True

    def switch_to_window(self, window_handle: str) -> bool:
        return True

    def switch_to_frame(self, frame_name: str) -> bool:
        return True

    def switch_to_frame_element(self, locator: str) -> bool:
        return True

    def switch_to_default_content(self) -> bool:
        return True

    def switch_to_default_window(self) -> bool:
        return True

    def switch_to_crystal_report_iframe(self) -> bool:
        return True

    def is_window_title_exist(self, window_title: str) -> bool:
        return window_title == self.title

    def is_scrollbar_present(self, orientation: str) -> bool:
        return False

    def check_alert(self, accept: bool = True) -> AlertState:
        return self.alert_state

    def wait_for_alert(self, seconds: float, accept: bool = True) -> AlertState:
        return self.alert_state

    def close(self, force: bool = False) -> bool:
        self.closed = True
        self.close_forced = force
        return True

    def close_current_window(self) -> bool:
        return True

    def close_ui_window(self, ui_window_id: str) -> bool:
        return True

    def take_screenshot(self, name: str = "screenshot") -> str:
        return f"screenshots/{name}.png"

    # Portal

    def open_url_without_url_validation(self, url: str) -> None:
        self.opened.append(url)

    def open_url_and_wait_for(self, url: str, element: str) -> bool:
        self.opened.append(url)
        return self.exists(element)

    def open_ui_by_full_url(self, complete_url: str) -> bool:
        self.opened.append(complete_url)
        self.current_url = self.landing_url or complete_url
        return True

    def sign_in_to_portal(self, user: str, password: str) -> str:
        self.sign_ins.append((user, password))
        return self.current_url

    def sign_in_to_portal_with_session_date(self, user: str, password: str, session_date: str) -> str:
        self.sign_ins.append((user, password, session_date))
        return self.current_url

    def open_specific_ui(self, application_full_name, category, ui_name, ui_menu_name, complete_url):
        self.opened.append(complete_url)
        return self.specific_ui

    def navigate_to_ui(self, application_full_name: str, category: str, ui_menu_name: str) -> Optional[str]:
        return f"menu:{ui_menu_name}"


class RecordingTiming(BrowserTiming):
    """Pause collaborator that only records the requested delays."""

    def __init__(self):
        self.pauses: List[int] = []

    def do_pause(self, milliseconds: int) -> None:
        self.pauses.append(milliseconds)


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(autouse=True)
def no_pause(monkeypatch) -> List[int]:
    """Record every TimeDelay pause instead of sleeping."""
    pauses: List[int] = []
    monkeypatch.setattr(TimeDelay, "do_pause", staticmethod(lambda milliseconds: pauses.append(milliseconds)))
    return pauses


@pytest.fixture
def fake_browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def timing() -> RecordingTiming:
    return RecordingTiming()


SAMPLE_LAYOUT = """<?xml version="1.0" encoding="utf-8"?>
<ui name="OE1100" application="OE" menuName="Order Entry" category="Transactions"
    applicationfullname="Order Entry">
  <form definitionID="OE1100" existenceValidationWidget="saveButton" type="main">
    <widget name="saveButton" id="btnSave" type="genericButton"/>
    <widget name="deleteLines" id="btnDeleteLines" type="genericButton"/>
    <widget name="orderNumber" id="txtOrderNumber" type="genericTextBox"/>
    <widget name="onHold" id="chkOnHold" type="genericCheckBox"/>
    <widget name="shipVia" id="cboShipVia" type="cnaListBox"/>
    <widget name="statusLabel" id="lblStatus" type="label"/>
    <widget name="logo" id="imgLogo" type="image"/>
    <widget name="detailGrid" id="grdDetails" type="genericOnePageTable">
      <widget name="itemColumn" id="ItemNumber" type="label"/>
      <widget name="quantityColumn" id="Quantity" type="label"/>
    </widget>
  </form>
  <form definitionID="OE1100F" existenceValidationWidget="findButton" type="popup" name="finder">
    <widget name="findButton" id="btnFind" type="genericButton"/>
    <widget name="filterText" id="txtFilter" type="genericTextBox"/>
  </form>
</ui>
"""


@pytest.fixture
def layout_file(tmp_path) -> Path:
    """OE1100 layout map: buttons, a text box, a check box, a combo box and a grid."""
    path = tmp_path / "OE1100.xml"
    path.write_text(SAMPLE_LAYOUT, encoding="utf-8")
    return path


GRID_ID = "grdDetails"
GRID_HEADER = f"//div[@id='{GRID_ID}']/div[@class='k-grid-header']/div/table/thead/tr"
GRID_BODY = f"//div[@id='{GRID_ID}']/div[@class='k-grid-content']/table/tbody"
GRID_PAGER = f"//div[@id='{GRID_ID}']/div[3]"
GRID_ROWS = [
    ("A1-103/0", "5"),
    ("A1-105/0", "1"),
    ("A1-310/0", "12"),
    ("A1-400/0", "3"),
]


@pytest.fixture
def order_grid(fake_browser) -> SimpleNamespace:
    """
    Four-row scrolling grid ``grdDetails`` on page 1 of 1.

    Columns: 1 row check box (blank header), 2 "Item Number" (ItemNumber),
    3 "Quantity" (Quantity).
    """
    fake_browser.add(GRID_HEADER)
    fake_browser.add(f"{GRID_HEADER}/th[1]", "", attributes={"data-field": ""})
    fake_browser.add(f"{GRID_HEADER}/th[2]", "Item Number", attributes={"data-field": "ItemNumber"})
    fake_browser.add(f"{GRID_HEADER}/th[3]", "Quantity", attributes={"data-field": "Quantity"})
    for row, (item, quantity) in enumerate(GRID_ROWS, start=1):
        fake_browser.add(f"{GRID_BODY}/tr[{row}]/td[1]")
        fake_browser.add(f"{GRID_BODY}/tr[{row}]/td[1]/span/input", attributes={"type": "checkbox"})
        fake_browser.add(f"{GRID_BODY}/tr[{row}]/td[2]", item)
        fake_browser.add(f"{GRID_BODY}/tr[{row}]/td[3]", quantity)
    pager = SimpleNamespace(
        items=fake_browser.add(f"{GRID_PAGER}/span[2]", "1 - 4 of 4 items"),
        total_pages=fake_browser.add(f"{GRID_PAGER}/span[1]", "Pageof 1"),
        current_page=fake_browser.add(f"{GRID_PAGER}/span[1]/input", "1"),
    )
    for title in ("first", "previous", "next", "last"):
        fake_browser.add(f"{GRID_PAGER}/a[@title='Go to the {title} page']")
    return SimpleNamespace(id=GRID_ID, header=GRID_HEADER, body=GRID_BODY, pager=pager)
