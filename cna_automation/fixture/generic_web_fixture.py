"""
================================================================================
Generic Web Fixture
================================================================================

The single entry point FitNesse test tables call to drive a CNA2.0 UI.

A fixture is built from one layout map. Widget names used in test tables are
resolved on the active form (the main form "" or a popup form) and every
action is forwarded to the FixtureWidget, which rejects operations its
variant does not support.

Session flow:
    fixture = GenericWebFixture("LayoutMaps/web/OE1100.xml", "browser=chrome, server=erp01")
    fixture.open_ui("ADMIN", "ADMIN", "Yes")      # sign in, open by URL
    fixture.type("orderNumber", "ORD000123")
    fixture.click("saveButton")
    fixture.wait_for_message_box_disappear("Success")
    fixture.logout_and_close("Yes")

Table columns are addressed three ways:
    - by column widget: a child widget of the table whose id is the column
      data-field (``click_cell(table, column_widget, row)``)
    - by display name (``click_cell_by_column_name(table, "Item", row)``)
    - by 1-based index (``click_cell_by_column_idx(table, row, column)``)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Any, List, Optional

import allure
from loguru import logger
from selenium.common.exceptions import (
    InvalidSessionIdException,
    NoSuchFrameException,
    TimeoutException,
    WebDriverException,
)

from cna_automation.browser.browser import AlertState, Browser
from cna_automation.browser.driver_factory import create_browser
from cna_automation.browser.settings import BrowserSettings
from cna_automation.common import get_config
from cna_automation.exceptions import ConfigurationError, UnknownWidgetError
from cna_automation.fixture.configuration import ConfigurationParserFactory, FixtureProperties
from cna_automation.fixture.message_boxes import MessageBoxes
from cna_automation.fixture.session import UiSession
from cna_automation.fixture.widget import FixtureWidget
from cna_automation.timing import BrowserTiming, SettleDelay


MAIN_FORM = ""

PORTAL_USER_MENU = "//*[@id='topMenu']/li[2]"
PORTAL_SIGN_OUT_LINK = "//*[@id='topMenu']/li[2]/div/ul/li[2]/a"
PORTAL_SIGN_IN_BUTTON = "//input[@value='Sign In']"
SCREEN_LAYOUT_IFRAME = "//div[@id='screenLayout']/iframe"
REPORT_VIEWER_SEGMENT = "WebForms"

USER_MENU_SECONDS = 10
SIGN_IN_PAGE_SECONDS = 15
LOGOUT_ALERT_SECONDS = 20
DELETE_BUTTON_SECONDS = 10
CONFIRMATION_TEXT_SECONDS = 10

DELETE_RESPONSES = ("Delete", "Cancel")
STRING_CASES = ("UPPERCASE", "LOWERCASE")


def is_yes(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "yes"


def random_id(length: int) -> str:
    """The last ``length`` characters of a random UUID."""
    identifier = str(uuid.uuid4())
    return identifier[len(identifier) - length:]


def portal_home_url(current_url: str, tenant: Optional[str] = None) -> str:
    """
    Portal home page for the tenant in ``current_url``.

    Report viewer pages live under "/WebForms" instead of the tenant; the
    tenant captured at sign-in takes its place.

    Examples:
        >>> portal_home_url("https://erp01/TENANT1/OE/OE1100")
        'https://erp01/TENANT1/Core/Home'
        >>> portal_home_url("https://erp01/WebForms/ReportViewer.aspx?token=1", "TENANT1")
        'https://erp01/TENANT1/Core/Home'
    """
    parts = current_url.split("/")
    home_url = f"{parts[0]}//{parts[2]}/{parts[3]}/Core/Home"
    if REPORT_VIEWER_SEGMENT in home_url and tenant:
        home_url = home_url.replace(REPORT_VIEWER_SEGMENT, tenant)
    return home_url


def fitnesse_test_path(test_path: str) -> str:
    r"""
    Turn a dotted FitNesse page path into a directory path.

    Example:
        >>> fitnesse_test_path("FrontPage.OrderEntry.OE1100\\case01")
        'FrontPage\\OrderEntry\\OE1100\\'
    """
    parts = test_path.split(".")
    directories = list(parts[:-1]) + [parts[-1].split("\\")[0]]
    return "".join(f"{directory}\\" for directory in directories)


class GenericWebFixture:
    """
    Test-table façade over one UI session.

    Args:
        configuration_path: Layout map XML of the UI to drive
        browser_settings: Specification string, e.g. "browser=chrome, server=erp01 and port=443"
        parser_factory: Builds the layout map parser (defaults to the built-in widget types)
        timing: Pause collaborator for settle delays
        browser: Already started Browser; one is started from the settings when omitted

    Raises:
        ConfigurationError: On an empty path, a missing collaborator or an invalid layout map
    """

    def __init__(
        self,
        configuration_path: str,
        browser_settings: Optional[str] = None,
        parser_factory: Optional[ConfigurationParserFactory] = None,
        timing: Optional[BrowserTiming] = None,
        browser: Optional[Browser] = None,
    ):
        if not configuration_path:
            raise ConfigurationError("The configuration path must be non-empty.")
        self.timing = timing or BrowserTiming()
        parser_factory = parser_factory or ConfigurationParserFactory()

        if browser is None:
            settings = BrowserSettings.from_spec(browser_settings) if browser_settings else BrowserSettings.from_config()
            browser = create_browser(settings)
        self.parser = parser_factory.create_parser(browser)
        if self.parser is None:
            raise ConfigurationError("A null configuration parser was created by the configuration parser factory.")

        self.properties: FixtureProperties = self.parser.parse(configuration_path)
        self.session = UiSession(self.properties)
        self.message_boxes = MessageBoxes(browser, self.timing)
        self.current_form_name = MAIN_FORM
        self.tenant_info: Optional[str] = None
        logger.info(f"Fixture ready for UI '{self.properties.ui_name}' ({configuration_path})")

    @property
    def browser(self) -> Browser:
        return self.properties.browser

    def get_driver(self) -> Any:
        return self.browser.driver

    # =========================================================================
    # Layout map and widget lookup
    # =========================================================================

    def _load_layout_map(self, configuration_path: str) -> None:
        self.properties = self.parser.parse(configuration_path)
        self.session = UiSession(self.properties)
        self.current_form_name = MAIN_FORM

    def change_layout_map(self, configuration_path: str) -> None:
        """Swap to another UI's layout map; the main form becomes active."""
        self._load_layout_map(configuration_path)
        self.timing.do_pause(SettleDelay.LAYOUT_SWITCH)

    def get_fixture_widget(self, widget_name: str) -> FixtureWidget:
        """
        Resolve a widget name on the active form.

        Raises:
            UnknownWidgetError: If the form has no widget of that name
        """
        widget = self.properties.get_fixture_widget(self.current_form_name, widget_name)
        if widget is None:
            raise UnknownWidgetError(self.properties.ui_name, widget_name, self.current_form_name)
        return widget

    def _column_index(self, table: FixtureWidget, column_widget_name: str) -> int:
        column = self.get_fixture_widget(column_widget_name)
        return table.get_index_of_column_by_id(column.wait_target_locator)

    def switch_form_context(self, form_name: Optional[str] = None) -> None:
        """
        Make a popup form (or the main form for ""/None) the active form.

        Raises:
            ValueError: If the UI has no such form
        """
        form_name = form_name or MAIN_FORM
        if self.properties.get_existence_validation_widget(form_name) is None:
            raise ValueError(
                f"UI '{self.properties.ui_name}' does not contain a popup form named '{form_name}'."
            )
        self.current_form_name = form_name

    # =========================================================================
    # Session
    # =========================================================================

    def _capture_tenant_info(self) -> None:
        parts = self.browser.current_url.split("/")
        self.tenant_info = parts[3] if len(parts) > 3 else None

    @allure.step("Open page")
    def open(self, url_parameters: Optional[str] = None) -> bool:
        return self.session.open(url_parameters)

    def open_page(self) -> None:
        self.session.open_page()

    @allure.step("Open portal as {user}")
    def open_portal(self, user: str, password: str) -> bool:
        result = self.session.open_portal(user, password)
        self._capture_tenant_info()
        return result

    @allure.step("Open UI as {user} (by URL: {open_ui_by_url})")
    def open_ui(self, user: str, password: str, open_ui_by_url: str) -> bool:
        if is_yes(open_ui_by_url):
            result = self.session.open_ui_by_url(user, password)
        else:
            result = self.session.open_ui_by_menus(user, password)
        self._capture_tenant_info()
        return result

    @allure.step("Open UI as {user} with session date {session_date}")
    def open_ui_with_session_date(self, user: str, password: str, open_ui_by_url: str, session_date: str) -> bool:
        if is_yes(open_ui_by_url):
            result = self.session.open_ui_by_url_with_session_date(user, password, session_date)
        else:
            result = self.session.open_ui_by_menus_with_session_date(user, password, session_date)
        self._capture_tenant_info()
        return result

    @allure.step("Open UI from layout map {configuration_path}")
    def open_ui_after_sign_in(self, configuration_path: str, open_ui_by_url: str) -> bool:
        self._load_layout_map(configuration_path)
        if is_yes(open_ui_by_url):
            return self.session.open_ui_after_sign_in_by_url()
        return self.session.open_ui_after_sign_in_by_menu()

    def navigate_to_ui(self, configuration_path: str) -> Optional[str]:
        """
        Load a layout map from the layout directory and expand the portal menu to its UI.

        Returns:
            Locator of the UI's menu entry, or None if the menu does not list it
        """
        layout_directory = Path(get_config("layout.directory", "LayoutMaps/web"))
        self.change_layout_map(str(layout_directory / configuration_path))
        properties = self.properties
        return self.browser.navigate_to_ui(
            properties.application_full_name, properties.category, properties.ui_menu_name
        )

    @allure.step("Sign in")
    def sign_in(self, user: Optional[str] = None, password: Optional[str] = None) -> bool:
        return self.session.sign_in(user, password)

    def wait_for_ui_ready(self, iframe: str) -> bool:
        self.browser.wait_for_element(f"{SCREEN_LAYOUT_IFRAME}[@id='{iframe}']")
        self.browser.switch_to_frame_element(iframe)
        return self.browser.wait_for_ui_ready(self.properties.sign_in_validation_element)

    def close_ui_window(self, ui_window_id: str) -> bool:
        return self.session.close_ui_window(ui_window_id)

    @allure.step("Close browser")
    def close(self, force: Optional[str] = None) -> bool:
        """
        Close the browser.

        Without ``force`` pending requests get a short settle delay first;
        ``force="force"`` drops the page's unload handler before closing.
        """
        if force is None:
            self.timing.do_pause(SettleDelay.BEFORE_CLOSE)
            return self.browser.close()
        return self.browser.close(force.lower() == "force")

    # =========================================================================
    # Logout
    # =========================================================================

    def _wait_for_sign_in_page(self) -> bool:
        return self.browser.wait_for_presence(PORTAL_SIGN_IN_BUTTON, SIGN_IN_PAGE_SECONDS)

    def _open_sign_out(self) -> None:
        self.browser.wait_for_presence(PORTAL_USER_MENU, USER_MENU_SECONDS)
        self.browser.execute_javascript_return_string('$("ul#topMenu > li:eq(1)").mouseover()')
        self.timing.do_pause(SettleDelay.MENU_HOVER)
        self.browser.find_element_no_wait(PORTAL_SIGN_OUT_LINK).click()

    def _close_after_failure(self, action: str, error: Exception) -> bool:
        logger.error(f"Exception caught during {action}, closing the browser anyway: {error}")
        try:
            self.browser.close()
        except (InvalidSessionIdException, WebDriverException) as e:
            logger.debug(f"Browser already gone: {e}")
        return False

    def switch_to_portal_home(self) -> None:
        self.browser.navigate_to(portal_home_url(self.browser.current_url, self.tenant_info))
        self.timing.do_pause(SettleDelay.PORTAL_HOME)

    @allure.step("Log out from portal")
    def logout_from_portal(self) -> bool:
        """Sign out; an alert popping up on the way counts as a failure."""
        try:
            self._open_sign_out()
            self.timing.do_pause(SettleDelay.MENU_HOVER)
            alert = self.browser.check_alert()
            self._wait_for_sign_in_page()
            self.browser.close()
        except InvalidSessionIdException:
            logger.info("The session has already been closed")
            return True
        except (TimeoutException, WebDriverException) as e:
            return self._close_after_failure("logout", e)
        if alert == AlertState.PRESENT:
            logger.warning("Alert window popped up unexpectedly when logging out from the portal home page")
            return False
        return alert == AlertState.ABSENT

    @allure.step("Log out from portal expecting an alert")
    def logout_from_portal_with_alert(self) -> bool:
        """Sign out; an alert is expected on the way and is accepted."""
        try:
            self._open_sign_out()
            alert = self.browser.wait_for_alert(LOGOUT_ALERT_SECONDS)
            self._wait_for_sign_in_page()
            self.browser.close()
        except InvalidSessionIdException:
            logger.info("The session has already been closed")
            return True
        except (TimeoutException, WebDriverException) as e:
            return self._close_after_failure("logout", e)
        if alert != AlertState.PRESENT:
            logger.warning("Alert window did not pop up as expected when logging out from the portal home page")
            return False
        return True

    @allure.step("Log out and close (by URL: {open_ui_by_url})")
    def logout_and_close(self, open_ui_by_url: str) -> bool:
        try:
            if is_yes(open_ui_by_url):
                self.switch_to_portal_home()
                alert = self.browser.check_alert()
                if alert == AlertState.PRESENT:
                    logger.warning(
                        "Alert window popped up unexpectedly when switching back to the portal home page"
                    )
                    self.logout_from_portal()
                    return False
                return self.logout_from_portal()
            self.browser.switch_to_default_content()
            return self.logout_from_portal()
        except InvalidSessionIdException:
            logger.info("The session has already been closed")
            return True
        except WebDriverException as e:
            return self._close_after_failure("logout and close", e)

    @allure.step("Log out and close expecting an alert (by URL: {open_ui_by_url})")
    def logout_and_close_with_alert(self, open_ui_by_url: str) -> bool:
        try:
            if is_yes(open_ui_by_url):
                self.switch_to_portal_home()
                alert = self.browser.wait_for_alert(LOGOUT_ALERT_SECONDS)
                if alert != AlertState.PRESENT:
                    logger.warning(
                        "Alert window did not pop up as expected when switching back to the portal home page"
                    )
                    self.logout_from_portal()
                    return False
                return self.logout_from_portal()
            self.browser.switch_to_default_content()
            return self.logout_from_portal_with_alert()
        except InvalidSessionIdException:
            logger.info("The session has already been closed")
            return True
        except WebDriverException as e:
            return self._close_after_failure("logout and close", e)

    # =========================================================================
    # Windows and frames
    # =========================================================================

    def switch_to_default_content(self) -> bool:
        try:
            return self.browser.switch_to_default_content()
        except WebDriverException as e:
            raise RuntimeError("The current window does not contain a default frame.") from e

    def switch_to_default_window(self) -> bool:
        return self.browser.switch_to_default_window()

    def switch_to_frame(self, frame_name: str) -> bool:
        return self.browser.switch_to_frame(frame_name)

    def switch_to_child_frame(self, frame_name: str, form_name: str) -> bool:
        try:
            self.browser.driver.switch_to.frame(frame_name)
        except NoSuchFrameException as e:
            logger.warning(f"Child frame '{frame_name}' not found: {e}")
            return False
        self.switch_form_context(form_name)
        return True

    def switch_to_new_window(self) -> bool:
        return self.browser.switch_to_new_window()

    def switch_to_window(self, window_name: str) -> bool:
        return self.browser.switch_to_window(window_name)

    def switch_to_crystal_report_iframe_from_portal(self) -> bool:
        return self.browser.switch_to_crystal_report_iframe()

    @allure.step("Switch to report view")
    def switch_to_report_view(self, open_ui_by_url: str) -> bool:
        self.timing.do_pause(SettleDelay.REPORT_VIEW)
        if is_yes(open_ui_by_url):
            return self.switch_to_new_window()
        return self.switch_to_crystal_report_iframe_from_portal()

    def get_current_window_title(self) -> str:
        return self.browser.get_current_window_title()

    def window_exists(self, window_title: str) -> bool:
        return self.browser.is_window_title_exist(window_title)

    def is_scrollbar_present(self, orientation: str) -> bool:
        return self.browser.is_scrollbar_present(orientation)

    def take_screenshot(self) -> str:
        return self.browser.take_screenshot()

    def wait_for_no_requests(self) -> bool:
        return self.browser.wait_for_no_requests()

    # =========================================================================
    # Widget actions
    # =========================================================================

    @allure.step("Click {widget_name}")
    def click(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).click()

    @allure.step("Click {widget_name} by return")
    def click_by_return(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).click_by_return()

    @allure.step("Check {widget_name}")
    def check(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).check()

    @allure.step("Uncheck {widget_name}")
    def uncheck(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).uncheck()

    def is_checked(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).is_checked()

    def is_selected(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).is_selected()

    @allure.step("Select {widget_name}")
    def select(self, widget_name: str, option: Optional[str] = None) -> bool:
        """Select a radio button or tab, or pick ``option`` in a combo or list box."""
        widget = self.get_fixture_widget(widget_name)
        if option is None:
            return widget.select()
        return widget.select_value(option)

    def select_by_idx(self, widget_name: str, index: int) -> bool:
        return self.get_fixture_widget(widget_name).select_by_index(index)

    def select_option(self, widget_name: str, option: str) -> bool:
        return self.get_fixture_widget(widget_name).select_option(option)

    def deselect(self, widget_name: str, option: str) -> bool:
        return self.get_fixture_widget(widget_name).deselect(option)

    def deselect_all(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).deselect_all()

    def select_all(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).select_all()

    def get_all_options(self, widget_name: str) -> List[str]:
        return self.get_fixture_widget(widget_name).get_all_options()

    @allure.step("Select date {date} in {widget_name}")
    def select_calendar_date(self, widget_name: str, date: str) -> bool:
        return self.get_fixture_widget(widget_name).select_calendar_date(date)

    def exists(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).exists()

    def is_visible(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).is_visible()

    def is_disabled(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).is_disabled()

    def is_editable(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).is_editable()

    def hover(self, widget_name: str) -> None:
        self.get_fixture_widget(widget_name).hover()

    def press_tab(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).press_tab()

    def press_key_sequence(self, widget_name: str, key_to_hold: str, char_to_press: str) -> bool:
        return self.get_fixture_widget(widget_name).press_key_sequence(key_to_hold, char_to_press)

    # =========================================================================
    # Text
    # =========================================================================

    def get_text(self, widget_name: str) -> Optional[str]:
        return self.get_fixture_widget(widget_name).get_text()

    def get_place_holder_text(self, widget_name: str) -> Optional[str]:
        return self.get_fixture_widget(widget_name).get_place_holder_text()

    @allure.step("Clear {widget_name}")
    def clear(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).clear()

    def clear_and_validate(self, widget_name: str, default_value: str) -> bool:
        return self.get_fixture_widget(widget_name).clear_and_validate(default_value)

    @allure.step("Type '{value}' into {widget_name}")
    def type(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type(value)

    @allure.step("Type telephone number into {widget_name}")
    def type_telephone_number(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_telephone_number(value)

    def type_by_javascript(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_by_javascript(value)

    def type_no_tab(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_no_tab(value)

    def type_with_ctrl_a_del(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_with_ctrl_a_del(value)

    def type_without_wait_for_clickable(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_without_wait_for_clickable(value)

    def type_without_clear(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_without_clear(value)

    def type_without_clear_and_without_tab(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_without_clear_and_without_tab(value)

    def type_without_tab(self, widget_name: str, value: str) -> bool:
        return self.get_fixture_widget(widget_name).type_without_tab(value)

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_for(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).wait_for()

    def wait_for_not_visible(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).wait_for_not_visible()

    def wait_for_content(self, widget_name: str, content: str) -> bool:
        return self.get_fixture_widget(widget_name).wait_for_content(content)

    def wait_until_disabled(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).wait_until_disabled()

    def wait_until_enabled(self, widget_name: str) -> bool:
        return self.get_fixture_widget(widget_name).wait_until_enabled()

    def wait_for_image(self, widget_name: str, timeout_seconds: Optional[int] = None) -> bool:
        widget = self.get_fixture_widget(widget_name)
        if timeout_seconds is None:
            return widget.wait_for_image()
        return widget.wait_for_image(timeout_seconds)

    def pause_for_seconds(self, seconds: int) -> bool:
        if seconds < 1:
            raise ValueError("The pause must be at least 1 second.")
        self.timing.do_pause_seconds(seconds)
        return True

    # =========================================================================
    # Tables
    # =========================================================================

    @allure.step("Click cell {column_widget_name} of row {row} in {table_name}")
    def click_cell(self, table_name: str, column_widget_name: str, row: int) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.click_cell(row, self._column_index(table, column_widget_name))

    def click_cell_by_column_name(self, table_name: str, column_name: str, row: int) -> bool:
        return self.get_fixture_widget(table_name).click_cell_by_column_name(column_name, row)

    def click_cell_by_column_idx(self, table_name: str, row: int, column: int) -> bool:
        return self.get_fixture_widget(table_name).click_cell(row, column)

    def click_finder_in_cell(self, table_name: str, column_widget_name: str, row: int) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.click_finder_in_cell(row, self._column_index(table, column_widget_name))

    def click_pencil_button_in_cell(self, table_name: str, column_widget_name: str, row: int) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.click_pencil_button_in_cell(row, self._column_index(table, column_widget_name))

    def delete_row(self, table_name: str, row: int) -> bool:
        return self.get_fixture_widget(table_name).delete_row(row)

    def get_cell_row_idx_by_value(self, table_name: str, column_widget_name: str, value: str) -> int:
        table = self.get_fixture_widget(table_name)
        return table.get_cell_row_idx_by_value(self._column_index(table, column_widget_name), value)

    def get_cell_text(self, table_name: str, column_widget_name: str, row: int) -> Optional[str]:
        table = self.get_fixture_widget(table_name)
        return table.get_cell_text(row, self._column_index(table, column_widget_name))

    def get_cell_text_by_column_name(self, table_name: str, column_name: str, row: int) -> Optional[str]:
        return self.get_fixture_widget(table_name).get_cell_text_by_column_name(column_name, row)

    def get_cell_text_by_column_idx(self, table_name: str, row: int, column: int) -> Optional[str]:
        return self.get_fixture_widget(table_name).get_cell_text(row, column)

    def get_selected_cell(self, table_name: str, column_name: str, row: int) -> str:
        return self.get_fixture_widget(table_name).get_selected_cell(column_name, row)

    def wait_for_cell_content(self, table_name: str, column_name: str, row: int, content: str) -> bool:
        return self.get_fixture_widget(table_name).wait_for_cell_content(column_name, row, content)

    def get_header_cell_text(self, table_name: str, column_widget_name: str) -> Optional[str]:
        table = self.get_fixture_widget(table_name)
        return table.get_header_cell_text(self._column_index(table, column_widget_name))

    def get_header_cell_text_by_idx(self, table_name: str, column: int) -> Optional[str]:
        return self.get_fixture_widget(table_name).get_header_cell_text(column)

    def is_column_hidden(self, table_name: str, column_widget_name: str) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.is_column_hidden(self._column_index(table, column_widget_name))

    @allure.step("Select '{value}' in cell {column_widget_name} of row {row} in {table_name}")
    def select_from_cell(self, table_name: str, column_widget_name: str, row: int, value: str) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.select_from_cell(row, self._column_index(table, column_widget_name), value)

    def select_from_cell_without_validation(
        self, table_name: str, column_widget_name: str, row: int, value: str
    ) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.select_from_cell_without_validation(
            row, self._column_index(table, column_widget_name), value
        )

    @allure.step("Type '{value}' into cell {column_widget_name} of row {row} in {table_name}")
    def type_into_cell(self, table_name: str, column_widget_name: str, row: int, value: str) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.type_into_cell(row, self._column_index(table, column_widget_name), value)

    def type_into_cell_without_tab(self, table_name: str, column_widget_name: str, row: int, value: str) -> bool:
        table = self.get_fixture_widget(table_name)
        return table.type_into_cell_without_tab(row, self._column_index(table, column_widget_name), value)

    def wait_for_table_to_load(self, table_name: str) -> bool:
        return self.get_fixture_widget(table_name).wait_for_table_to_load()

    def get_current_page(self, table_name: str) -> str:
        return self.get_fixture_widget(table_name).get_current_page()

    def get_total_pages(self, table_name: str) -> str:
        return self.get_fixture_widget(table_name).get_total_pages()

    def go_to_page(self, table_name: str, page: str) -> bool:
        return self.get_fixture_widget(table_name).go_to_page(page)

    def navigate(self, table_name: str, action: str) -> bool:
        return self.get_fixture_widget(table_name).navigate(action)

    @allure.step("Select lines {lines} of {table_name} for delete")
    def select_lines_for_delete(self, table_name: str, lines: str) -> bool:
        return self.get_fixture_widget(table_name).select_lines_for_delete(lines)

    def unselect_lines_for_delete(self, table_name: str, lines: str) -> bool:
        return self.get_fixture_widget(table_name).unselect_lines_for_delete(lines)

    def is_all_checked(self, table_name: str) -> bool:
        return self.get_fixture_widget(table_name).is_all_checked()

    def is_all_unchecked(self, table_name: str) -> bool:
        return self.get_fixture_widget(table_name).is_all_unchecked()

    def get_total_items(self, table_name: str) -> int:
        return self.get_fixture_widget(table_name).get_total_items()

    def get_checked_items_to_delete(self, table_name: str) -> int:
        return self.get_fixture_widget(table_name).get_checked_items_to_delete()

    @allure.step("Delete checked lines of {table_name} ({delete_confirm})")
    def delete_table_lines(self, table_name: str, delete_lines_button: str, delete_confirm: str) -> bool:
        """
        Delete the checked lines of a table and verify the item count.

        ``delete_confirm`` answers the confirmation dialog: "Delete" expects
        the total to drop by the checked count, "Cancel" expects it unchanged.
        """
        if delete_confirm not in DELETE_RESPONSES:
            return False
        table = self.get_fixture_widget(table_name)
        button = self.get_fixture_widget(delete_lines_button)
        if not button.wait_until_enabled():
            return False
        total_items = table.get_total_items()
        checked_items = table.get_checked_items_to_delete()

        self.browser.wait_for_clickable(button.wait_target_locator, DELETE_BUTTON_SECONDS)
        if not button.click():
            logger.error(f"Delete lines button '{delete_lines_button}' could not be clicked")
            return False
        self.message_boxes.wait_for_confirmation_text(CONFIRMATION_TEXT_SECONDS)
        if not self.click_confirmation_dialog_response(delete_confirm):
            logger.error("Could not answer the delete confirmation dialog")
            return False
        self.timing.do_pause(SettleDelay.DELETE_REFRESH)

        total_after_delete = table.get_total_items()
        if delete_confirm == "Delete":
            return total_items - checked_items == total_after_delete
        return total_items == total_after_delete

    # =========================================================================
    # Message boxes
    # =========================================================================

    def wait_for_message_box_for_cna2(self, message_type: str) -> bool:
        return self.message_boxes.wait_for_message_box(message_type)

    def wait_for_message_box_disappear(self, message_type: str) -> bool:
        return self.message_boxes.wait_for_message_box_disappear(message_type)

    def wait_for_loading_image_disappear(self) -> bool:
        return self.message_boxes.wait_for_loading_image_disappear()

    def wait_for_confirmation_dialog(self) -> bool:
        return self.message_boxes.wait_for_confirmation_dialog()

    def wait_for_error_message(self) -> bool:
        return self.message_boxes.wait_for_error_message()

    def wait_for_message_dialog(
        self, message_type: str, window_text: str = "", timeout_seconds: Optional[int] = None
    ) -> bool:
        return self.message_boxes.wait_for_message_dialog(message_type, window_text, timeout_seconds)

    def get_text_from_message_box(self, message_type: str) -> str:
        return self.message_boxes.get_text_from_message_box(message_type)

    def text_in_message_box_contains(self, message_type: str, text: str) -> bool:
        return self.message_boxes.text_in_message_box_contains(message_type, text)

    def error_message_contains(self, error_information: str) -> bool:
        return self.message_boxes.error_message_contains(error_information)

    def get_message_dialog_text(self, message_type: str) -> str:
        return self.message_boxes.get_message_dialog_text(message_type)

    @allure.step("Close {message_type} message box")
    def close_message_box(self, message_type: str) -> None:
        self.message_boxes.close_message_box(message_type)

    def close_popup_window(self) -> None:
        self.message_boxes.close_popup_window()

    @allure.step("Answer confirmation dialog with {response}")
    def click_confirmation_dialog_response(self, response: str) -> bool:
        return self.message_boxes.click_confirmation_dialog_response(response)

    @allure.step("Answer {message_type} dialog with {response}")
    def click_message_dialog_response(self, message_type: str, response: str) -> bool:
        return self.message_boxes.click_message_dialog_response(message_type, response)

    # =========================================================================
    # Helpers
    # =========================================================================

    def get_random_id(self, length: int, string_case: Optional[str] = None) -> str:
        """
        Random id of ``length`` characters taken from a UUID.

        Both "UPPERCASE" and "LOWERCASE" return an upper-cased id; test pages
        written against this behaviour depend on it.

        Raises:
            ValueError: If ``string_case`` is neither "UPPERCASE" nor "LOWERCASE"
        """
        if string_case is None:
            return random_id(length)
        if string_case.strip().upper() not in STRING_CASES:
            raise ValueError(
                'The string casing must be either "UPPERCASE" or "LOWERCASE".\r\n'
                'If you have no preference then use "get random id" that takes only 1 argument.'
            )
        return random_id(length).upper()

    def get_fitnesse_test_path(self, test_path: str) -> str:
        return fitnesse_test_path(test_path)


__all__ = [
    "GenericWebFixture",
    "fitnesse_test_path",
    "portal_home_url",
    "random_id",
]
