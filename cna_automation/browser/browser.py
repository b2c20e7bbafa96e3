"""
================================================================================
Selenium Browser
================================================================================

Browser collaborator used by widgets and the fixture façade.

Every element address is a plain string locator:
    - "//..."   XPath
    - "css=..." CSS selector
    - anything else is an element id

Features:
    - Presence/visibility/content waits bounded by fixed poll policies
    - Kendo/jQuery aware clicks and typing (script clicks, Ctrl+A/Delete clears)
    - Combo box and Kendo list box helpers
    - Window, frame and alert handling (alerts reported as a tri-state)
    - Portal sign-in and three-level portal menu traversal
    - Screenshots attached to the Allure report

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Tuple

import allure
from loguru import logger
from selenium.common.exceptions import (
    NoAlertPresentException,
    NoSuchElementException,
    NoSuchFrameException,
    NoSuchWindowException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.action_chains import ActionChains
from selenium.webdriver.common.by import By
from selenium.webdriver.common.keys import Keys
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from cna_automation.browser.settings import BrowserSettings
from cna_automation.common import get_config
from cna_automation.exceptions import ConfigurationError
from cna_automation.timing import POLL_POLICIES, SettleDelay, TimeDelay, poll_until


SPINNER_ID = "ajaxSpinner"
FIND_TIMEOUT_SECONDS = 20
SIGN_IN_TIMEOUT_SECONDS = 30

PORTAL_MENU = "//ul[@id='menu']"
PORTAL_FIRST_MENU_ENTRY = "//ul[@id='menu']/li[1]/span"
PORTAL_EMAIL_ID = "sso_Email"
PORTAL_PASSWORD_ID = "sso_Password"
PORTAL_SIGN_IN_BUTTON = "//input[@value='Sign In']"
SESSION_DATE_LINK_ID = "lnkEdit"
SESSION_DATE_PICKER_ID = "datePicker"
SCREEN_LAYOUT_IFRAME = "//div[@id='screenLayout']/iframe"


class AlertState(Enum):
    """Outcome of looking for a browser-native alert."""
    PRESENT = "present"
    ABSENT = "absent"
    ERROR = "error"


class ImageMatcher:
    """
    Narrow interface for an image-recognition collaborator.

    Image-based actions are outside this package; a concrete matcher can be
    handed to the Browser to back the image waits.
    """

    def wait(self, image: str, timeout_seconds: Optional[int] = None) -> bool:
        raise NotImplementedError

    def press_key_sequence(self, key_to_hold: str, char_to_press: str) -> bool:
        raise NotImplementedError


def to_by(locator: str) -> Tuple[str, str]:
    """
    Translate a string locator into a Selenium (By, value) pair.

    Examples:
        >>> to_by("//div[@id='x']")
        ('xpath', "//div[@id='x']")
        >>> to_by("css=div.k-grid")
        ('css selector', 'div.k-grid')
        >>> to_by("btnSave")
        ('id', 'btnSave')
    """
    if locator.startswith("//"):
        return By.XPATH, locator
    if locator.startswith("css="):
        return By.CSS_SELECTOR, locator[len("css="):]
    return By.ID, locator


class Browser:
    """
    Selenium-backed browser used by all widgets.

    Usage:
        >>> browser = Browser(driver, BrowserSettings.from_config())
        >>> browser.click("btnSave")
        True
        >>> browser.get_text("//div[@id='message']/div/div[2]")
        'Record saved.'
    """

    def __init__(
        self,
        driver: Any,
        settings: Optional[BrowserSettings] = None,
        image_matcher: Optional[ImageMatcher] = None,
    ):
        if driver is None:
            raise ConfigurationError("The web driver must be supplied")
        self.driver = driver
        self.settings = settings or BrowserSettings.from_config()
        self.image_matcher = image_matcher
        self.iframe: Optional[str] = None
        self.main_window: Optional[str] = None

    # =========================================================================
    # Element lookup
    # =========================================================================

    def _wait(self, seconds: float = FIND_TIMEOUT_SECONDS) -> WebDriverWait:
        return WebDriverWait(self.driver, seconds)

    def find_element(self, locator: str):
        """
        Wait for the ajax spinner, then for the element to be present.

        Raises:
            TimeoutException: If the element is not present within 20 seconds
        """
        self.wait_for_spinner_gone()
        return self._wait().until(EC.presence_of_element_located(to_by(locator)))

    def find_element_no_wait(self, locator: str):
        """
        Look the element up once.

        Raises:
            NoSuchElementException: If the element is not in the DOM
        """
        self.wait_for_spinner_gone()
        return self.driver.find_element(*to_by(locator))

    def exists(self, locator: str) -> bool:
        try:
            self.find_element(locator)
            return True
        except TimeoutException:
            return False

    def exists_no_wait(self, locator: str) -> bool:
        try:
            self.find_element_no_wait(locator)
            return True
        except NoSuchElementException:
            return False

    def is_visible(self, locator: str) -> bool:
        # Kendo fades widgets in; force full opacity before asking
        element = self.find_element(locator)
        self.driver.execute_script("arguments[0].style.opacity=1", element)
        return self.find_element(locator).is_displayed()

    def is_disabled(self, locator: str) -> bool:
        disabled = self.find_element(locator).get_attribute("disabled")
        return disabled is not None and disabled == "true"

    def is_disabled_for_tab(self, locator: str) -> bool:
        css_class = self.find_element(locator).get_attribute("class")
        return css_class is not None and "k-state-disabled" in css_class

    def is_editable(self, locator: str) -> bool:
        if not self.is_visible(locator):
            return False
        element = self.find_element(locator)
        if (element.get_attribute("isDisabled") or "") == "true":
            return False
        css_class = element.get_attribute("class") or ""
        input_type = element.get_attribute("type") or ""
        if "ListBox" in css_class or "checkbox" in input_type or "radio" in input_type:
            return True
        return (element.get_attribute("isContentEditable") or "") == "true"

    def is_selected(self, locator: str) -> bool:
        return self.find_element(locator).is_selected()

    def get_attribute(self, locator: str, name: str) -> Optional[str]:
        return self.find_element(locator).get_attribute(name)

    def get_text(self, locator: str) -> str:
        """
        Read the visible value of an element.

        Inputs report their value, select elements their selected option,
        header cells their raw innerHTML and everything else its text.
        """
        try:
            element = self.find_element(locator)
        except (NoSuchElementException, TimeoutException):
            return ""
        inner_html = element.get_attribute("innerHTML") or ""
        if not inner_html:
            value = element.get_attribute("value")
            return value.strip() if value is not None else ""
        if inner_html.lower().startswith("<option "):
            return Select(element).first_selected_option.text.strip()
        if ">select<" in inner_html:
            return element.text.replace("\nselect", "").strip()
        if "/thead/" in locator:
            return inner_html.strip()
        return element.text.strip()

    def get_place_holder_text(self, locator: str) -> Optional[str]:
        return self.find_element(locator).get_attribute("placeholder")

    # =========================================================================
    # Script execution
    # =========================================================================

    def execute_javascript(self, script: str) -> bool:
        result = self.driver.execute_script(script)
        return str(result).lower() == "true"

    def execute_javascript_return_string(self, script: str) -> Optional[str]:
        result = self.driver.execute_script(script)
        return None if result is None else str(result)

    # =========================================================================
    # Clicks
    # =========================================================================

    def click(self, locator: str) -> bool:
        self.find_element(locator).click()
        return True

    def click_by_return(self, locator: str) -> bool:
        self.find_element(locator).send_keys(Keys.RETURN)
        return True

    def click_by_javascript(self, locator: str) -> bool:
        self.wait_for_spinner_gone()
        self.find_element(locator)
        if locator.startswith("//"):
            script = (
                f'return document.evaluate("{locator}", document, null, 9, null)'
                f".singleNodeValue.click();"
            )
        else:
            script = f'return document.getElementById("{locator}").click()'
        self.driver.execute_script(script)
        return True

    def click_no_wait(self, locator: str) -> bool:
        self.driver.find_element(*to_by(locator)).click()
        return True

    def click_and_wait_for_either(self, locator: str, element_one: str, element_two: str) -> bool:
        """
        Click, then wait for ``element_one``; while waiting, click ``element_two``
        whenever it shows up (e.g. a "continue" prompt after sign-in).
        """
        if not self.click(locator):
            return False
        interval = self.settings.default_interval
        for _ in range(0, self.settings.default_timeout + 1, interval):
            if self.exists(element_one):
                return True
            TimeDelay.do_pause(interval)
            if element_two and self.exists(element_two):
                self.click(element_two)
        return False

    def hover(self, locator: str) -> None:
        ActionChains(self.driver).move_to_element(self.find_element(locator)).perform()

    # =========================================================================
    # Typing
    # =========================================================================

    def _finish_typing(self, element, locator: str, expected: str, tab: bool) -> bool:
        success = self.get_text(locator).lower() == expected.lower()
        if tab:
            element.send_keys(Keys.TAB)
        return success

    def wait_for_clickable(self, locator: str, seconds: float = FIND_TIMEOUT_SECONDS) -> bool:
        try:
            self._wait(seconds).until(EC.element_to_be_clickable(to_by(locator)))
            return True
        except TimeoutException:
            return False

    def wait_for_presence(self, locator: str, seconds: float = FIND_TIMEOUT_SECONDS) -> bool:
        try:
            self._wait(seconds).until(EC.presence_of_element_located(to_by(locator)))
            return True
        except TimeoutException:
            return False

    def type(self, locator: str, value: str, tab: bool = True) -> bool:
        element = self.find_element(locator)
        self.wait_for_clickable(locator)
        element.send_keys(Keys.CONTROL + "a")
        element.send_keys(Keys.DELETE)
        element.send_keys(value)
        return self._finish_typing(element, locator, value, tab)

    def type_by_javascript(self, locator: str, value: str) -> bool:
        self.wait_for_clickable(locator)
        self.execute_javascript_return_string(
            f"$('input#{locator}').val('{value}').trigger('change');"
        )
        return self.get_text(locator).lower() == value.lower()

    def type_with_ctrl_a_del(self, locator: str, value: str, tab: bool = True) -> bool:
        element = self.find_element(locator)
        self.wait_for_clickable(locator)
        # Firefox needs focus before the key chord
        element.click()
        self.clear_by_ctrl_a_delete(locator)
        element.send_keys(value)
        return self._finish_typing(element, locator, value, tab)

    def type_into_cell(self, locator: str, value: str, tab: bool = True) -> bool:
        element = self.find_element(locator)
        try:
            if "input[2]" in locator and element.get_attribute("data-role") == "numerictextbox":
                element.send_keys(Keys.HOME)
                element.send_keys(Keys.SHIFT + Keys.END)
            if locator.endswith("/span/span/input"):
                for _ in range(10):
                    element.send_keys(Keys.END)
                    element.send_keys(Keys.BACK_SPACE)
            else:
                element.send_keys(Keys.CONTROL + "a")
            element.send_keys(Keys.DELETE)
            element.send_keys(value)
        except WebDriverException as e:
            logger.warning(f"Typing into cell '{locator}' failed: {e}")
            return False
        return self._finish_typing(element, locator, value, tab)

    def type_without_wait_for_clickable(self, locator: str, value: str, tab: bool = True) -> bool:
        element = self.find_element(locator)
        element.click()
        element.send_keys(Keys.CONTROL + "a")
        element.send_keys(Keys.DELETE)
        element.send_keys(value)
        return self._finish_typing(element, locator, value, tab)

    def type_without_clear(self, locator: str, value: str, tab: bool = True) -> bool:
        self.find_element(locator).send_keys(value)
        success = self.get_text(locator).lower() == value.lower()
        if tab:
            self.find_element(locator).send_keys(Keys.TAB)
        return success

    def type_tel_num_without_clear(self, locator: str, value: str, tab: bool = True) -> bool:
        self.find_element(locator).send_keys(value)
        if tab:
            self.find_element(locator).send_keys(Keys.TAB)
        return self.get_text(locator).lower() == format_telephone_number(value).lower()

    def press_key(self, locator: str, key: str) -> bool:
        """
        Send a named key ("TAB", "ENTER") or a "+"-joined combination
        ("SHIFT+END", "CONTROL+A") to an element.
        """
        chord = ""
        for part in key.split("+"):
            name = part.strip().upper()
            chord += getattr(Keys, name) if hasattr(Keys, name) else part.strip().lower()
        self.find_element(locator).send_keys(chord)
        return True

    def clear_text(self, locator: str) -> bool:
        self.find_element(locator).clear()
        return True

    def clear_by_ctrl_a_delete(self, locator: str) -> bool:
        self.find_element(locator).send_keys(Keys.CONTROL + "a")
        self.find_element(locator).send_keys(Keys.DELETE)
        return True

    def clear_and_validate_field(self, locator: str, default_value: str) -> bool:
        self.find_element(locator).clear()
        return self.get_text(locator).lower() == default_value.lower()

    # =========================================================================
    # Check boxes, radio buttons, combo boxes and list boxes
    # =========================================================================

    def select_radio_button(self, locator: str) -> bool:
        self.click_by_javascript(locator)
        return self.is_selected(locator)

    def select_check_box(self, locator: str) -> bool:
        if not self.is_selected(locator):
            self.click_by_javascript(locator)
        return self.is_selected(locator)

    def clear_check_box(self, locator: str) -> bool:
        if self.is_selected(locator):
            self.click_by_javascript(locator)
        return not self.is_selected(locator)

    def select_tab(self, locator: str) -> bool:
        return self.click(locator)

    def select_combo_box(self, locator: str, option: str, tab: bool = True) -> bool:
        """
        Select a visible option of a ``<select>`` element.

        Raises:
            NoSuchElementException: If the combo box or the option is missing
        """
        try:
            Select(self.find_element(locator)).select_by_visible_text(option)
        except NoSuchElementException:
            raise NoSuchElementException(
                f"Either the locator '{locator}' or the combo box item '{option}' doesn't exist"
            ) from None
        success = True
        if tab:
            success = self.get_text(locator).lower() == option.lower()
            self.find_element(locator).send_keys(Keys.TAB)
            self.wait_for_no_requests()
            self.wait_for_no_requests()
        return success

    def select_combo_box_by_index(self, locator: str, index: int) -> bool:
        """Select the option at 0-based ``index`` of a ``<select>`` element."""
        Select(self.find_element(locator)).select_by_index(index)
        return True

    def get_all_options(self, locator: str) -> List[str]:
        options = Select(self.find_element(locator)).options
        return [option.get_attribute("textContent") for option in options]

    def _list_box_items(self, list_id: str):
        index = 1
        item = f"//div[@id='{list_id}']/div[{index}]"
        while self.exists_no_wait(item):
            yield item
            index += 1
            item = f"//div[@id='{list_id}']/div[{index}]"

    def get_all_options_from_list_box(self, list_id: str) -> List[str]:
        return [self.get_attribute(item, "innerHTML") for item in self._list_box_items(list_id)]

    def get_selected_options_from_list_box(self, list_id: str) -> List[str]:
        return [
            self.get_attribute(item, "innerHTML")
            for item in self._list_box_items(list_id)
            if self.get_attribute(item, "aria-selected") == "true"
        ]

    def select_from_list(self, locator: str, option: str) -> bool:
        Select(self.find_element(locator)).select_by_visible_text(option)
        selected = self.get_selected_options_from_list_box(locator)
        return any(value.lower() == option.lower() for value in selected)

    def deselect_from_list(self, locator: str, option: str) -> bool:
        select = Select(self.find_element(locator))
        for value in self.get_selected_options_from_list_box(locator):
            if value.lower() == option.lower():
                select.deselect_by_visible_text(option)
                break
        return all(
            value.lower() != option.lower()
            for value in self.get_selected_options_from_list_box(locator)
        )

    def remove_all_selections(self, locator: str) -> bool:
        select = Select(self.find_element(locator))
        for value in self.get_selected_options_from_list_box(locator):
            select.deselect_by_visible_text(value)
        return len(self.get_selected_options_from_list_box(locator)) == 0

    def select_all_selections(self, locator: str) -> bool:
        select = Select(self.find_element(locator))
        options = self.get_all_options(locator)
        for value in options:
            select.select_by_visible_text(value)
        return len(self.get_selected_options_from_list_box(locator)) == len(options)

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_for_spinner_gone(self) -> bool:
        try:
            spinner = self.driver.find_element(By.ID, SPINNER_ID)
        except WebDriverException:
            return True
        return poll_until(
            lambda: not spinner.is_displayed(),
            POLL_POLICIES["spinner"],
            "the ajax spinner to disappear",
        )

    def wait_for_element(self, locator: str) -> bool:
        return poll_until(
            lambda: self.exists_no_wait(locator) and self.is_visible(locator),
            POLL_POLICIES["element"],
            f"element '{locator}'",
        )

    def wait_for_no_element(self, locator: str) -> bool:
        return poll_until(
            lambda: not self.exists_no_wait(locator) or not self.is_visible(locator),
            POLL_POLICIES["no_element"],
            f"element '{locator}' to go away",
        )

    def wait_for_content(self, locator: str, content: str) -> bool:
        interval = self.settings.default_interval
        for _ in range(0, self.settings.small_timeout, interval):
            if self.get_text(locator) == content:
                return True
            TimeDelay.do_pause(interval)
        return False

    def wait_for_no_requests(self) -> bool:
        interval = self.settings.default_interval
        try:
            for _ in range(0, self.settings.large_timeout, interval):
                if self.execute_javascript("return window.jQuery != undefined && jQuery.active === 0"):
                    return True
                TimeDelay.do_pause(interval)
        except WebDriverException as e:
            logger.debug(f"Could not query pending jQuery requests: {e}")
        return False

    def wait_for_ui_ready(self, locator: str) -> bool:
        if self.wait_for_spinner_gone():
            return self.wait_for_element(locator)
        return False

    def wait_for_image(self, image: str, timeout_seconds: Optional[int] = None) -> bool:
        if self.image_matcher is None:
            logger.warning(f"No image matcher configured; cannot wait for image '{image}'")
            return False
        return self.image_matcher.wait(image, timeout_seconds)

    def press_key_sequence(self, key_to_hold: str, char_to_press: str) -> bool:
        if self.image_matcher is None:
            logger.warning(f"No image matcher configured; cannot press '{key_to_hold}+{char_to_press}'")
            return False
        return self.image_matcher.press_key_sequence(key_to_hold, char_to_press)

    # =========================================================================
    # Windows, frames and alerts
    # =========================================================================

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    def navigate_to(self, url: str) -> None:
        self.driver.get(url)

    def get_current_window_title(self) -> str:
        return self.driver.title

    def switch_to_new_window(self) -> bool:
        current = self.driver.current_window_handle
        interval = TimeDelay.DEFAULT_INTERVAL
        for _ in range(0, TimeDelay.DEFAULT_TIMEOUT, interval):
            try:
                for handle in self.driver.window_handles:
                    self.driver.switch_to.window(handle)
                if self.driver.current_window_handle != current:
                    return True
                TimeDelay.do_pause(interval)
            except NoSuchWindowException:
                return False
        return False

    def switch_to_window(self, window_handle: str) -> bool:
        try:
            self.driver.switch_to.window(window_handle)
            return True
        except NoSuchWindowException:
            return False

    def switch_to_frame(self, frame_name: str) -> bool:
        """Switch to a frame; dotted names ("outer.inner") walk nested frames."""
        try:
            self.switch_to_default_content()
            for frame in frame_name.split("."):
                self.driver.switch_to.frame(frame)
        except NoSuchFrameException as e:
            logger.warning(f"Frame '{frame_name}' not found: {e}")
        return True

    def switch_to_frame_element(self, locator: str) -> bool:
        self.driver.switch_to.frame(self.find_element(locator))
        return True

    def switch_to_default_content(self) -> bool:
        self.driver.switch_to.default_content()
        return True

    def switch_to_default_window(self) -> bool:
        try:
            handles = self.driver.window_handles
            if handles:
                self.switch_to_window(handles[-1])
        except NoSuchWindowException as e:
            logger.warning(f"Default window is gone: {e}")
        return True

    def switch_to_crystal_report_iframe(self) -> bool:
        """Switch to the report-viewer iframe opened next to the current UI iframe."""
        self.wait_for_spinner_gone()
        self.switch_to_default_content()
        current_index = int((self.iframe or "iFrameMenu0")[len("iFrameMenu"):])
        report_iframe = f"iFrameMenu{current_index + 1}"
        self.wait_for_element(f"{SCREEN_LAYOUT_IFRAME}[@id='{report_iframe}']")
        if "ReportViewer" in (self.get_attribute(report_iframe, "src") or ""):
            self.driver.switch_to.frame(self.find_element(report_iframe))
            return True
        logger.warning(f"Can't locate Crystal Report Viewer iFrame with ID set to {report_iframe}")
        return False

    def is_window_title_exist(self, window_title: str) -> bool:
        result = False
        current = self.driver.current_window_handle
        for handle in self.driver.window_handles:
            self.driver.switch_to.window(handle)
            if self.driver.title == window_title:
                result = True
        self.driver.switch_to.window(current)
        return result

    def is_scrollbar_present(self, orientation: str) -> bool:
        if orientation.lower() == "horizontal":
            condition = "document.body.scrollWidth > document.body.clientWidth"
        else:
            condition = "document.body.scrollHeight > document.body.clientHeight"
        return self.execute_javascript(f"if ({condition}){{return true;}}else{{return false;}}")

    def check_alert(self, accept: bool = True) -> AlertState:
        """
        Look for an alert right now and accept (or dismiss) it.

        Returns:
            PRESENT, ABSENT, or ERROR when the driver failed for another reason
        """
        try:
            alert = self.driver.switch_to.alert
            if accept:
                alert.accept()
            else:
                alert.dismiss()
            return AlertState.PRESENT
        except NoAlertPresentException:
            return AlertState.ABSENT
        except WebDriverException as e:
            logger.error(f"Unexpected failure while checking for an alert: {e}")
            return AlertState.ERROR

    def wait_for_alert(self, seconds: float, accept: bool = True) -> AlertState:
        """Wait up to ``seconds`` for an alert, then accept (or dismiss) it."""
        try:
            self._wait(seconds).until(EC.alert_is_present())
        except TimeoutException:
            return AlertState.ABSENT
        except WebDriverException as e:
            logger.error(f"Unexpected failure while waiting for an alert: {e}")
            return AlertState.ERROR
        return self.check_alert(accept)

    def close(self, force: bool = False) -> bool:
        if force:
            self.execute_javascript("window.onbeforeunload = function(e){};")
        self.driver.quit()
        return True

    def close_current_window(self) -> bool:
        self.driver.close()
        return True

    def close_ui_window(self, ui_window_id: str) -> bool:
        """Close a UI window opened inside the portal and wait for it to go away."""
        self.switch_to_default_content()
        self.driver.execute_script('$("div#draggable > div:eq(1) > span").mouseover();')
        close_icon = f"//div[@id='{ui_window_id}']/span[2]"
        self.wait_for_clickable(close_icon)
        self.find_element(close_icon).click()
        return self.wait_for_no_element(close_icon)

    def take_screenshot(self, name: str = "screenshot") -> str:
        """
        Save a PNG of the current page and attach it to the Allure report.

        Returns:
            Path of the saved file, or "" when the driver could not capture
        """
        try:
            png = self.driver.get_screenshot_as_png()
        except WebDriverException as e:
            logger.error(f"Screenshot failed: {e}")
            return ""
        directory = Path(get_config("screenshots.directory", "screenshots"))
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{name}{time.strftime('%Y%m%d_%H%M%S')}.png"
        path.write_bytes(png)
        allure.attach(png, name=name, attachment_type=allure.attachment_type.PNG)
        logger.info(f"Screenshot saved: {path}")
        return str(path)

    # =========================================================================
    # Portal session
    # =========================================================================

    def _portal_base_url(self) -> str:
        return self.settings.base_url.replace(":80", "")

    def open_url_without_url_validation(self, url: str) -> None:
        self.driver.get(self._portal_base_url() + url)

    def _open_and_match(self, complete_url: str) -> bool:
        self.driver.get(complete_url)
        for _ in range(0, self.settings.small_timeout + 1, 10):
            if self.driver.current_url.lower() == complete_url.lower():
                return True
            TimeDelay.do_pause(10)
        return False

    def open_url(self, url: str) -> bool:
        return self._open_and_match(self._portal_base_url() + url)

    def open_ui_by_full_url(self, complete_url: str) -> bool:
        return self._open_and_match(complete_url)

    def open_url_and_wait_for(self, url: str, element: str) -> bool:
        if not self.open_url(url):
            return False
        interval = self.settings.default_interval
        for _ in range(0, self.settings.small_timeout + 1, interval):
            if self.exists(element):
                self.driver.maximize_window()
                return True
            TimeDelay.do_pause(interval)
        return False

    def sign_in_to_portal(self, user: str, password: str) -> str:
        """
        Sign in on the portal start page.

        Returns:
            The URL reached after sign-in (carries the tenant fragment)
        """
        self.driver.get(self._portal_base_url())
        if not self.wait_for_clickable(PORTAL_EMAIL_ID, SIGN_IN_TIMEOUT_SECONDS):
            logger.error("Portal sign-in page did not load; closing the browser")
            self.close()
        self.type(PORTAL_EMAIL_ID, user)
        self.type(PORTAL_PASSWORD_ID, password)
        self.click(PORTAL_SIGN_IN_BUTTON)
        if not self.wait_for_clickable(PORTAL_FIRST_MENU_ENTRY):
            logger.error("Portal menu did not appear after sign-in; closing the browser")
            self.close()
        return self.driver.current_url

    def sign_in_to_portal_with_session_date(self, user: str, password: str, session_date: str) -> str:
        self.sign_in_to_portal(user, password)
        self.click(SESSION_DATE_LINK_ID)
        self.type(SESSION_DATE_PICKER_ID, session_date)
        return self.driver.current_url

    def get_iframe(self, complete_url: str) -> Optional[str]:
        """Find the id of the portal iframe whose src is ``complete_url``."""
        index = 1
        iframe = f"{SCREEN_LAYOUT_IFRAME}[{index}]"
        while self.exists_no_wait(iframe):
            if (self.get_attribute(iframe, "src") or "").strip() == complete_url:
                self.iframe = (self.get_attribute(iframe, "id") or "").strip()
                return self.iframe
            index += 1
            iframe = f"{SCREEN_LAYOUT_IFRAME}[{index}]"
        return None

    def _extend_first_level_menu(self, application_full_name: str) -> Optional[Tuple[int, str]]:
        index = 1
        menu = f"{PORTAL_MENU}/li[{index}]"
        self.wait_for_clickable(f"{menu}/span")
        while self.exists_no_wait(menu):
            if (self.get_attribute(f"{menu}/span", "innerHTML") or "").strip() == application_full_name:
                position = index - 1
                self.execute_javascript_return_string(
                    f'$("ul#menu > li:eq({position}) > span").mouseover();'
                )
                self.execute_javascript_return_string(
                    f'$("ul#menu > li:eq({position}) .std-menu").show()'
                )
                return position, menu
            index += 1
            menu = f"{PORTAL_MENU}/li[{index}]"
        return None

    def _extend_second_level_menu(self, first_level: Tuple[int, str], category: str) -> Optional[str]:
        first_position, first_menu = first_level
        index = 1
        menu = f"{first_menu}/ul/li[{index}]"
        self.wait_for_element(f"{menu}/span")
        while self.exists_no_wait(menu):
            label = (self.get_attribute(f"{menu}/span", "innerHTML") or "").strip().split("<span")[0]
            if label.strip() == category:
                position = index - 1
                self.execute_javascript_return_string(
                    f'$("ul#menu > li:eq({first_position}) > ul > li:eq({position}) > span").mouseover();'
                )
                self.execute_javascript_return_string(
                    f'$("ul#menu > li:eq({first_position}) > ul > li:eq({position}) > span")'
                    f'.addClass("active").next().show();'
                )
                return menu
            index += 1
            menu = f"{first_menu}/ul/li[{index}]"
        return None

    def _third_level_entries(self, second_level_menu: str):
        # Entry 1 is the column heading; "sub-heading" rows are skipped
        index = 2
        entry = f"{second_level_menu}/div/div/ul/li[{index}]/a"
        self.wait_for_clickable(entry)
        while self.exists_no_wait(entry):
            yield entry
            index += 1
            row = f"{second_level_menu}/div/div/ul/li[{index}]"
            if self.exists_no_wait(row) and self.get_attribute(row, "class") == "sub-heading":
                index += 1
            entry = f"{second_level_menu}/div/div/ul/li[{index}]/a"

    def _click_third_level_menu(self, second_level_menu: str, ui_menu_name: str) -> Optional[str]:
        for entry in self._third_level_entries(second_level_menu):
            if (self.get_attribute(entry, "innerHTML") or "").strip() == ui_menu_name:
                self.click_by_javascript(entry)
                self.driver.execute_script('$("ul#menu > li .std-menu").css("display", "")')
                TimeDelay.do_pause(SettleDelay.MENU_COLLAPSE)
                return (self.get_attribute(entry, "data-menuid") or "").strip()
        return None

    def open_specific_ui(
        self,
        application_full_name: str,
        category: str,
        ui_name: str,
        ui_menu_name: str,
        complete_url: str,
    ) -> Optional[Tuple[str, str]]:
        """
        Open a UI through the portal menu and switch into its iframe.

        Returns:
            (menu id, iframe id), or None if a menu level was not found
        """
        first_level = self._extend_first_level_menu(application_full_name)
        if first_level is None:
            return None
        second_level = self._extend_second_level_menu(first_level, category)
        if second_level is None:
            return None
        self.main_window = self.driver.current_window_handle
        menu_id = self._click_third_level_menu(second_level, ui_menu_name)
        tenant_and_ui = extract_tenant_and_ui(complete_url)
        self.wait_for_element(f"{SCREEN_LAYOUT_IFRAME}[@src='{tenant_and_ui}']")
        iframe = self.get_iframe(complete_url)
        if iframe:
            self.driver.switch_to.frame(self.find_element(iframe))
        logger.info(f"Opened UI '{ui_name}' from the portal menu (iframe {iframe})")
        return menu_id, iframe

    def navigate_to_ui(self, application_full_name: str, category: str, ui_menu_name: str) -> Optional[str]:
        """Expand the portal menu and return the locator of the UI entry."""
        first_level = self._extend_first_level_menu(application_full_name)
        if first_level is None:
            return None
        second_level = self._extend_second_level_menu(first_level, category)
        if second_level is None:
            return None
        self.main_window = self.driver.current_window_handle
        self.wait_for_element(f"{second_level}/div")
        for entry in self._third_level_entries(second_level):
            if (self.get_attribute(entry, "innerHTML") or "").strip() == ui_menu_name:
                return entry
        return None


# =============================================================================
# URL helpers
# =============================================================================

def extract_tenant_and_ui(complete_url: str) -> str:
    """
    Reduce a complete UI URL to "/tenant/app/ui".

    Example:
        >>> extract_tenant_and_ui("https://erp01/TENANT1/app/OE1100")
        '/TENANT1/app/OE1100'
    """
    parts = complete_url.split("/")
    return "/" + "/".join(parts[3:6])


def format_telephone_number(digits: str) -> str:
    """
    Format typed digits the way the telephone mask renders them.

    Examples:
        >>> format_telephone_number("604")
        '(604'
        >>> format_telephone_number("6045551234")
        '(604) 555-1234'
    """
    if len(digits) <= 3:
        return "(" + digits
    if len(digits) <= 6:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"


__all__ = [
    "AlertState",
    "Browser",
    "ImageMatcher",
    "extract_tenant_and_ui",
    "format_telephone_number",
    "to_by",
]
