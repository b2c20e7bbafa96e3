"""
================================================================================
Message Boxes
================================================================================

Waits and actions for the CNA2.0 message boxes and the Kendo confirmation
dialog.

Each message box type has exactly one locator; only one box is expected on
screen at a time. An unknown type has no locator and every wait on it
returns False.

Waits:
    - appear            30 x 1 s (Browser.wait_for_element)
    - disappear         15 x 1 s, not displayed
    - success disappear appear (15 x 1 s), then disappear (15 x 1 s); success
                        banners close themselves after a few seconds
    - loading image     15 x 1 s for the ajax spinner to hide

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from loguru import logger
from selenium.common.exceptions import NoSuchElementException

from cna_automation.browser.browser import SPINNER_ID
from cna_automation.exceptions import StopTestException
from cna_automation.timing import POLL_POLICIES, BrowserTiming, PollPolicy, SettleDelay, poll_until
from cna_automation.widgets.message_box import (
    DIALOG_BODY_TEXT,
    MessageBox,
    VISIBLE_DIALOG,
    response_button_locator,
)


MESSAGE_BOX_LOCATORS: Dict[str, str] = {
    "Success": "//div[@id='success']",
    "successInReversing": "//div[@id='windowSuccess']",
    "Error": "//div[@id='message']",
    "Popup": "//div[@id='messagePopup']",
    "inProcessing": "//div[@id='messageDiv']",
    "processingResult": "//div[@id='processingResultGrid']",
    "importResult": "//div[@id='importResultMessageDiv']",
    "exportResult": "//div[@id='exportResultMessageDiv']",
    "Confirmation": f"{VISIBLE_DIALOG}//div[@id='deleteConfirmation']",
}

# Message boxes that dismiss themselves
SELF_CLOSING_TYPES = ("Success", "successInReversing")

ERROR_TEXT_SUFFIX = "/div/div[2]"
ERROR_LIST = "//div[@id='message']/div/div[2]/ul"
CONFIRMATION_TEXT = "//div[@id='body-text']"

ERROR_CLOSE_ICON = "//span[@class='icon msgCtrl-close']"
CONFIRMATION_CLOSE_ICON = f"{VISIBLE_DIALOG}/div[1]/div/a/span[@class='k-icon k-i-close']"
WINDOW_CLOSE_ICON = "//span[@class='k-icon k-i-close']"

CONFIRMATION_CLICKABLE_SECONDS = 15
MESSAGE_DIALOG_TIMEOUT_SECONDS = 60


class MessageDialogResponse(Enum):
    """Buttons a message dialog can be answered with."""
    NO = "No"
    OK = "OK"
    YES = "Yes"
    CANCEL = "Cancel"
    PRINT = "Print"
    DELETE = "Delete"

    @classmethod
    def from_name(cls, name: str) -> Optional["MessageDialogResponse"]:
        for response in cls:
            if response.value.lower() == name.lower():
                return response
        return None


def get_message_box_locator(message_type: str) -> str:
    """Locator for a message box type, "" when the type is unknown."""
    return MESSAGE_BOX_LOCATORS.get(message_type, "")


class MessageBoxes:
    """
    Message box wait engine bound to one browser.

    Usage:
        >>> boxes = MessageBoxes(browser, BrowserTiming())
        >>> boxes.wait_for_message_box("Error")
        False
        >>> boxes.click_confirmation_dialog_response("Delete")
        True
    """

    def __init__(self, browser, timing: Optional[BrowserTiming] = None):
        self.browser = browser
        self.timing = timing or BrowserTiming()

    def _is_displayed(self, locator: str) -> bool:
        try:
            return self.browser.find_element_no_wait(locator).is_displayed()
        except NoSuchElementException:
            return False

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_for_message_box(self, message_type: str) -> bool:
        locator = get_message_box_locator(message_type)
        if not locator:
            logger.warning(f"Unknown message box type '{message_type}'")
            return False
        return self.browser.wait_for_element(locator)

    def wait_for_message_box_disappear(self, message_type: str) -> bool:
        locator = get_message_box_locator(message_type)
        if not locator:
            logger.warning(f"Unknown message box type '{message_type}'")
            return False
        policy = POLL_POLICIES["message_box"]
        if message_type in SELF_CLOSING_TYPES:
            if not poll_until(lambda: self._is_displayed(locator), policy, f"message box '{message_type}'"):
                return False
        return poll_until(
            lambda: not self._is_displayed(locator),
            policy,
            f"message box '{message_type}' to disappear",
        )

    def wait_for_loading_image_disappear(self) -> bool:
        return poll_until(
            lambda: not self._is_displayed(SPINNER_ID),
            POLL_POLICIES["loading_image"],
            "the loading image to disappear",
        )

    def wait_for_confirmation_dialog(self) -> bool:
        return self.browser.wait_for_element(MESSAGE_BOX_LOCATORS["Confirmation"])

    def wait_for_error_message(self) -> bool:
        return self.browser.wait_for_element(MESSAGE_BOX_LOCATORS["Error"])

    def wait_for_message_dialog(
        self,
        message_type: str,
        window_text: str = "",
        timeout_seconds: Optional[int] = None,
    ) -> bool:
        """
        Wait for a message dialog to appear.

        ``message_type`` is a message box type or, failing that, the dialog
        locator itself. ``window_text`` is accepted for table compatibility
        and not compared.

        With an explicit ``timeout_seconds`` a missing dialog returns False;
        with the default one minute bound it stops the test.

        Raises:
            StopTestException: If the dialog did not appear within the default timeout
        """
        locator = get_message_box_locator(message_type) or message_type
        attempts = timeout_seconds if timeout_seconds is not None else MESSAGE_DIALOG_TIMEOUT_SECONDS
        policy = PollPolicy(attempts=max(attempts, 1), interval_ms=1000)
        appeared = poll_until(
            lambda: self.browser.exists_no_wait(locator) and self.browser.is_visible(locator),
            policy,
            f"message dialog '{message_type}'",
        )
        if not appeared and timeout_seconds is not None:
            return False
        if not appeared:
            raise StopTestException("The expected message dialog did not appear")
        return True

    # =========================================================================
    # Text
    # =========================================================================

    def get_text_from_message_box(self, message_type: str) -> str:
        if not self.wait_for_message_box(message_type):
            return ""
        locator = get_message_box_locator(message_type)
        if message_type == "Error":
            locator += ERROR_TEXT_SUFFIX
        elif message_type == "Confirmation":
            locator = CONFIRMATION_TEXT
        return self.browser.find_element_no_wait(locator).text.strip()

    def text_in_message_box_contains(self, message_type: str, text: str) -> bool:
        return text in self.get_text_from_message_box(message_type)

    def error_message_contains(self, error_information: str) -> bool:
        error_list = self.browser.get_attribute(ERROR_LIST, "innerHTML") or ""
        return error_information in error_list

    def get_message_dialog_text(self, message_type: str) -> str:
        return MessageBox(message_type, self.browser).get_message_description()

    # =========================================================================
    # Actions
    # =========================================================================

    def close_message_box(self, message_type: str) -> None:
        """Close a message box through its close icon, if the box shows up."""
        if not self.wait_for_message_box(message_type):
            return
        if message_type == "Error":
            close_icon = ERROR_CLOSE_ICON
        elif message_type == "Confirmation":
            close_icon = CONFIRMATION_CLOSE_ICON
        else:
            close_icon = WINDOW_CLOSE_ICON
        self.browser.find_element_no_wait(close_icon)
        self.browser.execute_javascript_return_string(
            f'return document.evaluate("{close_icon}", document, null, 9, null).singleNodeValue.click();'
        )
        self.timing.do_pause(SettleDelay.DIALOG_CLOSE)

    def close_popup_window(self) -> None:
        self.timing.do_pause(SettleDelay.POPUP_OPEN)
        self.browser.click(CONFIRMATION_CLOSE_ICON)
        self.timing.do_pause(SettleDelay.DIALOG_CLOSE)

    def click_confirmation_dialog_response(self, response: str) -> bool:
        self.wait_for_message_box("Confirmation")
        button = response_button_locator(response)
        if button is None:
            return False
        self.browser.wait_for_clickable(button, CONFIRMATION_CLICKABLE_SECONDS)
        success = self.browser.click_by_return(button)
        self.timing.do_pause(SettleDelay.CONFIRMATION_RESPONSE)
        return success

    def click_message_dialog_response(self, message_type: str, response: str) -> bool:
        """
        Answer a message dialog.

        Raises:
            ValueError: On an empty response or one that is not a dialog button
        """
        if not response:
            raise ValueError("The message dialog response must be non-empty.")
        dialog_response = MessageDialogResponse.from_name(response)
        if dialog_response is None:
            raise ValueError(f"Message dialog button '{response}' is invalid.")
        return MessageBox(message_type, self.browser).click_response_button(dialog_response.value)

    def wait_for_confirmation_text(self, seconds: int = 10) -> bool:
        return self.browser.wait_for_presence(DIALOG_BODY_TEXT, seconds)


__all__ = [
    "MESSAGE_BOX_LOCATORS",
    "MessageBoxes",
    "MessageDialogResponse",
    "get_message_box_locator",
]
