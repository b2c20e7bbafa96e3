"""
Kendo confirmation dialog.

Every delete opens a fresh dialog with the same ids while the old ones stay
in the DOM hidden, so the visible one is addressed as the first sibling
after the ``k-overlay`` mask.
"""

from __future__ import annotations

from typing import Optional

from cna_automation.widgets.controls import Widget


VISIBLE_DIALOG = "//div[@class='k-overlay']/following-sibling::*[1]"
ACCEPT_BUTTON = f"{VISIBLE_DIALOG}//input[@id='kendoConfirmationAcceptButton']"
CANCEL_BUTTON = f"{VISIBLE_DIALOG}//input[@id='kendoConfirmationCancelButton']"
DIALOG_BODY_TEXT = f"{VISIBLE_DIALOG}//div[@id='body-text']"
BUTTON_CLICKABLE_SECONDS = 10

ACCEPT_RESPONSES = ("ok", "yes", "delete", "print")
CANCEL_RESPONSES = ("cancel", "no")


def response_button_locator(response: str) -> Optional[str]:
    """Accept/cancel button for a dialog response, None when it maps to neither."""
    if response.lower() in ACCEPT_RESPONSES:
        return ACCEPT_BUTTON
    if response.lower() in CANCEL_RESPONSES:
        return CANCEL_BUTTON
    return None


class MessageBox(Widget):

    @property
    def message_type(self) -> str:
        return self._locator

    def click_response_button(self, response: str) -> bool:
        """
        Press the dialog button that answers ``response``.

        Raises:
            ValueError: If the dialog has no such button on screen
        """
        button = response_button_locator(response)
        if button is None:
            return False
        if not self._browser.exists(button):
            raise ValueError("Cannot find the button pattern with the Message Dialog.")
        self._browser.wait_for_clickable(button, BUTTON_CLICKABLE_SECONDS)
        return self._browser.click_by_return(button)

    def get_message_description(self) -> str:
        return self._browser.get_text(DIALOG_BODY_TEXT)


__all__ = [
    "MessageBox",
    "ACCEPT_BUTTON",
    "CANCEL_BUTTON",
    "DIALOG_BODY_TEXT",
    "VISIBLE_DIALOG",
    "response_button_locator",
]
