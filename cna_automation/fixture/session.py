"""
================================================================================
UI Session
================================================================================

Opens one CNA2.0 UI for a parsed layout map: portal sign-in, opening the UI
by its URL or through the portal menu, and the legacy sign-on page.

URLs:
    portal base     http(s)://server
    after sign-in   http(s)://server/TENANT/Core/Home
    complete UI URL http(s)://server/TENANT + FixtureProperties.get_url()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from cna_automation.common import get_config
from cna_automation.fixture.configuration import FixtureProperties
from cna_automation.timing import POLL_POLICIES, poll_until
from cna_automation.widgets.controls import Button, PasswordTextBox, TextBox


USER_ID_TEXT_BOX = "AccpacSignonPage_userIDTextBox"
PASSWORD_TEXT_BOX = "AccpacSignonPage_passwordTextBox"
SIGN_IN_BUTTON = "AccpacSignonPage_signinButton"


def build_complete_url(current_url: str, ui_path: str) -> str:
    """
    Combine the scheme, host and tenant of ``current_url`` with a UI path.

    Example:
        >>> build_complete_url("https://erp01/TENANT1/Core/Home", "/OE/OE1100")
        'https://erp01/TENANT1/OE/OE1100'
    """
    parts = current_url.split("/")
    return f"{parts[0]}//{parts[2]}/{parts[3]}{ui_path}"


class UiSession:
    """
    Session lifecycle of one UI.

    Attributes:
        properties: Parsed layout map of the UI
        home_url: URL reached after the portal sign-in
        menu_id: Portal menu id of the UI when opened through the menu
    """

    def __init__(self, properties: FixtureProperties):
        self.properties = properties
        self.browser = properties.browser
        self.home_url: Optional[str] = None
        self.menu_id: Optional[str] = None
        self.sign_in_button = Button(SIGN_IN_BUTTON, self.browser)
        self.user_text_box = TextBox(USER_ID_TEXT_BOX, self.browser)
        self.password_text_box = PasswordTextBox(PASSWORD_TEXT_BOX, self.browser)

    @property
    def validation_element(self) -> str:
        return self.properties.sign_in_validation_element

    def get_complete_url(self) -> str:
        return build_complete_url(self.browser.current_url, self.properties.get_url())

    # =========================================================================
    # Portal
    # =========================================================================

    def open_portal(self, user: str, password: str) -> bool:
        self.home_url = self.browser.sign_in_to_portal(user, password)
        return self.properties.get_url() in self.browser.current_url

    def open_ui_by_url(self, user: str, password: str) -> bool:
        self.home_url = self.browser.sign_in_to_portal(user, password)
        return self.open_ui_after_sign_in_by_url()

    def open_ui_by_url_with_session_date(self, user: str, password: str, session_date: str) -> bool:
        self.home_url = self.browser.sign_in_to_portal_with_session_date(user, password, session_date)
        return self.open_ui_after_sign_in_by_url()

    def open_ui_after_sign_in_by_url(self) -> bool:
        self.browser.open_ui_by_full_url(self.get_complete_url())
        ready = self.browser.wait_for_ui_ready(self.validation_element)
        if not ready and "Error" in self.browser.current_url:
            logger.error(f"UI '{self.properties.ui_name}' opened on an error page; closing the browser")
            self.browser.close()
        return ready

    def open_ui_by_menus(self, user: str, password: str) -> bool:
        self.home_url = self.browser.sign_in_to_portal(user, password)
        return self.open_ui_after_sign_in_by_menu()

    def open_ui_by_menus_with_session_date(self, user: str, password: str, session_date: str) -> bool:
        self.home_url = self.browser.sign_in_to_portal_with_session_date(user, password, session_date)
        return self.open_ui_after_sign_in_by_menu()

    def open_ui_after_sign_in_by_menu(self) -> bool:
        properties = self.properties
        complete_url = self.get_complete_url()
        self.browser.switch_to_default_content()
        opened = self.browser.open_specific_ui(
            properties.application_full_name,
            properties.category,
            properties.ui_name,
            properties.ui_menu_name,
            complete_url,
        )
        if opened is None:
            logger.error(
                f"UI '{properties.ui_name}' not found in the portal menu "
                f"({properties.application_full_name} > {properties.category} > {properties.ui_menu_name})"
            )
            return False
        self.menu_id, properties.iframe = opened
        return self.browser.wait_for_ui_ready(self.validation_element)

    # =========================================================================
    # Sign-on page
    # =========================================================================

    def open_page(self) -> None:
        self.browser.open_url_without_url_validation(self.properties.get_url())

    def open(self, url_parameters: Optional[str] = None) -> bool:
        """
        Open the UI page directly.

        Without parameters waits for the sign-in validation element, with
        parameters waits for the sign-in button of the sign-on page.
        """
        if url_parameters is None:
            self.open_page()
            return self.browser.wait_for_element(self.validation_element)
        return self.browser.open_url_and_wait_for(self.properties.get_url() + url_parameters, SIGN_IN_BUTTON)

    def sign_in(self, user: Optional[str] = None, password: Optional[str] = None) -> bool:
        user = user if user is not None else get_config("session.user", "ADMIN")
        password = password if password is not None else get_config("session.password", "ADMIN")
        self.user_text_box.type(user)
        self.password_text_box.type(password)
        return self.browser.click_and_wait_for_either(SIGN_IN_BUTTON, self.validation_element, "")

    def set_user_id(self, user: str) -> bool:
        return self.user_text_box.type(user)

    def set_password(self, password: str) -> bool:
        return self.password_text_box.type(password)

    def is_sign_in_validation_element_visible(self) -> bool:
        return self.browser.is_visible(self.validation_element)

    def wait_for_sign_in_validation_element(self) -> bool:
        return poll_until(
            lambda: self.browser.exists_no_wait(self.validation_element),
            POLL_POLICIES["element"],
            f"sign-in validation element '{self.validation_element}'",
        )

    def close_ui_window(self, ui_window_id: str) -> bool:
        return self.browser.close_ui_window(ui_window_id)


__all__ = ["UiSession", "build_complete_url", "SIGN_IN_BUTTON"]
