"""
================================================================================
Driver Factory
================================================================================

Starts a local Selenium WebDriver for a BrowserSettings object and wraps it
in a Browser. Driver binaries are resolved by Selenium itself.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger
from selenium import webdriver

from cna_automation.browser.browser import Browser, ImageMatcher
from cna_automation.browser.settings import BrowserSettings, BrowserType
from cna_automation.common import get_config


# Default launch arguments shared by Chromium based browsers
DEFAULT_CHROMIUM_ARGUMENTS = [
    "--ignore-certificate-errors",
    "--start-maximized",
    "--disable-popup-blocking",
]


def start_driver(settings: BrowserSettings, headless: Optional[bool] = None) -> Any:
    """
    Launch the WebDriver selected by ``settings.browser_type``.

    Args:
        settings: Browser settings (type decides the driver class)
        headless: Override of the ``browser.headless`` config value

    Returns:
        A started selenium WebDriver
    """
    if headless is None:
        headless = get_config("browser.headless", False)

    browser_type = settings.browser_type
    if browser_type == BrowserType.FIREFOX:
        options = webdriver.FirefoxOptions()
        if headless:
            options.add_argument("-headless")
        driver = webdriver.Firefox(options=options)
    elif browser_type == BrowserType.EDGE:
        options = webdriver.EdgeOptions()
        for argument in DEFAULT_CHROMIUM_ARGUMENTS:
            options.add_argument(argument)
        if headless:
            options.add_argument("--headless=new")
        driver = webdriver.Edge(options=options)
    elif browser_type == BrowserType.INTERNET_EXPLORER:
        driver = webdriver.Ie(options=webdriver.IeOptions())
    else:
        options = webdriver.ChromeOptions()
        for argument in DEFAULT_CHROMIUM_ARGUMENTS:
            options.add_argument(argument)
        if headless:
            options.add_argument("--headless=new")
        driver = webdriver.Chrome(options=options)

    logger.debug(
        f"Browser started: {browser_type.value} (headless={headless}, base url={settings.base_url})"
    )
    return driver


def create_browser(
    settings: Optional[BrowserSettings] = None,
    image_matcher: Optional[ImageMatcher] = None,
    **driver_options: Any,
) -> Browser:
    """Start a driver and return the Browser wrapping it."""
    settings = settings or BrowserSettings.from_config()
    return Browser(start_driver(settings, **driver_options), settings, image_matcher)


__all__ = ["start_driver", "create_browser"]
