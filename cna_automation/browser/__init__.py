"""
Browser layer: settings, the Selenium Browser collaborator and driver start-up.
"""

from cna_automation.browser.browser import (
    AlertState,
    Browser,
    ImageMatcher,
    extract_tenant_and_ui,
    format_telephone_number,
    to_by,
)
from cna_automation.browser.settings import (
    BrowserSettings,
    BrowserType,
    TestMode,
    parse_browser_spec,
)

__all__ = [
    "AlertState",
    "Browser",
    "BrowserSettings",
    "BrowserType",
    "ImageMatcher",
    "TestMode",
    "extract_tenant_and_ui",
    "format_telephone_number",
    "parse_browser_spec",
    "to_by",
]
