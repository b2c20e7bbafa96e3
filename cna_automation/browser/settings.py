"""
================================================================================
Browser Settings
================================================================================

Server, port, browser type and timeout settings for a browser session.

Features:
    - Specification strings ("browser=chrome, server=erp01 and port=443")
    - Defaults from config.yaml / SWT_AUTOMATION_* environment variables
    - Base URL derivation (https when the port is 443)
    - Test mode detection (ANT for non-default ports, DEPLOYED otherwise)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional

from cna_automation.common import get_config


BROWSER_SETTING = "browser"
SERVER_SETTING = "server"
PORT_SETTING = "port"
PERMITTED_SETTINGS = (BROWSER_SETTING, SERVER_SETTING, PORT_SETTING)

DEFAULT_PORTS = ("80", "443")


class BrowserType(Enum):
    """Supported browser engines."""
    CHROME = "chrome"
    FIREFOX = "firefox"
    EDGE = "edge"
    INTERNET_EXPLORER = "internet_explorer"

    @classmethod
    def from_name(cls, name: str) -> "BrowserType":
        """
        Resolve a browser type from a case-insensitive name.

        Raises:
            ValueError: If no browser of that type exists
        """
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"There is no browser of type '{name}'") from None


class TestMode(Enum):
    """Whether the target is a developer build (ANT) or a deployed server."""
    # Not a test class
    __test__ = False

    ANT = "ant"
    DEPLOYED = "deployed"


def parse_browser_spec(
    specification: str,
    permitted: Iterable[str] = PERMITTED_SETTINGS,
) -> Dict[str, str]:
    """
    Parse a browser specification string into settings.

    Items are separated by a comma or by the word "and"; each item is
    ``key=value`` or ``key is value``.

    Args:
        specification: e.g. "browser=chrome, server=erp01 and port=443"
        permitted: Accepted (lower-case) keys

    Returns:
        Mapping of lower-case key to value

    Raises:
        ValueError: If an item uses a key that is not permitted
    """
    permitted = list(permitted)
    result: Dict[str, str] = {}
    for pair in re.split(r",\s*|\s+and\s+", specification.strip()):
        if not pair:
            continue
        parts = re.split(r"\s*=\s*|\s+is\s+", pair, maxsplit=1)
        key = parts[0].strip().lower()
        if key not in permitted or len(parts) < 2:
            if len(permitted) > 1:
                valid = ", ".join(permitted[:-1]) + " and " + permitted[-1]
            else:
                valid = "".join(permitted)
            raise ValueError(
                f"The setting '{parts[0]}' in the specification '{specification}' "
                f"is not valid.  Valid values are: {valid}"
            )
        result[key] = parts[1].strip()
    return result


@dataclass(frozen=True)
class BrowserSettings:
    """
    Immutable settings for one browser session.

    Attributes:
        server: Host name of the CNA2.0 server
        port: Optional port as a string (None when not configured)
        browser_type: Browser engine to start
        default_timeout: General wait bound (ms)
        small_timeout: Short wait bound (ms)
        large_timeout: Long wait bound (ms)
        default_interval: Poll interval (ms)
    """
    server: str = "localhost"
    port: Optional[str] = None
    browser_type: BrowserType = BrowserType.CHROME
    default_timeout: int = 300000
    small_timeout: int = 30000
    large_timeout: int = 3600000
    default_interval: int = 50

    @property
    def base_url(self) -> str:
        scheme = "https" if self.port == "443" else "http"
        return f"{scheme}://{self.server}"

    @property
    def test_mode(self) -> TestMode:
        if self.port is not None and self.port not in DEFAULT_PORTS:
            return TestMode.ANT
        return TestMode.DEPLOYED

    @classmethod
    def from_config(cls, overrides: Optional[Dict[str, str]] = None) -> "BrowserSettings":
        """
        Build settings from explicit overrides, then config.yaml / environment.

        Args:
            overrides: Values from a specification string (keys: browser, server, port)
        """
        overrides = overrides or {}
        port = overrides.get(PORT_SETTING) or get_config("browser.port")
        return cls(
            server=overrides.get(SERVER_SETTING) or str(get_config("browser.server", "localhost")),
            port=str(port) if port not in (None, "") else None,
            browser_type=BrowserType.from_name(
                overrides.get(BROWSER_SETTING) or str(get_config("browser.type", "chrome"))
            ),
            default_timeout=get_config("timeouts.default_ms", 300000),
            small_timeout=get_config("timeouts.small_ms", 30000),
            large_timeout=get_config("timeouts.large_ms", 3600000),
            default_interval=get_config("timeouts.interval_ms", 50),
        )

    @classmethod
    def from_spec(cls, specification: str) -> "BrowserSettings":
        """Build settings from a specification string such as "server=erp01, port=443"."""
        return cls.from_config(parse_browser_spec(specification))


__all__ = [
    "BrowserType",
    "TestMode",
    "BrowserSettings",
    "parse_browser_spec",
]
