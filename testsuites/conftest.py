"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by the directory they live in.

================================================================================
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Test type markers
    config.addinivalue_line(
        "markers", "unit: Tests that run against fake browsers, no WebDriver needed"
    )
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "widget: Tests related to widget capabilities"
    )
    config.addinivalue_line(
        "markers", "table: Tests related to table and grid addressing"
    )
    config.addinivalue_line(
        "markers", "messagebox: Tests related to message boxes and dialogs"
    )
    config.addinivalue_line(
        "markers", "session: Tests related to UI sessions and sign-in"
    )
    config.addinivalue_line(
        "markers", "config: Tests related to configuration and layout maps"
    )


# Test module name fragment -> feature marker
MODULE_MARKERS = {
    "test_capabilities": "widget",
    "test_calendar": "widget",
    "test_registry": "widget",
    "test_table": "table",
    "test_message_boxes": "messagebox",
    "test_session": "session",
    "test_generic_web_fixture": "session",
    "test_config": "config",
    "test_configuration_parser": "config",
    "test_browser_settings": "config",
}


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Adds the 'unit' marker to everything under a unit directory and a
    feature marker based on the test module name.
    """
    for item in items:
        path = str(item.fspath)

        # Auto-add 'unit' marker to tests in unit directory
        if "unit" in path:
            item.add_marker(pytest.mark.unit)

        module_marker = MODULE_MARKERS.get(Path(path).stem)
        if module_marker:
            item.add_marker(getattr(pytest.mark, module_marker))


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "CNA2.0 Fixture Layer",
        "=" * 60,
        "",
    ]
