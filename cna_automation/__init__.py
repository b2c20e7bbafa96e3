"""
================================================================================
CNA Automation
================================================================================

Selenium fixture layer that lets FitNesse test tables drive the CNA2.0 web UI.

Modules:
    - common: Shared configuration and logging utilities
    - browser: Browser settings, the Selenium Browser collaborator, driver start-up
    - widgets: Driver widgets for the Kendo controls, grids and dialogs
    - fixture: Layout map parsing, widget capability model and the test-table façade

Example:
    from cna_automation.fixture import GenericWebFixture

    fixture = GenericWebFixture("LayoutMaps/web/OE1100.xml", "browser=chrome, server=erp01")
    fixture.open_ui("ADMIN", "ADMIN", "Yes")
    fixture.click("saveButton")
    fixture.logout_and_close("Yes")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "browser",
    "common",
    "fixture",
    "widgets",
]
