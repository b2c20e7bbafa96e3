"""
================================================================================
Fixture Exceptions
================================================================================

Error taxonomy shared by the browser, widget and fixture layers.

Argument-style failures (bad configuration, unsupported widget operations,
unknown widget names) derive from ValueError so that test tables report them
as invalid arguments.

Author: Automation Team
License: MIT
================================================================================
"""


class FixtureError(Exception):
    """Base class for all fixture layer errors."""
    pass


class ConfigurationError(FixtureError, ValueError):
    """Raised when the layout map, YAML settings or collaborators are invalid."""
    pass


class UnsupportedOperationError(FixtureError, ValueError):
    """Raised when a widget variant does not support the requested action."""

    def __init__(self, widget_name: str, friendly_type: str, operation: str):
        self.widget_name = widget_name
        self.friendly_type = friendly_type
        self.operation = operation
        super().__init__(
            f"'{widget_name}' is a '{friendly_type}' which does not support '{operation}'"
        )


class UnknownWidgetError(FixtureError, ValueError):
    """Raised when a widget name is not declared on the searched form."""

    def __init__(self, ui_name: str, widget_name: str, form_name: str = ""):
        self.ui_name = ui_name
        self.widget_name = widget_name
        self.form_name = form_name
        if form_name:
            where = f"on its '{form_name}' form."
        else:
            where = "on its main form."
        super().__init__(f"UI '{ui_name}' does not contain widget '{widget_name}' {where}")


class StopTestException(FixtureError):
    """Raised to abort the remainder of the current test case."""
    pass


__all__ = [
    "FixtureError",
    "ConfigurationError",
    "UnsupportedOperationError",
    "UnknownWidgetError",
    "StopTestException",
]
