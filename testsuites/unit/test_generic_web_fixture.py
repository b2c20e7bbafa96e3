import pytest
from selenium.common.exceptions import InvalidSessionIdException, WebDriverException

from cna_automation.browser.browser import AlertState
from cna_automation.exceptions import ConfigurationError, UnknownWidgetError, UnsupportedOperationError
from cna_automation.fixture.generic_web_fixture import (
    PORTAL_SIGN_OUT_LINK,
    GenericWebFixture,
    fitnesse_test_path,
    portal_home_url,
    random_id,
)
from cna_automation.fixture.message_boxes import MESSAGE_BOX_LOCATORS
from cna_automation.timing import SettleDelay
from cna_automation.widgets.message_box import ACCEPT_BUTTON, CANCEL_BUTTON, DIALOG_BODY_TEXT


@pytest.fixture
def fixture(layout_file, fake_browser, timing):
    return GenericWebFixture(str(layout_file), browser=fake_browser, timing=timing)


# ================================================================================
# Construction and widget lookup
# ================================================================================

def test_construction_requires_a_layout_path(fake_browser):
    with pytest.raises(ConfigurationError, match="configuration path must be non-empty"):
        GenericWebFixture("", browser=fake_browser)


def test_construction_rejects_null_parser(layout_file, fake_browser):
    class NullParserFactory:
        def create_parser(self, browser):
            return None

    with pytest.raises(ConfigurationError, match="null configuration parser"):
        GenericWebFixture(str(layout_file), parser_factory=NullParserFactory(), browser=fake_browser)


def test_unknown_widget_on_main_form(fixture):
    with pytest.raises(UnknownWidgetError) as excinfo:
        fixture.click("postButton")

    assert str(excinfo.value) == "UI 'OE1100' does not contain widget 'postButton' on its main form."


def test_popup_form_context(fixture, fake_browser):
    fake_browser.add("txtFilter")
    fixture.switch_form_context("finder")

    assert fixture.type("filterText", "ORD0001")
    assert fake_browser.get_text("txtFilter") == "ORD0001"
    with pytest.raises(UnknownWidgetError, match="UI 'OE1100' does not contain widget 'saveButton' on its 'finder' form."):
        fixture.click("saveButton")

    fixture.switch_form_context()
    assert fixture.current_form_name == ""


def test_switch_to_missing_form(fixture):
    with pytest.raises(ValueError, match="UI 'OE1100' does not contain a popup form named 'reports'."):
        fixture.switch_form_context("reports")
    assert fixture.current_form_name == ""


def test_switch_to_child_frame(fixture, fake_browser):
    assert fixture.switch_to_child_frame("finderFrame", "finder") is False
    assert fixture.current_form_name == ""

    fake_browser.driver.switch_to.frames.append("finderFrame")
    assert fixture.switch_to_child_frame("finderFrame", "finder") is True
    assert fixture.current_form_name == "finder"


def test_change_layout_map_returns_to_main_form(fixture, layout_file, timing):
    fixture.switch_form_context("finder")

    fixture.change_layout_map(str(layout_file))

    assert fixture.current_form_name == ""
    assert timing.pauses == [SettleDelay.LAYOUT_SWITCH]


def test_unsupported_operation_reaches_the_caller(fixture):
    with pytest.raises(UnsupportedOperationError, match="'saveButton' is a 'Button' which does not support 'check'"):
        fixture.check("saveButton")


# ================================================================================
# Widget actions
# ================================================================================

def test_widget_actions_are_forwarded(fixture, fake_browser):
    fake_browser.add("btnSave")
    fake_browser.add("txtOrderNumber")
    fake_browser.add("chkOnHold")

    assert fixture.click("saveButton")
    assert fixture.type("orderNumber", "ORD000123")
    assert fixture.get_text("orderNumber") == "ORD000123"
    assert fixture.check("onHold")
    assert fixture.is_checked("onHold")
    assert fixture.uncheck("onHold")
    assert not fixture.is_checked("onHold")
    assert fixture.exists("saveButton")
    assert not fixture.exists("statusLabel")


def test_select_with_and_without_option(fixture, fake_browser):
    fake_browser.add("cboShipVia", "", options=["Courier", "Post"])

    assert fixture.select_by_idx("shipVia", 2)
    assert fixture.get_text("shipVia") == "Post"
    with pytest.raises(UnsupportedOperationError, match="does not support 'select'"):
        fixture.select("shipVia")


def test_wait_for_image_uses_default_or_given_timeout(fixture, fake_browser):
    fixture.wait_for_image("saveButton")
    fixture.wait_for_image("saveButton", 5)

    assert fake_browser.opened == ["image:btnSave:60", "image:btnSave:5"]


def test_pause_for_seconds(fixture, timing):
    with pytest.raises(ValueError, match="at least 1 second"):
        fixture.pause_for_seconds(0)

    assert fixture.pause_for_seconds(3)
    assert timing.pauses == [3000]


# ================================================================================
# Tables
# ================================================================================

def test_table_columns_by_widget_name_and_index(fixture, order_grid):
    by_widget = fixture.get_cell_text("detailGrid", "itemColumn", 3)
    by_name = fixture.get_cell_text_by_column_name("detailGrid", "Item Number", 3)
    by_index = fixture.get_cell_text_by_column_idx("detailGrid", 3, 2)

    assert by_widget == by_name == by_index == "A1-310/0"
    assert fixture.get_header_cell_text("detailGrid", "quantityColumn") == "Quantity"
    assert fixture.get_header_cell_text_by_idx("detailGrid", 2) == "Item Number"


def test_delete_table_lines(fixture, fake_browser, order_grid, timing):
    def grid_refreshes():
        order_grid.pager.items.text = "1 - 2 of 2 items"

    fake_browser.add("btnDeleteLines", on_click=grid_refreshes)
    fake_browser.add(MESSAGE_BOX_LOCATORS["Confirmation"])
    fake_browser.add(DIALOG_BODY_TEXT, "Delete the selected lines?")
    fake_browser.add(ACCEPT_BUTTON)
    fixture.select_lines_for_delete("detailGrid", "2,4")

    assert fixture.delete_table_lines("detailGrid", "deleteLines", "Delete") is True
    assert SettleDelay.DELETE_REFRESH in timing.pauses


def test_delete_table_lines_cancelled(fixture, fake_browser, order_grid):
    fake_browser.add("btnDeleteLines")
    fake_browser.add(MESSAGE_BOX_LOCATORS["Confirmation"])
    fake_browser.add(CANCEL_BUTTON)
    fixture.select_lines_for_delete("detailGrid", "1")

    assert fixture.delete_table_lines("detailGrid", "deleteLines", "Cancel") is True
    assert fake_browser.clicked[-1] == CANCEL_BUTTON


def test_delete_table_lines_rejects_other_answers(fixture, fake_browser, order_grid):
    assert fixture.delete_table_lines("detailGrid", "deleteLines", "Remove") is False
    assert fake_browser.clicked == []


# ================================================================================
# Session
# ================================================================================

def test_open_ui_captures_tenant(fixture, fake_browser):
    fake_browser.add("btnSave")

    assert fixture.open_ui("ADMIN", "ADMIN", "Yes")
    assert fixture.tenant_info == "TENANT1"


def test_open_ui_by_menu(fixture, fake_browser):
    fake_browser.add("btnSave")

    assert fixture.open_ui("ADMIN", "ADMIN", "No")
    assert fixture.properties.iframe == "iframe_OE1100"


def test_close_waits_for_pending_requests(fixture, fake_browser, timing):
    assert fixture.close()

    assert timing.pauses == [SettleDelay.BEFORE_CLOSE]
    assert fake_browser.close_forced is False


def test_forced_close(fixture, fake_browser, timing):
    assert fixture.close("Force")

    assert timing.pauses == []
    assert fake_browser.close_forced is True


def test_logout_from_portal(fixture, fake_browser):
    fake_browser.add(PORTAL_SIGN_OUT_LINK)

    assert fixture.logout_from_portal() is True
    assert fake_browser.elements[PORTAL_SIGN_OUT_LINK].clicks == 1
    assert fake_browser.closed


def test_logout_with_unexpected_alert_fails(fixture, fake_browser):
    fake_browser.add(PORTAL_SIGN_OUT_LINK)
    fake_browser.alert_state = AlertState.PRESENT

    assert fixture.logout_from_portal() is False


def test_logout_with_expected_alert(fixture, fake_browser):
    fake_browser.add(PORTAL_SIGN_OUT_LINK)

    assert fixture.logout_from_portal_with_alert() is False
    fake_browser.alert_state = AlertState.PRESENT
    assert fixture.logout_from_portal_with_alert() is True


def test_logout_after_session_loss_counts_as_success(fixture, fake_browser, monkeypatch):
    def session_gone(*args, **kwargs):
        raise InvalidSessionIdException("invalid session id")

    monkeypatch.setattr(fake_browser, "find_element_no_wait", session_gone)

    assert fixture.logout_from_portal() is True


def test_logout_failure_still_closes_browser(fixture, fake_browser):
    # Sign-out link missing
    assert fixture.logout_from_portal() is False
    assert fake_browser.closed


def test_logout_and_close_by_url_goes_through_portal_home(fixture, fake_browser, timing):
    fake_browser.current_url = "https://erp01/TENANT1/OE/OE1100"
    fake_browser.add(PORTAL_SIGN_OUT_LINK)

    assert fixture.logout_and_close("Yes") is True
    assert fake_browser.opened[0] == "https://erp01/TENANT1/Core/Home"
    assert timing.pauses[0] == SettleDelay.PORTAL_HOME


def test_logout_and_close_driver_failure(fixture, fake_browser, monkeypatch):
    def broken(*args, **kwargs):
        raise WebDriverException("chrome not reachable")

    monkeypatch.setattr(fake_browser, "switch_to_default_content", broken)

    assert fixture.logout_and_close("No") is False
    assert fake_browser.closed


# ================================================================================
# Helpers
# ================================================================================

def test_random_id():
    assert len(random_id(8)) == 8
    assert random_id(8) != random_id(8)


def test_get_random_id_casing(fixture):
    assert len(fixture.get_random_id(6)) == 6
    upper = fixture.get_random_id(12, "UPPERCASE")
    assert len(upper) == 12
    assert upper == upper.upper()
    # Lower case is upper-cased as well
    lower = fixture.get_random_id(12, "LOWERCASE")
    assert lower == lower.upper()
    with pytest.raises(ValueError, match='either "UPPERCASE" or "LOWERCASE"'):
        fixture.get_random_id(6, "CamelCase")


@pytest.mark.parametrize(
    "current_url, tenant, expected",
    [
        ("https://erp01/TENANT1/OE/OE1100", None, "https://erp01/TENANT1/Core/Home"),
        ("https://erp01/WebForms/ReportViewer.aspx?token=1", "TENANT1", "https://erp01/TENANT1/Core/Home"),
        ("https://erp01/WebForms/ReportViewer.aspx?token=1", None, "https://erp01/WebForms/Core/Home"),
    ],
)
def test_portal_home_url(current_url, tenant, expected):
    assert portal_home_url(current_url, tenant) == expected


def test_fitnesse_test_path(fixture):
    assert fitnesse_test_path("FrontPage.OrderEntry.OE1100\\case01") == "FrontPage\\OrderEntry\\OE1100\\"
    assert fixture.get_fitnesse_test_path("Suite.Test") == "Suite\\Test\\"
