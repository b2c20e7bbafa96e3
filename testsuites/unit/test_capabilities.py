import pytest

from cna_automation.exceptions import UnsupportedOperationError
from cna_automation.fixture.tables import TableStrategy
from cna_automation.fixture.variants import (
    ButtonStrategy,
    CheckBoxStrategy,
    ComboBoxStrategy,
    LabelStrategy,
    ListBoxStrategy,
    NumberTextBoxStrategy,
    PasswordTextBoxStrategy,
    RadioButtonStrategy,
    TabStrategy,
    TextBoxStrategy,
)
from cna_automation.fixture.widget import FixtureWidget


def make_widget(browser, strategy_class, name="widget", widget_id="ctl"):
    return FixtureWidget(name, widget_id, "OE1100_", browser, strategy_class)


def test_unsupported_operation_names_widget_variant_and_operation(fake_browser):
    button = make_widget(fake_browser, ButtonStrategy, "saveButton", "btnSave")

    with pytest.raises(UnsupportedOperationError) as excinfo:
        button.check()

    assert str(excinfo.value) == "'saveButton' is a 'Button' which does not support 'check'"
    assert excinfo.value.widget_name == "saveButton"
    assert excinfo.value.operation == "check"
    # Argument-style failure
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize(
    "strategy_class, operation, args",
    [
        (LabelStrategy, "type", ("x",)),
        (PasswordTextBoxStrategy, "type_telephone_number", ("6045551234",)),
        (CheckBoxStrategy, "click", ()),
        (RadioButtonStrategy, "uncheck", ()),
        (TabStrategy, "select_value", ("x",)),
        (TextBoxStrategy, "click_cell", (1, 1)),
        (TableStrategy, "type", ("x",)),
        (ComboBoxStrategy, "deselect_all", ()),
        (NumberTextBoxStrategy, "clear_and_validate", ("0",)),
    ],
)
def test_variant_rejects_operations_it_does_not_define(fake_browser, strategy_class, operation, args):
    widget = make_widget(fake_browser, strategy_class)

    assert not widget.supports(operation)
    with pytest.raises(UnsupportedOperationError, match=f"does not support '{operation}'"):
        getattr(widget, operation)(*args)


def test_fixture_widget_rejects_empty_inputs(fake_browser):
    with pytest.raises(ValueError, match="widget name"):
        FixtureWidget("", "btnSave", "OE1100_", fake_browser, ButtonStrategy)
    with pytest.raises(ValueError, match="widget ID"):
        FixtureWidget("saveButton", "", "OE1100_", fake_browser, ButtonStrategy)
    with pytest.raises(ValueError, match="ID base"):
        FixtureWidget("saveButton", "btnSave", "", fake_browser, ButtonStrategy)
    with pytest.raises(ValueError, match="browser"):
        FixtureWidget("saveButton", "btnSave", "OE1100_", None, ButtonStrategy)


def test_locator_is_the_plain_widget_id(fake_browser):
    widget = make_widget(fake_browser, TextBoxStrategy, "orderNumber", "txtOrderNumber")

    assert widget.locator == "txtOrderNumber"
    assert widget.wait_target_locator == "txtOrderNumber"
    assert widget.id_base == "OE1100_"
    assert widget.friendly_type == "TextBox"


def test_button_click_and_text(fake_browser):
    fake_browser.add("btnSave", "Save")
    button = make_widget(fake_browser, ButtonStrategy, "saveButton", "btnSave")

    assert button.click() is True
    assert fake_browser.clicked == ["btnSave"]
    assert button.get_text() == "Save"


def test_check_box_round_trip(fake_browser):
    fake_browser.add("chkOnHold")
    check_box = make_widget(fake_browser, CheckBoxStrategy, "onHold", "chkOnHold")

    assert check_box.check()
    assert check_box.is_checked() is True
    assert check_box.uncheck()
    assert check_box.is_checked() is False


def test_text_box_type_then_get_text(fake_browser):
    fake_browser.add("txtOrderNumber")
    text_box = make_widget(fake_browser, TextBoxStrategy, "orderNumber", "txtOrderNumber")

    assert text_box.type("ORD000123")
    assert text_box.get_text() == "ORD000123"
    assert fake_browser.typed[-1] == ("txtOrderNumber", "ORD000123", True)

    text_box.type_no_tab("ORD000124")
    assert fake_browser.typed[-1] == ("txtOrderNumber", "ORD000124", False)

    text_box.type_without_clear("5")
    assert text_box.get_text() == "ORD0001245"


def test_text_box_wait_for_content(fake_browser):
    fake_browser.add("txtOrderNumber", "ORD000123")
    text_box = make_widget(fake_browser, TextBoxStrategy, "orderNumber", "txtOrderNumber")

    assert text_box.wait_for_content("ORD000123")
    assert not text_box.wait_for_content("ORD999999")


def test_number_text_box_clicks_its_wrapper(fake_browser):
    fake_browser.add("numQuantity")
    fake_browser.add("//input[@id='numQuantity']/..")
    number_box = make_widget(fake_browser, NumberTextBoxStrategy, "quantity", "numQuantity")

    assert number_box.click()
    assert fake_browser.clicked == ["//input[@id='numQuantity']/.."]


def test_number_text_box_type_then_get_text(fake_browser):
    fake_browser.add("numQuantity")
    fake_browser.add("//input[@id='numQuantity']/..")
    number_box = make_widget(fake_browser, NumberTextBoxStrategy, "quantity", "numQuantity")

    assert number_box.type("12")
    assert number_box.get_text() == "12"

    number_box.type_no_tab("15")
    assert fake_browser.typed[-1] == ("numQuantity", "15", False)


@pytest.mark.parametrize(
    "operation, tab",
    [
        ("type_by_javascript", False),
        ("type_with_ctrl_a_del", True),
        ("type_without_wait_for_clickable", True),
    ],
)
def test_number_text_box_types_into_its_input(fake_browser, operation, tab):
    fake_browser.add("numQuantity")
    number_box = make_widget(fake_browser, NumberTextBoxStrategy, "quantity", "numQuantity")

    assert getattr(number_box, operation)("7")
    assert fake_browser.typed[-1] == ("numQuantity", "7", tab)


def test_password_text_box_type_then_get_text(fake_browser):
    fake_browser.add("txtPassword", attributes={"placeholder": "Password"})
    password_box = make_widget(fake_browser, PasswordTextBoxStrategy, "password", "txtPassword")

    assert password_box.type("s3cret")
    assert password_box.get_text() == "s3cret"
    assert password_box.get_place_holder_text() == "Password"

    assert password_box.type_with_ctrl_a_del("n3w")
    assert password_box.get_text() == "n3w"


def test_label_falls_back_to_inner_html(fake_browser):
    fake_browser.add("lblStatus", "", attributes={"innerHTML": "&nbsp;Open"})
    label = make_widget(fake_browser, LabelStrategy, "statusLabel", "lblStatus")

    assert label.get_text() == "&nbsp;Open"


def test_combo_box_select_by_index_validates_selection(fake_browser):
    fake_browser.add("cboShipVia", "", options=["Courier", "Post", "Pickup"])
    combo_box = make_widget(fake_browser, ComboBoxStrategy, "shipVia", "cboShipVia")

    assert combo_box.select_by_index(2)
    assert combo_box.get_text() == "Post"
    assert not combo_box.select_by_index(4)


def test_combo_box_rejects_option_it_does_not_offer(fake_browser):
    fake_browser.add("cboShipVia", "Courier", options=["Courier", "Post"])
    combo_box = make_widget(fake_browser, ComboBoxStrategy, "shipVia", "cboShipVia")

    assert combo_box.select_value("Freight") is False
    # Opened once by script, closed again by a native click
    assert fake_browser.clicked == ["cboShipVia", "cboShipVia"]


def test_get_all_options_wraps_driver_failures(fake_browser):
    combo_box = make_widget(fake_browser, ComboBoxStrategy, "shipVia", "cboMissing")

    with pytest.raises(ValueError, match="Could not get the options for widget 'shipVia'"):
        combo_box.get_all_options()


def test_list_box_selection(fake_browser):
    fake_browser.add("lstWarehouses", options=["WH1", "WH2", "WH3"])
    list_box = make_widget(fake_browser, ListBoxStrategy, "warehouses", "lstWarehouses")

    assert list_box.select_value("WH1")
    assert list_box.select_value("WH3")
    assert list_box.get_selected_options() == ["WH1", "WH3"]
    assert list_box.get_text() == "WH1,WH3"

    assert list_box.deselect("WH1")
    assert list_box.get_selected_options() == ["WH3"]
    assert list_box.select_all()
    assert list_box.get_all_options() == ["WH1", "WH2", "WH3"]
    assert list_box.deselect_all()
    assert list_box.get_text() == ""


def test_radio_button_select(fake_browser):
    fake_browser.add("rdoCash")
    radio = make_widget(fake_browser, RadioButtonStrategy, "cash", "rdoCash")

    assert not radio.is_selected()
    assert radio.select()
    assert radio.is_selected()


def test_tab_select_waits_for_its_panel(fake_browser):
    fake_browser.add("tabTaxes", attributes={"aria-controls": "pnlTaxes"})
    fake_browser.add("pnlTaxes", attributes={"aria-expanded": "true"})
    fake_browser.add("tabTotals", attributes={"aria-controls": "pnlTotals"})
    fake_browser.add("pnlTotals", attributes={"aria-expanded": "false"})

    taxes = make_widget(fake_browser, TabStrategy, "taxesTab", "tabTaxes")
    totals = make_widget(fake_browser, TabStrategy, "totalsTab", "tabTotals")

    assert taxes.select() is True
    assert totals.is_selected() is False


def test_common_operations_work_on_every_variant(fake_browser):
    fake_browser.add("btnSave", attributes={"disabled": "true"})
    button = make_widget(fake_browser, ButtonStrategy, "saveButton", "btnSave")

    assert button.exists()
    assert button.is_visible()
    assert button.is_disabled()
    assert button.wait_until_disabled()
    assert not button.wait_until_enabled()
    assert button.wait_for()
    assert not button.wait_for_not_visible()


def test_wait_until_enabled_gives_up_after_fifteen_attempts(fake_browser, no_pause):
    fake_browser.add("btnPost", attributes={"disabled": "true"})
    button = make_widget(fake_browser, ButtonStrategy, "postButton", "btnPost")

    assert button.wait_until_enabled() is False
    assert no_pause == [1000] * 14
