import pytest

from cna_automation.common import GlobalConfig
from cna_automation.fixture.configuration import ConfigurationParserFactory
from cna_automation.fixture.session import SIGN_IN_BUTTON, UiSession, build_complete_url


@pytest.fixture
def session(fake_browser, layout_file):
    properties = ConfigurationParserFactory().create_parser(fake_browser).parse(str(layout_file))
    return UiSession(properties)


@pytest.mark.parametrize(
    "current_url, expected",
    [
        ("https://erp01/TENANT1/Core/Home", "https://erp01/TENANT1/OE/OE1100"),
        ("http://localhost:8080/SAMLTD/Core/Home?x=1", "http://localhost:8080/SAMLTD/OE/OE1100"),
    ],
)
def test_build_complete_url(current_url, expected):
    assert build_complete_url(current_url, "/OE/OE1100") == expected


def test_open_ui_by_url(session, fake_browser):
    fake_browser.add("btnSave")

    assert session.open_ui_by_url("ADMIN", "ADMIN") is True
    assert fake_browser.sign_ins == [("ADMIN", "ADMIN")]
    assert fake_browser.opened == ["https://erp01/TENANT1/OE/OE1100"]
    assert session.home_url == "https://erp01/TENANT1/Core/Home"


def test_open_ui_by_url_closes_browser_on_error_page(session, fake_browser):
    fake_browser.landing_url = "https://erp01/TENANT1/Core/Error"

    assert session.open_ui_by_url("ADMIN", "ADMIN") is False
    assert fake_browser.closed is True


def test_open_ui_by_url_with_session_date(session, fake_browser):
    fake_browser.add("btnSave")

    assert session.open_ui_by_url_with_session_date("ADMIN", "ADMIN", "03/31/2024")
    assert fake_browser.sign_ins == [("ADMIN", "ADMIN", "03/31/2024")]


def test_open_ui_by_menus_records_menu_and_iframe(session, fake_browser):
    fake_browser.add("btnSave")

    assert session.open_ui_by_menus("ADMIN", "ADMIN") is True
    assert session.menu_id == "menu_OE1100"
    assert session.properties.iframe == "iframe_OE1100"


def test_open_ui_by_menus_when_menu_does_not_list_the_ui(session, fake_browser):
    fake_browser.specific_ui = None

    assert session.open_ui_by_menus("ADMIN", "ADMIN") is False
    assert session.menu_id is None


def test_sign_in_uses_configured_credentials(session, fake_browser, monkeypatch):
    monkeypatch.setattr(GlobalConfig, "get", lambda self, key, default=None: f"cfg-{key}")
    fake_browser.add("AccpacSignonPage_userIDTextBox")
    fake_browser.add("AccpacSignonPage_passwordTextBox")
    fake_browser.add(SIGN_IN_BUTTON)
    fake_browser.add("btnSave")

    assert session.sign_in() is True
    assert fake_browser.get_text("AccpacSignonPage_userIDTextBox") == "cfg-session.user"
    assert fake_browser.get_text("AccpacSignonPage_passwordTextBox") == "cfg-session.password"
    assert fake_browser.clicked == [SIGN_IN_BUTTON]


def test_sign_in_with_explicit_credentials(session, fake_browser):
    fake_browser.add("AccpacSignonPage_userIDTextBox")
    fake_browser.add("AccpacSignonPage_passwordTextBox")
    fake_browser.add(SIGN_IN_BUTTON)

    # Validation element never shows up
    assert session.sign_in("USER1", "secret") is False
    assert fake_browser.get_text("AccpacSignonPage_userIDTextBox") == "USER1"


def test_open_with_url_parameters_waits_for_sign_in_button(session, fake_browser):
    fake_browser.add(SIGN_IN_BUTTON)

    assert session.open("?lang=en") is True
    assert fake_browser.opened == ["/OE/OE1100?lang=en"]


def test_wait_for_sign_in_validation_element(session, fake_browser):
    assert session.wait_for_sign_in_validation_element() is False
    fake_browser.add("btnSave")
    assert session.wait_for_sign_in_validation_element() is True
    assert session.is_sign_in_validation_element_visible() is True
