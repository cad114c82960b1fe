from wikiapp.common import SettingsSummary, UserSummary, bind_form


def test_settings_defaults_are_valid():
    summary = SettingsSummary()
    assert summary.markup_type == "Creole"
    assert set(summary.web_settings()).isdisjoint(summary.site_settings())


def test_settings_blank_fields():
    summary, errors = bind_form(SettingsSummary, {"site_url": "", "theme": " "})
    assert summary is None
    assert set(errors) == {"site_url", "theme"}
    assert errors["theme"] == ["This field is required"]


def test_new_user_requires_password():
    summary, errors = bind_form(UserSummary, {"new_username": "someone@example.com"})
    assert summary is None
    assert errors == {"General": ["A password is required for new users"]}


def test_existing_user_without_password():
    summary, errors = bind_form(UserSummary, {
        "existing_username": "old@example.com",
        "new_username": " new@example.com ",
    })
    assert errors == {}
    assert not summary.is_new
    assert summary.new_username == "new@example.com"
    assert summary.username_has_changed


def test_unchanged_username():
    summary, _ = bind_form(UserSummary, {
        "existing_username": "same@example.com",
        "new_username": "same@example.com",
        "password": "longenough",
        "password_confirmation": "longenough",
    })
    assert not summary.username_has_changed


def test_username_required():
    _, errors = bind_form(UserSummary, {"password": "longenough", "password_confirmation": "longenough"})
    assert errors == {"General": ["The username is required"]}
