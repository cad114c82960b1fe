import pytest

from wikiapp.common import get_security_manager, get_settings_manager
from wikiapp.services.security_service import SecurityError
from tests.conftest import ADMIN_EMAIL


def new_user(email, password="secret-pw", confirmation=None):
    return {
        "existing_username": "",
        "new_username": email,
        "password": password,
        "password_confirmation": password if confirmation is None else confirmation,
    }


def test_users_lists_admins_and_editors(admin_client):
    body = admin_client.get("/Settings/Users").json()
    assert body["view"] == "Users"

    admins, editors = body["model"]
    assert ADMIN_EMAIL in admins
    assert body["action"] is None


def test_add_admin(admin_client):
    response = admin_client.post("/Settings/AddAdmin", data=new_user("new-admin@example.com"), follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/Settings/Users"

    admins, editors = admin_client.get("/Settings/Users").json()["model"]
    assert "new-admin@example.com" in admins
    assert "new-admin@example.com" not in editors


def test_add_admin_invalid_reopens_dialog(admin_client):
    body = admin_client.post("/Settings/AddAdmin", data=new_user("bad-admin@example.com", confirmation="other")).json()
    assert body["action"] == "addadmin"
    assert body["errors"]["General"] == ["The passwords do not match"]

    admins, _ = body["model"]
    assert "bad-admin@example.com" not in admins

    # 只在下一个请求中有效
    body = admin_client.get("/Settings/Users").json()
    assert body["action"] is None
    assert body["errors"] == {}


def test_add_existing_admin_raises(admin_client):
    with pytest.raises(SecurityError):
        admin_client.post("/Settings/AddAdmin", data=new_user(ADMIN_EMAIL))


def test_add_editor(admin_client):
    body = admin_client.post("/Settings/AddEditor", data=new_user("new-editor@example.com")).json()
    assert body["errors"] == {}

    admins, editors = body["model"]
    assert "new-editor@example.com" in editors
    assert "new-editor@example.com" not in admins


def test_add_editor_short_password(admin_client):
    body = admin_client.post("/Settings/AddEditor", data=new_user("short@example.com", password="abc")).json()
    assert body["action"] == "addeditor"
    assert body["errors"]["General"] == ["The password must be at least 6 characters"]


def test_add_existing_editor_is_model_error(admin_client):
    admin_client.post("/Settings/AddEditor", data=new_user("twice@example.com"))
    body = admin_client.post("/Settings/AddEditor", data=new_user("twice@example.com")).json()

    assert body["action"] is None
    assert body["errors"]["General"] == ["The user twice@example.com already exists"]


def test_edit_user_renames(admin_client):
    admin_client.post("/Settings/AddEditor", data=new_user("rename-me@example.com"))

    data = {"existing_username": "rename-me@example.com", "new_username": "renamed@example.com"}
    body = admin_client.post("/Settings/EditUser", data=data).json()
    assert body["errors"] == {}

    _, editors = body["model"]
    assert "renamed@example.com" in editors
    assert "rename-me@example.com" not in editors


def test_edit_user_changes_password(admin_client):
    manager = get_security_manager()
    admin_client.post("/Settings/AddEditor", data=new_user("repass@example.com"))

    data = {
        "existing_username": "repass@example.com",
        "new_username": "repass2@example.com",
        "password": "changed-pw",
        "password_confirmation": "changed-pw",
    }
    admin_client.post("/Settings/EditUser", data=data)

    assert admin_client.portal.call(manager.authenticate, "repass2@example.com", "changed-pw") is not None
    assert admin_client.portal.call(manager.authenticate, "repass2@example.com", "secret-pw") is None


def test_edit_user_without_existing_username(admin_client):
    data = {"existing_username": "", "new_username": "nobody@example.com"}
    body = admin_client.post("/Settings/EditUser", data=data).json()

    assert body["action"] == "edituser"
    assert body["errors"]


def test_delete_user(admin_client):
    admin_client.post("/Settings/AddEditor", data=new_user("delete-me@example.com"))

    response = admin_client.get("/Settings/DeleteUser/delete-me@example.com", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/Settings/Users"

    _, editors = admin_client.get("/Settings/Users").json()["model"]
    assert "delete-me@example.com" not in editors


def test_delete_unknown_user_is_ignored(admin_client):
    response = admin_client.get("/Settings/DeleteUser/missing@example.com")
    assert response.status_code == 200
    assert response.json()["view"] == "Users"


def test_users_read_only_with_external_auth(admin_client):
    manager = get_settings_manager()
    manager.web_settings()["use_external_auth"] = True

    body = admin_client.get("/Settings/Users").json()
    assert body["view"] == "UsersReadOnly"

    body = admin_client.post("/Settings/AddEditor", data=new_user("readonly@example.com")).json()
    assert body["errors"]["General"]
