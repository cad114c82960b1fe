import os
import tempfile
from pathlib import Path

import pytest

# 必须在导入 wikiapp 之前设置环境变量
TEST_ROOT = Path(tempfile.mkdtemp(prefix="wikiapp-tests-"))
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_ROOT / 'wiki.db'}"
os.environ["DATA_DIR"] = str(TEST_ROOT / "App_Data")
os.environ["WEB_SETTINGS_FILE"] = str(TEST_ROOT / "App_Data" / "web_settings.json")
os.environ["ATTACHMENTS_FOLDER"] = str(TEST_ROOT / "Attachments")
os.environ["DEFAULT_ADMIN_EMAIL"] = ADMIN_EMAIL
os.environ["DEFAULT_ADMIN_PASSWORD"] = ADMIN_PASSWORD
os.environ["LOG_FILE"] = str(TEST_ROOT / "wiki.log")

from fastapi.testclient import TestClient  # noqa: E402

from wikiapp.main import app  # noqa: E402
from wikiapp.common import get_settings_manager, get_security_manager  # noqa: E402


@pytest.fixture(scope="session")
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_web_settings():
    yield
    manager = get_settings_manager()
    if manager.settings_file.exists():
        manager.settings_file.unlink()
    manager._web_settings = None


@pytest.fixture
def clean_pages(client):
    client.portal.call(get_settings_manager().clear_page_tables)
    yield
    client.portal.call(get_settings_manager().clear_page_tables)


def login(client, email, password):
    client.cookies.clear()
    return client.post("/login", data={"email": email, "password": password}, follow_redirects=False)


@pytest.fixture
def admin_client(client):
    response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 303
    yield client
    client.cookies.clear()


@pytest.fixture
def anonymous_client(client):
    client.cookies.clear()
    yield client
    client.cookies.clear()


@pytest.fixture
def editor_client(client):
    email = "plain-editor@example.com"
    manager = get_security_manager()
    if email not in client.portal.call(manager.list_editors):
        client.portal.call(manager.add_user, email, "editor-password", False, True)
    response = login(client, email, "editor-password")
    assert response.status_code == 303
    yield client
    client.cookies.clear()
