import datetime

import pytest
from sqlalchemy import create_engine, MetaData, Table, Column, Integer, String, Text, DateTime, Boolean, LargeBinary
from sqlalchemy.exc import ArgumentError

from wikiapp.common import get_page_manager, get_security_manager, get_settings_manager
from wikiapp.services.screwturn_importer import _revision_order, _as_datetime
from tests.conftest import TEST_ROOT


@pytest.fixture
def screwturn_database():
    """在 SQLite 中建立一个最小的 ScrewTurn 数据库"""
    path = TEST_ROOT / "screwturn.db"
    if path.exists():
        path.unlink()
    url = f"sqlite:///{path}"

    metadata = MetaData()
    users = Table(
        "User", metadata,
        Column("Username", String(100), primary_key=True),
        Column("Email", String(100)),
        Column("Active", Boolean),
        Column("DateTime", DateTime),
    )
    memberships = Table(
        "UserGroupMembership", metadata,
        Column("User", String(100)),
        Column("UserGroup", String(100)),
    )
    pages = Table(
        "Page", metadata,
        Column("Name", String(200)),
        Column("Namespace", String(100)),
        Column("CreationDateTime", DateTime),
    )
    contents = Table(
        "PageContent", metadata,
        Column("Page", String(200)),
        Column("Namespace", String(100)),
        Column("Revision", Integer),
        Column("Title", String(200)),
        Column("User", String(100)),
        Column("LastModified", DateTime),
        Column("Content", Text),
    )
    categories = Table(
        "CategoryBinding", metadata,
        Column("Namespace", String(100)),
        Column("Category", String(100)),
        Column("Page", String(200)),
    )
    files = Table(
        "File", metadata,
        Column("Name", String(200)),
        Column("Directory", String(200)),
        Column("Data", LargeBinary),
    )

    created = datetime.datetime(2011, 5, 1, 10, 0, 0)
    engine = create_engine(url)
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(users.insert(), [
            {"Username": "st-admin", "Email": "st-admin@example.com", "Active": True, "DateTime": created},
            {"Username": "st-editor", "Email": "st-editor@example.com", "Active": True, "DateTime": created},
        ])
        conn.execute(memberships.insert(), [
            {"User": "st-admin", "UserGroup": "Administrators"},
            {"User": "st-editor", "UserGroup": "Users"},
        ])
        conn.execute(pages.insert(), [
            {"Name": "MainPage", "Namespace": "", "CreationDateTime": created},
        ])
        conn.execute(contents.insert(), [
            {"Page": "MainPage", "Namespace": "", "Revision": -1, "Title": "Main Page",
             "User": "st-editor", "LastModified": created + datetime.timedelta(days=2), "Content": "third"},
            {"Page": "MainPage", "Namespace": "", "Revision": 0, "Title": "Main",
             "User": "st-admin", "LastModified": created, "Content": "first"},
            {"Page": "MainPage", "Namespace": "", "Revision": 1, "Title": "Main",
             "User": "st-admin", "LastModified": created + datetime.timedelta(days=1), "Content": "second"},
        ])
        conn.execute(categories.insert(), [
            {"Namespace": "", "Category": "help", "Page": "MainPage"},
            {"Namespace": "", "Category": "Getting Started", "Page": "MainPage"},
        ])
        conn.execute(files.insert(), [
            {"Name": "logo.png", "Directory": "/images/", "Data": b"png-bytes"},
        ])
    engine.dispose()

    yield url
    path.unlink()


def test_import_from_screwturn(admin_client, clean_pages, screwturn_database):
    response = admin_client.post(
        "/Settings/ImportFromScrewTurn",
        data={"screwturnConnectionString": screwturn_database},
        follow_redirects=False
    )
    assert response.status_code == 303
    assert response.headers["location"] == "/Settings/Tools"
    assert admin_client.get("/Settings/Tools").json()["message"] == "Import successful"

    page_manager = get_page_manager()
    pages = admin_client.portal.call(page_manager.all_pages)
    assert [page.title for page in pages] == ["Main Page"]

    page = pages[0]
    assert sorted(page.tags) == ["Getting Started", "help"]
    assert page.content == "third"
    assert page.created_by == "st-admin"

    history = admin_client.portal.call(page_manager.get_history, page.id)
    assert [row["text"] for row in history] == ["first", "second", "third"]

    security_manager = get_security_manager()
    assert "st-admin@example.com" in admin_client.portal.call(security_manager.list_admins)
    assert "st-editor@example.com" in admin_client.portal.call(security_manager.list_editors)

    logo = get_settings_manager().attachments_path() / "images" / "logo.png"
    assert logo.read_bytes() == b"png-bytes"


def test_revision_order_puts_current_last():
    assert sorted([-1, 2, 0, 1], key=_revision_order) == [0, 1, 2, -1]


def test_as_datetime():
    value = datetime.datetime(2011, 5, 1, 10, 0)
    assert _as_datetime(value) is value
    assert _as_datetime("2011-05-01 10:00:00.000000") == value
    assert _as_datetime(None) is None
    assert _as_datetime("") is None


def test_import_with_invalid_connection_string_raises(admin_client, clean_pages):
    with pytest.raises(ArgumentError):
        admin_client.post(
            "/Settings/ImportFromScrewTurn",
            data={"screwturnConnectionString": "not a connection string"}
        )

    assert admin_client.portal.call(get_page_manager().all_pages) == []
    assert admin_client.get("/Settings/Tools").json()["message"] is None
