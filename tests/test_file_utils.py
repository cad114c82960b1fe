import datetime
import zipfile

import pytest

from wikiapp.common import PageSummary, as_valid_filename, parse_tags, join_tags, zip_directory
from wikiapp.services.export_service import ExportService, wiki_file_content


@pytest.mark.parametrize("title,expected", [
    ("Home", "Home"),
    ("a/b\\c:d", "abcd"),
    ('what?*"<>|', "what"),
    ("///", "page"),
])
def test_as_valid_filename(title, expected):
    assert as_valid_filename(title) == expected


def test_tags():
    assert parse_tags("one;two;") == ["one", "two"]
    assert parse_tags("one; two three;") == ["one", "two three"]
    assert parse_tags("") == []
    assert join_tags(["one", "", "two"]) == "one;two;"
    assert join_tags([]) == ""


def test_tags_with_spaces_survive_storage():
    tags = ["Getting Started", "help"]
    assert parse_tags(join_tags(tags)) == tags


def test_wiki_file_content():
    page = PageSummary(id=1, title="T", content="body", tags=["x", "y"])
    assert wiki_file_content(page) == "Tags:x y\r\nbody"


def test_export_file_names(tmp_path):
    service = ExportService(data_dir=tmp_path)
    now = datetime.datetime(2024, 3, 9, 14, 5)

    zip_path = service.export_wiki_files([PageSummary(id=1, title="One", content="1")], now=now)
    assert zip_path.name == "export-2024-03-09-1405.zip"
    assert zip_path.parent == tmp_path / "export"

    attachments = tmp_path / "files"
    attachments.mkdir()
    (attachments / "a.txt").write_text("a", encoding="utf-8")
    zip_path = service.export_attachments(attachments, now=now)
    assert zip_path.name == "attachments-export-2024-03-09-1405.zip"

    with zipfile.ZipFile(zip_path) as archive:
        assert archive.namelist() == ["Attachments/a.txt"]


def test_zip_directory_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        zip_directory(tmp_path / "out.zip", tmp_path / "missing", "Attachments")
