"""
Export service for the wiki application.

Builds the ZIP archives offered on the tools page: every page as a .wiki file,
and the attachments folder. Archives are written to the export folder under
the data directory and left there.
"""
import logging
import datetime
from pathlib import Path
from typing import Iterable, Optional, Set

from wikiapp.config import DATA_DIR
from wikiapp.common import (
    PageSummary, as_valid_filename, space_delimit_tags,
    zip_files_flat, zip_directory
)

logger = logging.getLogger(__name__)

EXPORT_DATE_FORMAT = "%Y-%m-%d-%H%M"
ATTACHMENTS_ARCHIVE_FOLDER = "Attachments"


def wiki_file_content(page: PageSummary) -> str:
    """.wiki 文件内容：首行为标签"""
    return "Tags:" + space_delimit_tags(page.tags) + "\r\n" + page.content


def unique_filename(name: str, used_names: Set[str]) -> str:
    """同一次导出中重名时追加 -2、-3 ..."""
    candidate = name
    suffix = 2
    # 压缩包在不区分大小写的文件系统上解压
    while candidate.lower() in used_names:
        candidate = f"{name}-{suffix}"
        suffix += 1
    used_names.add(candidate.lower())
    return candidate


class ExportService:
    """导出服务类"""

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = data_dir or DATA_DIR

    @property
    def export_dir(self) -> Path:
        return self.data_dir / "export"

    def ensure_export_dir(self) -> Path:
        self.export_dir.mkdir(parents=True, exist_ok=True)
        return self.export_dir

    def export_wiki_files(self, pages: Iterable[PageSummary], now: Optional[datetime.datetime] = None) -> Path:
        """把所有页面写成 .wiki 文件并压缩，返回压缩包路径"""
        now = now or datetime.datetime.now()
        export_dir = self.ensure_export_dir()

        zip_path = export_dir / f"export-{now.strftime(EXPORT_DATE_FORMAT)}.zip"
        files = []
        used_names = set()
        for page in pages:
            file_path = export_dir / (unique_filename(as_valid_filename(page.title), used_names) + ".wiki")
            # newline="" 保留 \r\n
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                f.write(wiki_file_content(page))
            files.append(file_path)

        zip_files_flat(zip_path, files)
        logger.info(f"导出 {len(files)} 个wiki文件: {zip_path.name}")
        return zip_path

    def export_attachments(self, attachments_dir: Path, now: Optional[datetime.datetime] = None) -> Path:
        """压缩附件目录（含子目录），返回压缩包路径"""
        now = now or datetime.datetime.now()
        export_dir = self.ensure_export_dir()

        zip_path = export_dir / f"attachments-export-{now.strftime(EXPORT_DATE_FORMAT)}.zip"
        zip_directory(zip_path, attachments_dir, ATTACHMENTS_ARCHIVE_FOLDER)
        logger.info(f"导出附件目录 {attachments_dir}: {zip_path.name}")
        return zip_path
