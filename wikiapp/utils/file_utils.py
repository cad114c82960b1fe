"""
File and export utilities for the wiki application.
"""
import os
import re
import zipfile
from pathlib import Path
from typing import Iterable, List

# 文件名中不允许出现的字符
INVALID_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')

TAG_SEPARATOR = ";"

def as_valid_filename(title: str) -> str:
    """把页面标题转换为合法的文件名"""
    filename = INVALID_FILENAME_CHARS.sub("", title or "").strip().strip(".")
    return filename or "page"

def parse_tags(tags: str) -> List[str]:
    """解析存储格式 tag1;tag2; ，标签本身可以包含空格"""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(TAG_SEPARATOR) if tag.strip()]

def join_tags(tags: Iterable[str]) -> str:
    """转换为存储格式：tag1;tag2;"""
    tags = [tag for tag in tags if tag]
    if not tags:
        return ""
    return TAG_SEPARATOR.join(tags) + TAG_SEPARATOR

def space_delimit_tags(tags: Iterable[str]) -> str:
    """以空格分隔的标签"""
    return " ".join(tag for tag in tags if tag)

def zip_files_flat(zip_path: Path, files: Iterable[Path]) -> Path:
    """把文件放在压缩包根目录下"""
    with zipfile.ZipFile(zip_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
        for file_path in files:
            zipf.write(file_path, file_path.name)
    return zip_path

def zip_directory(zip_path: Path, directory: Path, archive_folder: str) -> Path:
    """把整个目录（含子目录）压缩到压缩包内的 archive_folder 下"""
    if not directory.is_dir():
        raise FileNotFoundError(f"Directory not found: {directory}")

    with zipfile.ZipFile(zip_path, 'w', zipfile.ZIP_DEFLATED) as zipf:
        for root, dirs, files in os.walk(directory):
            for file in files:
                file_path = Path(root) / file
                arcname = Path(archive_folder) / file_path.relative_to(directory)
                zipf.write(file_path, arcname.as_posix())
    return zip_path
