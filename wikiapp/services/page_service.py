"""
Page service for the wiki application.

This module contains business logic for wiki pages including:
- Creating pages and new page versions
- Listing pages with their latest content
- Exporting every page with its full history as XML
"""
import logging
import datetime
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Iterable

from sqlalchemy import func, select

from wikiapp.common import (
    database, page_table, page_content_table,
    PageSummary, parse_tags, join_tags
)

logger = logging.getLogger(__name__)


def _isoformat(value: Optional[datetime.datetime]) -> str:
    return value.isoformat() if value else ""


class PageManager:
    """页面管理类"""

    async def add_page(self, title: str, content: str, tags: Iterable[str], created_by: str,
                       created_on: Optional[datetime.datetime] = None, is_locked: bool = False) -> int:
        """新建页面，同时写入第一个版本"""
        created_on = created_on or datetime.datetime.utcnow()

        query = page_table.insert().values(
            title=title,
            tags=join_tags(tags),
            created_by=created_by,
            created_on=created_on,
            modified_by=created_by,
            modified_on=created_on,
            is_locked=is_locked
        )
        page_id = await database.execute(query)

        query = page_content_table.insert().values(
            page_id=page_id,
            text=content,
            edited_by=created_by,
            edited_on=created_on,
            version_number=1
        )
        await database.execute(query)

        logger.info(f"新建页面: {title} (ID: {page_id})")
        return page_id

    async def add_version(self, page_id: int, text: str, edited_by: str,
                          edited_on: Optional[datetime.datetime] = None) -> int:
        """为页面添加新版本，返回版本号"""
        edited_on = edited_on or datetime.datetime.utcnow()

        page = await database.fetch_one(page_table.select().where(page_table.c.id == page_id))
        if not page:
            raise ValueError(f"Page {page_id} does not exist")

        query = select(func.max(page_content_table.c.version_number)).where(
            page_content_table.c.page_id == page_id
        )
        latest = await database.fetch_val(query)
        version_number = (latest or 0) + 1

        query = page_content_table.insert().values(
            page_id=page_id,
            text=text,
            edited_by=edited_by,
            edited_on=edited_on,
            version_number=version_number
        )
        await database.execute(query)

        query = page_table.update().where(page_table.c.id == page_id).values(
            modified_by=edited_by,
            modified_on=edited_on
        )
        await database.execute(query)

        return version_number

    async def _latest_contents(self) -> Dict[int, dict]:
        rows = await database.fetch_all(
            page_content_table.select().order_by(page_content_table.c.version_number)
        )
        latest = {}
        for row in rows:
            latest[row["page_id"]] = row
        return latest

    def _to_summary(self, page, content) -> PageSummary:
        return PageSummary(
            id=page["id"],
            title=page["title"],
            content=(content["text"] or "") if content else "",
            tags=parse_tags(page["tags"]),
            created_by=page["created_by"],
            created_on=page["created_on"],
            modified_by=page["modified_by"],
            modified_on=page["modified_on"],
            is_locked=bool(page["is_locked"]),
            version_number=content["version_number"] if content else 1
        )

    async def all_pages(self) -> List[PageSummary]:
        """所有页面及其最新内容，按标题排序"""
        pages = await database.fetch_all(page_table.select().order_by(page_table.c.title))
        latest = await self._latest_contents()
        return [self._to_summary(page, latest.get(page["id"])) for page in pages]

    async def get_page(self, page_id: int) -> Optional[PageSummary]:
        page = await database.fetch_one(page_table.select().where(page_table.c.id == page_id))
        if not page:
            return None
        history = await self.get_history(page_id)
        return self._to_summary(page, history[-1] if history else None)

    async def get_history(self, page_id: int) -> List[dict]:
        """页面的所有版本，按版本号升序"""
        query = page_content_table.select().where(
            page_content_table.c.page_id == page_id
        ).order_by(page_content_table.c.version_number)
        return await database.fetch_all(query)

    async def export_to_xml(self) -> str:
        """导出所有页面及历史版本为XML"""
        pages = await database.fetch_all(page_table.select().order_by(page_table.c.id))
        contents = await database.fetch_all(
            page_content_table.select().order_by(page_content_table.c.page_id, page_content_table.c.version_number)
        )

        versions_by_page: Dict[int, list] = {}
        for content in contents:
            versions_by_page.setdefault(content["page_id"], []).append(content)

        root = ET.Element("pages")
        for page in pages:
            page_element = ET.SubElement(root, "page", {
                "id": str(page["id"]),
                "title": page["title"] or "",
                "createdBy": page["created_by"] or "",
                "createdOn": _isoformat(page["created_on"]),
                "modifiedBy": page["modified_by"] or "",
                "modifiedOn": _isoformat(page["modified_on"]),
                "isLocked": "true" if page["is_locked"] else "false",
            })

            tags_element = ET.SubElement(page_element, "tags")
            for tag in parse_tags(page["tags"]):
                ET.SubElement(tags_element, "tag").text = tag

            versions_element = ET.SubElement(page_element, "versions")
            for content in versions_by_page.get(page["id"], []):
                version_element = ET.SubElement(versions_element, "version", {
                    "number": str(content["version_number"]),
                    "editedBy": content["edited_by"] or "",
                    "editedOn": _isoformat(content["edited_on"]),
                })
                version_element.text = content["text"] or ""

        ET.indent(root)
        xml = ET.tostring(root, encoding="unicode")
        logger.info(f"导出 {len(pages)} 个页面为XML")
        return '<?xml version="1.0" encoding="utf-8"?>\n' + xml
