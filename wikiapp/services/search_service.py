"""
Search service for the wiki application.

The index is a term table: one row per (page, field, term) with the number of
times the term occurs. create_index() drops and rebuilds it from every page.
"""
import re
import logging
from collections import Counter
from typing import Dict, List

from sqlalchemy import select

from wikiapp.common import (
    database, search_index_table, PageSummary,
    get_page_manager
)

logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r"\w+", re.UNICODE)

# 标题和标签命中的权重更高
FIELD_WEIGHTS = {"title": 3, "tags": 2, "content": 1}

# 与 search_index.term 列长度一致
MAX_TERM_LENGTH = 100


def tokenize(text: str) -> List[str]:
    """小写分词，超长的词截断到索引列的长度"""
    return [token.lower()[:MAX_TERM_LENGTH] for token in TOKEN_PATTERN.findall(text or "")]


class SearchManager:
    """搜索索引管理类"""

    async def delete_index(self) -> None:
        await database.execute(search_index_table.delete())

    async def add_page(self, page: PageSummary) -> int:
        """索引一个页面，返回写入的词条数"""
        fields = {
            "title": page.title,
            "tags": " ".join(page.tags),
            "content": page.content,
        }
        rows = []
        for field, text in fields.items():
            for term, frequency in Counter(tokenize(text)).items():
                rows.append({"page_id": page.id, "term": term, "field": field, "frequency": frequency})

        if rows:
            await database.execute_many(search_index_table.insert(), rows)
        return len(rows)

    async def create_index(self) -> int:
        """删除并重建整个索引，返回索引的页面数"""
        await self.delete_index()

        pages = await get_page_manager().all_pages()
        for page in pages:
            await self.add_page(page)

        logger.info(f"搜索索引重建完成，共 {len(pages)} 个页面")
        return len(pages)

    async def search(self, text: str) -> List[PageSummary]:
        """返回包含所有关键词的页面，按得分降序"""
        terms = set(tokenize(text))
        if not terms:
            return []

        query = select(search_index_table).where(search_index_table.c.term.in_(terms))
        rows = await database.fetch_all(query)

        scores: Dict[int, int] = {}
        matched_terms: Dict[int, set] = {}
        for row in rows:
            page_id = row["page_id"]
            scores[page_id] = scores.get(page_id, 0) + row["frequency"] * FIELD_WEIGHTS.get(row["field"], 1)
            matched_terms.setdefault(page_id, set()).add(row["term"])

        page_manager = get_page_manager()
        results = []
        for page_id in sorted(scores, key=lambda pid: (-scores[pid], pid)):
            if matched_terms[page_id] != terms:
                continue
            page = await page_manager.get_page(page_id)
            if page:
                results.append(page)
        return results
