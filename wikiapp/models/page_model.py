"""
Page, page version and search index tables for the wiki application.
"""
from sqlalchemy import Table, Column, Integer, String, DateTime, Text, Boolean, ForeignKey
import datetime
from .database import metadata

# 页面表，tags 以分号分隔存储
page_table = Table(
    "page",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(255), index=True),
    Column("tags", String(255), default=""),
    Column("created_by", String(255)),
    Column("created_on", DateTime, default=datetime.datetime.utcnow),
    Column("modified_by", String(255)),
    Column("modified_on", DateTime, default=datetime.datetime.utcnow),
    Column("is_locked", Boolean, default=False),
)

# 页面内容表，每次编辑一个版本
page_content_table = Table(
    "page_content",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("page_id", Integer, ForeignKey("page.id"), index=True),
    Column("text", Text),
    Column("edited_by", String(255)),
    Column("edited_on", DateTime, default=datetime.datetime.utcnow),
    Column("version_number", Integer, default=1),
)

# 搜索索引表
search_index_table = Table(
    "search_index",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("page_id", Integer, index=True),
    Column("term", String(100), index=True),
    Column("field", String(20)),  # title, tags, content
    Column("frequency", Integer, default=1),
)
