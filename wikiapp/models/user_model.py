"""
User-related database models for the wiki application.
"""
from sqlalchemy import Table, Column, Integer, String, DateTime, Boolean
import datetime
from .database import metadata

# 用户表，用户名即邮箱
user_table = Table(
    "user",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(255), unique=True, index=True),
    Column("password", String(255)),  # bcrypt哈希
    Column("is_admin", Boolean, default=False),
    Column("is_editor", Boolean, default=False),
    Column("is_activated", Boolean, default=True),
    Column("created_at", DateTime, default=datetime.datetime.utcnow),
)
