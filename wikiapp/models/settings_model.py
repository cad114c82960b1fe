"""
Site configuration table for the wiki application.
"""
from sqlalchemy import Table, Column, Integer, String, Text
from .database import metadata

# 站点配置，每个键一行，值为JSON
site_configuration_table = Table(
    "site_configuration",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("key", String(100), unique=True, index=True),
    Column("value", Text),
)
