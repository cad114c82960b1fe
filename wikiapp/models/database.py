"""
Database configuration and connection management for the wiki application.
"""
from databases import Database
from sqlalchemy import MetaData
from wikiapp.config import DATABASE_CONFIG, DATABASE_URL as CONFIGURED_DATABASE_URL, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE

# 数据库配置
DATABASE_URL = CONFIGURED_DATABASE_URL or f"postgresql://{DATABASE_CONFIG['user']}:{DATABASE_CONFIG['password']}@{DATABASE_CONFIG['host']}:{DATABASE_CONFIG['port']}/{DATABASE_CONFIG['database']}"

if DATABASE_URL.startswith("postgresql"):
    database = Database(DATABASE_URL, min_size=DB_POOL_MIN_SIZE, max_size=DB_POOL_MAX_SIZE)
else:
    database = Database(DATABASE_URL)
metadata = MetaData()
