"""
Startup service for the wiki application.

This module contains business logic for application startup including:
- Database initialization and connection
- Default administrator creation
- Data and attachments directories
- Cleanup operations
"""
import asyncpg
import logging
import datetime
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

from wikiapp.config import CREATE_DB_ON_STARTUP, DATA_DIR, DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD
from wikiapp.common import (
    database, metadata, DATABASE_URL, user_table,
    generate_random_password, hash_password,
    get_settings_manager
)

logger = logging.getLogger(__name__)

class StartupService:
    """应用启动服务类"""

    async def startup_initialization(self):
        """应用启动时的初始化逻辑"""
        logger.info("开始应用启动初始化...")

        # PostgreSQL 需要先确保数据库存在
        if CREATE_DB_ON_STARTUP and DATABASE_URL.startswith("postgresql"):
            await self._ensure_database_exists()

        if CREATE_DB_ON_STARTUP:
            # 创建表
            engine = create_engine(DATABASE_URL)
            metadata.create_all(engine)
            engine.dispose()
            logger.info("数据库表创建完成")

        await database.connect()
        logger.info("数据库连接成功")

        # 确保数据目录和附件目录存在
        DATA_DIR.mkdir(parents=True, exist_ok=True)
        get_settings_manager().attachments_path().mkdir(parents=True, exist_ok=True)

        if CREATE_DB_ON_STARTUP:
            await self.init_default_admin_user()

        logger.info("应用启动完成")

    async def shutdown_cleanup(self):
        """应用关闭时的清理逻辑"""
        # 断开数据库连接
        await database.disconnect()
        logger.info("数据库连接已断开")

    async def _ensure_database_exists(self):
        """确保数据库存在"""
        try:
            url = make_url(DATABASE_URL)
            db_name = url.database

            # 使用默认的postgres数据库
            postgres_url = url.set(drivername="postgresql", database="postgres").render_as_string(hide_password=False)

            # 连接到PostgreSQL服务器
            conn = await asyncpg.connect(postgres_url)

            # 检查数据库是否存在
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1",
                db_name
            )

            # 如果数据库不存在，则创建它
            if not exists:
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info(f"数据库 '{db_name}' 创建成功")
            else:
                logger.info(f"数据库 '{db_name}' 已存在")

            # 关闭连接
            await conn.close()
        except Exception as e:
            logger.error(f"数据库创建检查过程中出错: {str(e)}")
            raise

    async def init_default_admin_user(self):
        """没有任何管理员时创建默认管理员"""
        query = user_table.select().where(user_table.c.is_admin.is_(True))
        if await database.fetch_one(query):
            logger.info("已存在管理员用户")
            return

        query = user_table.select().where(user_table.c.username == DEFAULT_ADMIN_EMAIL)
        if await database.fetch_one(query):
            query = user_table.update().where(user_table.c.username == DEFAULT_ADMIN_EMAIL).values(is_admin=True)
            await database.execute(query)
            logger.warning(f"没有管理员，已将用户 {DEFAULT_ADMIN_EMAIL} 设为管理员")
            return

        password = DEFAULT_ADMIN_PASSWORD or generate_random_password()
        query = user_table.insert().values(
            username=DEFAULT_ADMIN_EMAIL,
            password=hash_password(password),
            is_admin=True,
            is_editor=True,
            is_activated=True,
            created_at=datetime.datetime.utcnow()
        )
        await database.execute(query)

        logger.info(f"默认管理员用户创建成功: {DEFAULT_ADMIN_EMAIL}")
        if not DEFAULT_ADMIN_PASSWORD:
            logger.info(f"默认密码: {password}")
            logger.warning("请及时修改默认密码！")
