"""
Security service for the wiki application.

This module contains the user directory operations used by the settings pages:
- Listing administrators and editors
- Adding, renaming, re-passwording and deleting users
- Authenticating logins
"""
import logging
import datetime
from typing import List, Optional

from wikiapp.common import (
    database, user_table,
    hash_password, verify_password, generate_random_password,
    get_settings_manager, get_session_service
)

logger = logging.getLogger(__name__)


class SecurityError(Exception):
    """用户目录操作失败（用户已存在、只读目录等）"""


class SecurityManager:
    """用户安全管理类"""

    @property
    def is_readonly(self) -> bool:
        """使用外部认证时用户目录为只读"""
        return get_settings_manager().web_settings().get("use_external_auth", False)

    def _ensure_writable(self):
        if self.is_readonly:
            raise SecurityError("The user store is read only when external authentication is used")

    async def _get_user(self, username: str):
        query = user_table.select().where(user_table.c.username == username)
        return await database.fetch_one(query)

    async def list_admins(self) -> List[str]:
        """管理员用户名列表"""
        query = user_table.select().where(user_table.c.is_admin.is_(True)).order_by(user_table.c.username)
        rows = await database.fetch_all(query)
        return [row["username"] for row in rows]

    async def list_editors(self) -> List[str]:
        """编辑用户名列表"""
        query = user_table.select().where(user_table.c.is_editor.is_(True)).order_by(user_table.c.username)
        rows = await database.fetch_all(query)
        return [row["username"] for row in rows]

    async def add_user(self, email: str, password: str, is_admin: bool, is_editor: bool) -> int:
        """添加用户"""
        self._ensure_writable()

        if await self._get_user(email):
            raise SecurityError(f"The user {email} already exists")

        query = user_table.insert().values(
            username=email,
            password=hash_password(password),
            is_admin=is_admin,
            is_editor=is_editor,
            is_activated=True,
            created_at=datetime.datetime.utcnow()
        )
        user_id = await database.execute(query)
        logger.info(f"添加用户成功: {email} (admin={is_admin}, editor={is_editor})")
        return user_id

    async def change_email(self, existing_email: str, new_email: str) -> None:
        """修改用户名（邮箱）"""
        self._ensure_writable()

        if not await self._get_user(existing_email):
            raise SecurityError(f"The user {existing_email} does not exist")
        if await self._get_user(new_email):
            raise SecurityError(f"The user {new_email} already exists")

        query = user_table.update().where(user_table.c.username == existing_email).values(username=new_email)
        await database.execute(query)

        # 已登录的会话跟随新用户名
        session_service = get_session_service()
        for session_id in session_service.get_sessions_by_user(existing_email):
            session_service.get_session_by_id(session_id).username = new_email

        logger.info(f"用户 {existing_email} 改名为 {new_email}")

    async def change_password(self, email: str, new_password: str) -> None:
        """重置用户密码"""
        self._ensure_writable()

        if not await self._get_user(email):
            raise SecurityError(f"The user {email} does not exist")

        query = user_table.update().where(user_table.c.username == email).values(
            password=hash_password(new_password)
        )
        await database.execute(query)
        logger.info(f"修改用户密码成功: {email}")

    async def delete_user(self, email: str) -> bool:
        """删除用户，用户不存在时不做任何操作"""
        self._ensure_writable()

        if not await self._get_user(email):
            logger.warning(f"删除用户失败，用户不存在: {email}")
            return False

        query = user_table.delete().where(user_table.c.username == email)
        await database.execute(query)
        logger.info(f"删除用户成功: {email}")
        return True

    async def authenticate(self, email: str, password: str) -> Optional[dict]:
        """校验登录，成功返回用户信息"""
        user = await self._get_user(email)
        if not user or not user["is_activated"]:
            return None
        if not verify_password(password, user["password"]):
            return None
        return {
            "username": user["username"],
            "is_admin": bool(user["is_admin"]),
            "is_editor": bool(user["is_editor"])
        }

    async def reset_password(self, email: str) -> str:
        """生成新的随机密码并返回"""
        new_password = generate_random_password()
        await self.change_password(email, new_password)
        return new_password
