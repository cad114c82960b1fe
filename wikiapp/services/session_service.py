"""
Session management service for the wiki application.

This module contains business logic for session management including:
- Session creation and management
- Role refresh from the user store
- Flash data (TempData) and model errors that survive a redirect
"""
import logging
import time
from typing import Any, Dict, List, Optional
from fastapi import Request

from wikiapp.common import SessionData, database, user_table, generate_session_id

logger = logging.getLogger(__name__)

SESSION_MAX_AGE = 86400  # 24小时

class SessionService:
    """会话管理服务类"""

    def __init__(self, max_age_seconds: int = SESSION_MAX_AGE):
        # 存储会话信息（实际生产环境建议用Redis等）
        self.sessions: Dict[str, SessionData] = {}
        self.max_age_seconds = max_age_seconds

    def get_session(self, request: Request) -> SessionData:
        """获取当前会话数据；只有登录时创建的会话会被保存"""
        session_id = request.cookies.get("session_id")
        session = self.sessions.get(session_id) if session_id else None

        if session and self._is_expired(session, time.time()):
            self.destroy_session(session_id)
            session = None

        if session is None:
            # 未登录或未知的cookie：同一请求内复用一个不保存的匿名会话
            session = getattr(request.state, "anonymous_session", None)
            if session is None:
                session = SessionData()
                request.state.anonymous_session = session
            return session

        session.last_activity = time.time()
        return session

    def _is_expired(self, session: SessionData, now: float) -> bool:
        return bool(session.last_activity) and now - session.last_activity > self.max_age_seconds

    def create_session(self, username: str, is_admin: bool = False, is_editor: bool = False) -> str:
        """创建新的用户会话"""
        session_id = generate_session_id()
        self.sessions[session_id] = SessionData(
            username=username,
            is_admin=is_admin,
            is_editor=is_editor,
            last_activity=time.time()
        )
        logger.info(f"为用户 {username} 创建新会话: {session_id}")
        return session_id

    def destroy_session(self, session_id: str) -> bool:
        """销毁会话"""
        if session_id in self.sessions:
            username = self.sessions[session_id].username
            del self.sessions[session_id]
            logger.info(f"销毁用户 {username} 的会话: {session_id}")
            return True
        return False

    def get_session_by_id(self, session_id: str) -> Optional[SessionData]:
        """根据session_id获取会话数据"""
        return self.sessions.get(session_id)

    async def refresh_session_roles(self, session: SessionData) -> SessionData:
        """从用户表重新读取角色"""
        if not session.username:
            return session

        query = user_table.select().where(user_table.c.username == session.username)
        user_info = await database.fetch_one(query)
        if not user_info or not user_info["is_activated"]:
            logger.info(f"用户 {session.username} 已不存在或未激活，清除会话身份")
            session.username = None
            session.is_admin = False
            session.is_editor = False
        else:
            session.is_admin = bool(user_info["is_admin"])
            session.is_editor = bool(user_info["is_editor"])
        return session

    def set_temp_data(self, request: Request, key: str, value: Any) -> None:
        """设置只在下一个请求中有效的数据"""
        self.get_session(request).temp_data[key] = value

    def export_model_errors(self, request: Request, errors: Dict[str, List[str]]) -> None:
        """保存校验错误，供重定向后的页面读取"""
        if errors:
            self.get_session(request).model_errors = errors

    def get_sessions_by_user(self, username: str) -> List[str]:
        """获取指定用户的所有会话ID"""
        return [session_id for session_id, data in self.sessions.items() if data.username == username]

    def cleanup_expired_sessions(self) -> int:
        """清理过期会话"""
        current_time = time.time()
        expired_sessions = [
            session_id for session_id, data in self.sessions.items()
            if self._is_expired(data, current_time)
        ]

        for session_id in expired_sessions:
            self.destroy_session(session_id)

        if expired_sessions:
            logger.info(f"清理了 {len(expired_sessions)} 个过期会话")

        return len(expired_sessions)

# 创建全局会话服务实例
session_service = SessionService()
