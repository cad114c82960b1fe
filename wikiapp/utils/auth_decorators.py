"""
Authentication decorators for the wiki application.

This module contains decorator functions for authentication and authorization.
"""
import logging
from functools import wraps
from typing import Callable, Optional
from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)

def _get_session_service():
    """延迟导入session_service"""
    from wikiapp.services.session_service import session_service
    return session_service

def _find_request(args, kwargs) -> Optional[Request]:
    """从参数中查找request对象"""
    for arg in args:
        if isinstance(arg, Request):
            return arg
    return kwargs.get('request')

def require_admin(func: Callable) -> Callable:
    """要求管理员权限的装饰器"""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        request = _find_request(args, kwargs)
        if not request:
            raise HTTPException(status_code=500, detail="无法获取请求对象")

        session_service = _get_session_service()
        session = session_service.get_session(request)
        if not session.username:
            raise HTTPException(status_code=401, detail="请先登录")

        # 重新读取用户角色，被删除或降级的用户立即失效
        await session_service.refresh_session_roles(session)
        if not session.is_admin:
            logger.warning(f"用户 {session.username} 尝试访问管理员页面 {request.url.path}")
            raise HTTPException(status_code=403, detail="权限不足，需要管理员权限")

        return await func(*args, **kwargs)

    return wrapper
