"""
Session data models for the wiki application.

This module contains session-related data models and structures.
"""
from pydantic import BaseModel
from typing import Optional, List, Dict, Any

class SessionData(BaseModel):
    """用户会话数据模型"""
    username: Optional[str] = None
    is_admin: bool = False
    is_editor: bool = False
    temp_data: Dict[str, Any] = {}  # 只在下一次读取时有效的临时数据
    model_errors: Dict[str, List[str]] = {}  # 跨重定向保存的校验错误
    last_activity: Optional[float] = None

    def pop_temp_data(self, key: str, default: Any = None) -> Any:
        """读取一项临时数据，读取后即失效"""
        return self.temp_data.pop(key, default)

    def pop_model_errors(self) -> Dict[str, List[str]]:
        """读取并清空校验错误"""
        errors = self.model_errors
        self.model_errors = {}
        return errors
