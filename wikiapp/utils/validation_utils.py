"""
Validation utilities for the wiki application.
"""
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)

GENERAL_ERROR_KEY = "General"

def validation_errors_to_dict(error: ValidationError) -> Dict[str, List[str]]:
    """把 pydantic 的错误转换为 {字段: [消息]}，模型级错误放在 General 下"""
    errors: Dict[str, List[str]] = {}
    for item in error.errors():
        key = str(item["loc"][0]) if item.get("loc") else GENERAL_ERROR_KEY
        message = item["msg"]
        # pydantic 会给 ValueError 的消息加前缀
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(key, []).append(message)
    return errors

def bind_form(model_cls: Type[M], data: Dict[str, Any]) -> Tuple[Optional[M], Dict[str, List[str]]]:
    """绑定表单数据，返回 (模型, 错误)；校验失败时模型为 None"""
    try:
        return model_cls.model_validate(data), {}
    except ValidationError as e:
        return None, validation_errors_to_dict(e)

def add_model_error(errors: Dict[str, List[str]], key: str, message: str) -> None:
    """添加一条校验错误"""
    errors.setdefault(key, []).append(message)
