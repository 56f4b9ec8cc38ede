"""
通用Pydantic模型
用于标准化API响应
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """对外字段使用camelCase命名的基础模型"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """只包含提示消息的响应"""
    message: str


class ErrorResponse(BaseModel):
    """错误响应模型，detail 仅在调试模式下返回"""
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """健康检查响应"""
    status: str = "OK"
    message: str
    timestamp: str
