"""
应用异常定义
定义请求处理链路中使用的业务异常，统一由 main.py 中的异常处理器转换为
``{"error": message}`` 响应
"""

from typing import Any, Dict, Optional

from fastapi import status


class AppError(Exception):
    """
    业务异常基类

    Attributes:
        message: 面向客户端的错误消息
        status_code: HTTP状态码
        code: 错误码
        details: 错误详情（不返回给客户端）
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "APP_ERROR"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class NoFileProvidedError(AppError):
    """请求中没有上传文件"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "NO_FILE"


class UnsupportedMediaTypeError(AppError):
    """文件MIME类型不受支持"""
    status_code = status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    code = "UNSUPPORTED_MEDIA_TYPE"


class PayloadTooLargeError(AppError):
    """文件大小超过限制"""
    status_code = 413
    code = "PAYLOAD_TOO_LARGE"


class NotFoundError(AppError):
    """资源不存在"""
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class InvalidPathError(AppError):
    """压缩器路径校验失败（非绝对路径或包含上级目录片段）"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_PATH"


class CompressionFailedError(AppError):
    """PDF压缩失败，上传流程会降级为使用原始文件"""
    code = "COMPRESSION_FAILED"


class AuthenticationError(AppError):
    """缺少认证凭据"""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTHENTICATION_REQUIRED"


class PermissionDeniedError(AppError):
    """认证凭据无效或已过期"""
    status_code = status.HTTP_403_FORBIDDEN
    code = "PERMISSION_DENIED"


class RateLimitExceededError(AppError):
    """请求过于频繁"""
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMITED"


__all__ = [
    'AppError',
    'NoFileProvidedError',
    'UnsupportedMediaTypeError',
    'PayloadTooLargeError',
    'NotFoundError',
    'InvalidPathError',
    'CompressionFailedError',
    'AuthenticationError',
    'PermissionDeniedError',
    'RateLimitExceededError',
]
