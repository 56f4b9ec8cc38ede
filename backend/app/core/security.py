"""
管理员认证
校验 Authorization: Bearer <token> 头中的 JWT，得到管理员身份
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AdminIdentity:
    """已认证的管理员"""
    id: str
    email: str
    name: str


def create_access_token(
    admin_id: str,
    email: str,
    name: str,
    expires_minutes: Optional[int] = None
) -> str:
    """
    签发管理员访问令牌

    Args:
        admin_id: 管理员ID
        email: 邮箱
        name: 名称
        expires_minutes: 有效期（分钟），缺省使用配置

    Returns:
        str: JWT 字符串
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    payload: Dict[str, Any] = {
        "id": admin_id,
        "email": email,
        "name": name,
        "exp": expire,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> AdminIdentity:
    """
    解析访问令牌

    Raises:
        PermissionDeniedError: 令牌无效或已过期
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError as e:
        logger.warning(log_messages.AUTH_TOKEN_INVALID, reason=type(e).__name__)
        raise PermissionDeniedError("Invalid or expired token") from e

    if "id" not in payload:
        logger.warning(log_messages.AUTH_TOKEN_INVALID, reason="missing id")
        raise PermissionDeniedError("Invalid or expired token")

    return AdminIdentity(
        id=str(payload["id"]),
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )


async def get_current_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> AdminIdentity:
    """FastAPI 依赖：要求请求携带有效的管理员令牌"""
    if credentials is None or not credentials.credentials:
        logger.warning(log_messages.AUTH_TOKEN_MISSING)
        raise AuthenticationError("Access token required")
    return decode_access_token(credentials.credentials)


__all__ = [
    'AdminIdentity',
    'bearer_scheme',
    'create_access_token',
    'decode_access_token',
    'get_current_admin',
]
