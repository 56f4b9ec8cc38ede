"""
日期时间工具模块
提供统一的日期时间处理函数
"""

import time
from datetime import datetime, timedelta, timezone


def get_current_timestamp_ms() -> int:
    """获取当前时间戳（毫秒级）"""
    return int(time.time() * 1000)


def utc_now_naive() -> datetime:
    """获取当前UTC时间（去掉时区信息，与数据库字段保持一致）"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def days_ago(days: int) -> datetime:
    """获取若干天之前的UTC时间"""
    return utc_now_naive() - timedelta(days=days)


def to_iso_string(dt: datetime) -> str:
    """转换为ISO格式字符串（带Z后缀）"""
    return dt.isoformat(timespec="milliseconds") + "Z"
