"""
进程内请求限流
按客户端标识（IP）做固定窗口计数，并由后台任务定期清理过期记录
"""

import asyncio
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fastapi import Request

from app.core.log_messages import log_messages
from app.core.log_utils import get_logger

logger = get_logger(__name__)


@dataclass
class RateLimitEntry:
    """
    单个客户端的计数窗口

    Attributes:
        key: 客户端标识
        count: 当前窗口内的请求数
        window_start: 窗口开始时间（毫秒，单调时钟）
        window_ms: 记录时使用的窗口长度
    """
    key: str
    count: int
    window_start: float
    window_ms: int

    def is_expired(self, now_ms: float) -> bool:
        return now_ms - self.window_start > self.window_ms


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class RateLimiter:
    """
    固定窗口限流器

    计数表只在本进程内有效，多实例部署时各自计数。读取-递增-比较在锁内完成，
    同步与异步处理函数都可以安全调用。
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock or _monotonic_ms
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()

    def check_and_increment(self, key: str, max_requests: int, window_ms: int) -> bool:
        """
        记录一次请求并判断是否超限

        Args:
            key: 客户端标识
            max_requests: 窗口内允许的最大请求数
            window_ms: 窗口长度（毫秒）

        Returns:
            bool: True 表示已被限流
        """
        if not key:
            return False

        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now - entry.window_start > window_ms:
                self._entries[key] = RateLimitEntry(
                    key=key, count=1, window_start=now, window_ms=window_ms
                )
                return False

            entry.count += 1
            limited = entry.count > max_requests

        if limited:
            logger.warning(log_messages.RATE_LIMITED, client_key=key)
        return limited

    def sweep(self) -> int:
        """
        清理已过期的记录

        Returns:
            int: 移除的记录数
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            remaining = len(self._entries)

        logger.debug(log_messages.RATE_LIMIT_SWEEP, removed=len(expired), remaining=remaining)
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_entry(self, key: str) -> Optional[RateLimitEntry]:
        """获取记录的副本（用于诊断和测试）"""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            return RateLimitEntry(entry.key, entry.count, entry.window_start, entry.window_ms)


async def periodic_sweep(limiter: RateLimiter, interval_seconds: float) -> None:
    """按固定间隔清理限流记录，直到任务被取消"""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            limiter.sweep()
        except Exception as e:
            logger.error(log_messages.RATE_LIMIT_SWEEP_FAILED, exception=e)


def get_client_ip(request: Request) -> Optional[str]:
    """
    提取客户端IP

    依次检查 X-Forwarded-For（取第一个）、X-Real-IP、CF-Connecting-IP、X-Client-IP，
    最后使用连接的对端地址。
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first

    for header in ("x-real-ip", "cf-connecting-ip", "x-client-ip"):
        value = request.headers.get(header)
        if value:
            return value.strip()

    if request.client:
        return request.client.host
    return None


__all__ = [
    'RateLimitEntry',
    'RateLimiter',
    'periodic_sweep',
    'get_client_ip',
]
