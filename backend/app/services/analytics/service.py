"""
应用打开统计服务
"""

from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.repositories.page_view import PageViewRepository
from app.utils.datetime_utils import days_ago

logger = get_logger(__name__)

PLATFORM_APP = "app"
PLATFORM_WEB = "web"


def normalize_platform(platform: Optional[str]) -> str:
    """只有显式上报 app 的请求记为 app，其余一律记为 web"""
    return PLATFORM_APP if platform == PLATFORM_APP else PLATFORM_WEB


class AnalyticsService:
    """应用打开统计服务"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repository = PageViewRepository(db)

    async def track_app_open(self, platform: Optional[str]) -> bool:
        """
        记录一次应用打开

        上报接口不能因为统计失败而报错，数据库异常只记录日志。

        Returns:
            bool: 是否记录成功
        """
        normalized = normalize_platform(platform)
        try:
            await self.repository.record_app_open(normalized)
        except SQLAlchemyError as e:
            logger.error(log_messages.APP_OPEN_TRACK_FAILED, exception=e, platform=normalized)
            return False

        logger.debug(log_messages.APP_OPEN_TRACKED, platform=normalized)
        return True

    async def get_app_open_stats(self) -> Dict[str, int]:
        """获取应用打开统计"""
        return {
            "totalOpens": await self.repository.count_app_opens(),
            "appOpens": await self.repository.count_app_opens(platform=PLATFORM_APP),
            "webOpens": await self.repository.count_app_opens(platform=PLATFORM_WEB),
            "last24Hours": await self.repository.count_app_opens(since=days_ago(1)),
            "last7Days": await self.repository.count_app_opens(since=days_ago(7)),
            "last30Days": await self.repository.count_app_opens(since=days_ago(30)),
        }
