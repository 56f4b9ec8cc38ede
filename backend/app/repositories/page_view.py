"""
页面访问Repository
"""

from datetime import datetime
from typing import Optional, Type

from app.models.page_view import APP_OPEN_PAGE, PageView
from app.repositories.base import BaseRepository


class PageViewRepository(BaseRepository):
    """页面访问数据访问层"""

    @property
    def model(self) -> Type[PageView]:
        return PageView

    async def record_app_open(self, platform: str) -> PageView:
        """记录一次应用打开"""
        return await self.create(
            page=APP_OPEN_PAGE,
            platform=platform,
            user_agent=f"{platform} open",
        )

    async def count_app_opens(
        self,
        platform: Optional[str] = None,
        since: Optional[datetime] = None
    ) -> int:
        """
        统计应用打开次数

        Args:
            platform: 只统计指定平台
            since: 只统计该时间之后的记录（UTC）
        """
        conditions = [PageView.page == APP_OPEN_PAGE]
        if platform:
            conditions.append(PageView.platform == platform)
        if since is not None:
            conditions.append(PageView.created_at >= since)
        return await self.count(*conditions)
