"""
页面访问数据模型
目前只用于记录应用/网站的打开次数
"""

from sqlalchemy import Column, DateTime, String, Text

from app.db.database import Base
from app.utils.datetime_utils import utc_now_naive

APP_OPEN_PAGE = "/app-open"


class PageView(Base):
    """页面访问记录"""

    __tablename__ = "page_views"

    id = Column(String(36), primary_key=True, index=True)
    page = Column(String(500), nullable=False, index=True)
    platform = Column(String(20), nullable=False, default="web", index=True)
    user_agent = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utc_now_naive, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<PageView(id={self.id}, page={self.page}, platform={self.platform})>"
