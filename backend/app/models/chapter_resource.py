"""
章节资源数据模型
资源可以指向外部链接，也可以指向本地存储的PDF（url + file_name）
"""

from sqlalchemy import Column, DateTime, String, Text

from app.db.database import Base
from app.utils.datetime_utils import utc_now_naive

RESOURCE_TYPE_PDF = "pdf"


class ChapterResource(Base):
    """章节资源模型"""

    __tablename__ = "chapter_resources"

    id = Column(String(36), primary_key=True, index=True)
    chapter_id = Column(String(36), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # svadhyay / svadhyay_pothi / other
    type = Column(String(50), nullable=False)
    # pdf / youtube / link
    resource_type = Column(String(20), nullable=False)

    url = Column(Text, nullable=True)
    file_name = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=utc_now_naive, nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False)

    @property
    def has_stored_file(self) -> bool:
        """是否引用了本地存储的PDF"""
        return self.resource_type == RESOURCE_TYPE_PDF and bool(self.url or self.file_name)

    def __repr__(self) -> str:
        return (
            f"<ChapterResource(id={self.id}, chapter_id={self.chapter_id}, "
            f"resource_type={self.resource_type})>"
        )

    def to_dict(self) -> dict:
        """转换为字典格式"""
        return {
            'id': self.id,
            'chapterId': self.chapter_id,
            'title': self.title,
            'description': self.description,
            'type': self.type,
            'resourceType': self.resource_type,
            'url': self.url,
            'fileName': self.file_name,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
