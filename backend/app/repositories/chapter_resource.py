"""
章节资源Repository
"""

from typing import Optional, Type

from app.models.chapter_resource import ChapterResource
from app.repositories.base import BaseRepository


class ChapterResourceRepository(BaseRepository):
    """章节资源数据访问层"""

    @property
    def model(self) -> Type[ChapterResource]:
        return ChapterResource

    async def clear_file_reference(self, resource_id: str) -> Optional[ChapterResource]:
        """清除资源对已存储文件的引用"""
        return await self.update(resource_id, file_name=None, url=None)
