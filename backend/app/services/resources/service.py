"""
章节资源文件服务
维护资源记录与已存储PDF之间的一致性：
删除PDF资源时同时删除文件，解除文件关联时同时清空 file_name/url
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.storage import BaseStorage, StorageError
from app.models.chapter_resource import ChapterResource, RESOURCE_TYPE_PDF
from app.repositories.chapter_resource import ChapterResourceRepository

logger = get_logger(__name__)


class ChapterResourceFileService:
    """章节资源文件服务"""

    def __init__(self, db: AsyncSession, storage: BaseStorage):
        self.repository = ChapterResourceRepository(db)
        self.storage = storage

    async def _get_or_404(self, resource_id: str) -> ChapterResource:
        resource = await self.repository.get_by_id(resource_id)
        if resource is None:
            logger.warning(log_messages.RESOURCE_NOT_FOUND, resource_id=resource_id)
            raise NotFoundError("Resource not found", details={"resource_id": resource_id})
        return resource

    async def _delete_stored_file(self, resource: ChapterResource) -> bool:
        """删除资源引用的文件，失败只记录日志"""
        locator: Optional[str] = resource.file_name or resource.url
        if not locator:
            return False
        try:
            return await self.storage.delete(locator)
        except StorageError as e:
            logger.error(
                log_messages.RESOURCE_FILE_DELETE_FAILED,
                exception=e,
                resource_id=resource.id
            )
            return False

    async def delete_resource(self, resource_id: str) -> None:
        """
        删除资源记录，PDF资源同时删除其文件

        Raises:
            NotFoundError: 资源不存在
        """
        resource = await self._get_or_404(resource_id)
        if resource.resource_type == RESOURCE_TYPE_PDF:
            await self._delete_stored_file(resource)

        await self.repository.delete(resource_id)
        logger.info(log_messages.RESOURCE_DELETE_SUCCESS, resource_id=resource_id)

    async def detach_file(self, resource_id: str) -> ChapterResource:
        """
        删除资源关联的文件并清空 file_name/url

        Raises:
            NotFoundError: 资源不存在
        """
        resource = await self._get_or_404(resource_id)
        if resource.has_stored_file:
            await self._delete_stored_file(resource)

        updated = await self.repository.clear_file_reference(resource_id)
        logger.info(log_messages.RESOURCE_FILE_DETACHED, resource_id=resource_id)
        return updated or resource
