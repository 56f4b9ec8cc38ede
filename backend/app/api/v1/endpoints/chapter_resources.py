"""
章节资源API端点
只包含与已存储文件相关的删除操作
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_resource_file_service
from app.core.security import AdminIdentity, get_current_admin
from app.schemas.chapter_resource import ChapterResourceResponse
from app.schemas.common import MessageResponse
from app.services.resources import ChapterResourceFileService

router = APIRouter(tags=["章节资源"])


@router.delete("/{resource_id}", response_model=MessageResponse, summary="删除章节资源")
async def delete_resource(
    resource_id: str,
    service: ChapterResourceFileService = Depends(get_resource_file_service),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """删除资源，PDF资源的文件一并删除"""
    await service.delete_resource(resource_id)
    return {"message": "Resource deleted successfully"}


@router.delete(
    "/{resource_id}/file",
    response_model=ChapterResourceResponse,
    summary="删除章节资源的PDF文件"
)
async def detach_resource_file(
    resource_id: str,
    service: ChapterResourceFileService = Depends(get_resource_file_service),
    admin: AdminIdentity = Depends(get_current_admin)
):
    resource = await service.detach_file(resource_id)
    return ChapterResourceResponse.model_validate(resource)
