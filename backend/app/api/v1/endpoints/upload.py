"""
PDF上传API端点
采用薄路由、重服务的架构设计，所有接口都需要管理员令牌
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.deps import get_upload_handler
from app.core.security import AdminIdentity, get_current_admin
from app.schemas.common import MessageResponse
from app.schemas.upload import (
    CompressionStatusResponse,
    FileListResponse,
    PdfUploadResponse,
    StoredFileResponse,
)
from app.services.upload import PdfUploadHandler

router = APIRouter(tags=["PDF上传"])


@router.post(
    "/pdf",
    response_model=PdfUploadResponse,
    response_model_exclude_none=True,
    summary="上传PDF",
    description="上传单个PDF，按需使用Ghostscript压缩后保存到本地上传目录"
)
async def upload_pdf(
    pdf: Optional[UploadFile] = File(None, description="要上传的PDF文件"),
    compress: Optional[str] = Form(None, description="传入 false 时小文件不压缩"),
    handler: PdfUploadHandler = Depends(get_upload_handler),
    admin: AdminIdentity = Depends(get_current_admin)
):
    """
    上传PDF

    功能流程：
    1. 校验MIME类型和大小
    2. Ghostscript可用且需要压缩时，暂存原始文件并压缩
    3. 压缩失败时使用原始文件
    """
    return await handler.handle_upload(pdf, compress=compress, field_name="pdf")


@router.delete("/pdf/{file_id}", response_model=MessageResponse, summary="删除PDF")
async def delete_pdf(
    file_id: str,
    handler: PdfUploadHandler = Depends(get_upload_handler),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await handler.handle_delete(file_id)


@router.get("/pdf/{file_id}", response_model=StoredFileResponse, summary="获取PDF信息")
async def get_pdf_info(
    file_id: str,
    handler: PdfUploadHandler = Depends(get_upload_handler),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await handler.handle_get_info(file_id)


@router.get("/files", response_model=FileListResponse, summary="列出已上传的PDF")
async def list_files(
    handler: PdfUploadHandler = Depends(get_upload_handler),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await handler.handle_list()


@router.get(
    "/compression-status",
    response_model=CompressionStatusResponse,
    summary="查询PDF压缩功能状态"
)
async def compression_status(
    handler: PdfUploadHandler = Depends(get_upload_handler),
    admin: AdminIdentity = Depends(get_current_admin)
):
    return await handler.handle_compression_status()
