"""
PDF上传业务处理器
把上传服务的结果转换为接口响应
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, UploadFile, status

from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.storage import StorageAccessError, StorageError
from app.services.upload.service import PdfUploadResult, PdfUploadService

logger = get_logger(__name__)


def build_upload_response(result: PdfUploadResult) -> Dict[str, Any]:
    """构建上传接口的响应字典"""
    stored = result.stored
    response: Dict[str, Any] = {
        "message": result.message,
        "fileId": stored.id,
        "fileName": stored.name,
        "originalName": result.original_name,
        "size": stored.size,
        "url": stored.url,
        "filePath": stored.file_path,
        "viewingUrl": stored.url,
        "embeddedUrl": stored.url,
    }
    if result.compression is not None:
        response["originalSize"] = str(result.compression.original_size)
        response["compressionRatio"] = f"{result.compression.ratio_percent}%"
    return response


class PdfUploadHandler:
    """PDF上传业务处理器"""

    def __init__(self, upload_service: PdfUploadService):
        self.upload_service = upload_service

    async def handle_upload(
        self,
        file: Optional[UploadFile],
        compress: Optional[str] = None,
        field_name: str = "pdf"
    ) -> Dict[str, Any]:
        """处理PDF上传"""
        data = await file.read() if file is not None else None
        try:
            result = await self.upload_service.upload_pdf(
                data=data,
                content_type=file.content_type if file is not None else None,
                original_name=(file.filename or "") if file is not None else "",
                field_name=field_name,
                compress_flag=compress,
            )
        except StorageError as e:
            logger.error(log_messages.PDF_UPLOAD_FAILED, exception=e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="File upload failed"
            ) from e

        return build_upload_response(result)

    async def handle_delete(self, file_id: str) -> Dict[str, Any]:
        """处理文件删除"""
        try:
            await self.upload_service.delete_file(file_id)
        except StorageAccessError:
            raise
        except StorageError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="File deletion failed"
            ) from e
        return {"message": "File deleted successfully"}

    async def handle_get_info(self, file_id: str) -> Dict[str, Any]:
        """处理文件信息查询"""
        stored = await self.upload_service.get_file_info(file_id)
        return stored.to_dict()

    async def handle_list(self) -> Dict[str, Any]:
        """处理文件列表查询"""
        files = await self.upload_service.list_files()
        return {"files": [stored.to_dict() for stored in files]}

    async def handle_compression_status(self) -> Dict[str, Any]:
        """处理压缩功能状态查询"""
        available = await self.upload_service.is_compression_available()
        return {
            "ghostscriptAvailable": available,
            "compressionEnabled": available,
            "message": (
                "PDF compression is available and enabled"
                if available
                else "PDF compression is disabled - Ghostscript not found"
            ),
        }
