"""
PDF上传服务
编排 接收校验 -> 决定是否压缩 -> 暂存原始文件 -> 压缩 -> 返回 的上传流程
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from app.core.config import settings
from app.core.exceptions import (
    CompressionFailedError,
    NoFileProvidedError,
    NotFoundError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.pdf import CompressionOutcome, GhostscriptCompressor
from app.core.storage import BaseStorage, StorageError, StoredFile
from app.utils.file_utils import (
    PDF_EXTENSION,
    PDF_MIME_TYPE,
    get_human_readable_size,
)
from app.utils.id_utils import generate_unique_suffix

logger = get_logger(__name__)

MESSAGE_COMPRESSED = "File uploaded and compressed successfully"
MESSAGE_NOT_COMPRESSED = "File uploaded successfully (no compression)"
MESSAGE_COMPRESSOR_UNAVAILABLE = (
    "File uploaded successfully (Ghostscript not available for compression)"
)
MESSAGE_COMPRESSION_FALLBACK = (
    "File uploaded successfully (compression failed, using original)"
)

STAGING_PREFIX = "temp-"
COMPRESSED_PREFIX = "compressed-"


@dataclass(frozen=True)
class PdfUploadResult:
    """
    一次上传的结果

    Attributes:
        stored: 最终保存的文件
        original_name: 客户端提供的原始文件名
        message: 响应提示消息
        compression: 压缩成功时的压缩结果
    """
    stored: StoredFile
    original_name: str
    message: str
    compression: Optional[CompressionOutcome] = None


def should_compress(compress_flag: Optional[str], size: int) -> bool:
    """
    是否尝试压缩

    除非调用方显式传入 "false"，否则都尝试压缩；超过阈值的文件总是尝试压缩。
    """
    return compress_flag != "false" or size > settings.compression_threshold_bytes


class PdfUploadService:
    """PDF上传服务"""

    def __init__(self, storage: BaseStorage, compressor: GhostscriptCompressor):
        self.storage = storage
        self.compressor = compressor

    def validate_upload(self, data: Optional[bytes], content_type: Optional[str]) -> bytes:
        """
        校验上传内容，失败时不会写入任何文件

        Raises:
            NoFileProvidedError: 没有文件
            UnsupportedMediaTypeError: MIME类型不是PDF
            PayloadTooLargeError: 超过大小上限
        """
        if data is None:
            raise NoFileProvidedError("No file uploaded")
        if content_type != PDF_MIME_TYPE:
            logger.warning(log_messages.PDF_VALIDATION_FAILED, reason=f"content_type={content_type}")
            raise UnsupportedMediaTypeError("Only PDF files are allowed")
        if len(data) > settings.max_pdf_upload_size:
            logger.warning(log_messages.PDF_VALIDATION_FAILED, reason=f"size={len(data)}")
            raise PayloadTooLargeError("File too large")
        return data

    async def upload_pdf(
        self,
        data: Optional[bytes],
        content_type: Optional[str],
        original_name: str,
        field_name: str = "pdf",
        compress_flag: Optional[str] = None
    ) -> PdfUploadResult:
        """
        上传PDF

        Args:
            data: 文件内容
            content_type: 声明的MIME类型
            original_name: 原始文件名
            field_name: 表单字段名，作为存储文件名的前缀
            compress_flag: 表单中的 compress 字段

        Returns:
            PdfUploadResult: 上传结果

        Raises:
            NoFileProvidedError, UnsupportedMediaTypeError, PayloadTooLargeError: 校验失败
            StorageError: 写入失败（已尽力清理暂存文件）
            压缩阶段的其他异常同样会先清理暂存文件再抛出
        """
        payload = self.validate_upload(data, content_type)
        logger.info(
            log_messages.PDF_UPLOAD_START,
            original_name=original_name,
            size=get_human_readable_size(len(payload))
        )

        wants_compression = should_compress(compress_flag, len(payload))
        compressor_available = await self.compressor.is_available()

        # 已校验为PDF，扩展名不取自客户端文件名
        file_name = f"{field_name}-{generate_unique_suffix()}{PDF_EXTENSION}"

        if not wants_compression or not compressor_available:
            stored = await self.storage.store(payload, file_name, original_name)
            message = (
                MESSAGE_NOT_COMPRESSED if compressor_available else MESSAGE_COMPRESSOR_UNAVAILABLE
            )
            logger.info(log_messages.PDF_COMPRESSION_SKIPPED, reason=message)
            logger.info(log_messages.PDF_UPLOAD_SUCCESS, file_name=stored.name)
            return PdfUploadResult(stored=stored, original_name=original_name, message=message)

        staged = await self.storage.store(payload, f"{STAGING_PREFIX}{file_name}", original_name)
        logger.info(log_messages.PDF_STAGED, file_name=staged.name)

        compressed_path = str(Path(staged.file_path).parent / f"{COMPRESSED_PREFIX}{file_name}")

        try:
            outcome = await self._compress_staged(staged, compressed_path)
        except CompressionFailedError as e:
            logger.warning(log_messages.PDF_COMPRESSION_FALLBACK, file_name=staged.name, error=e.message)
            await self._discard(compressed_path)
            return PdfUploadResult(
                stored=staged,
                original_name=original_name,
                message=MESSAGE_COMPRESSION_FALLBACK,
            )
        except Exception as e:
            logger.error(log_messages.PDF_UPLOAD_FAILED, exception=e, file_name=file_name)
            await self._discard(staged.file_path)
            await self._discard(compressed_path)
            raise

        try:
            final = await self.storage.store_from_path(compressed_path, file_name, original_name)
        except Exception as e:
            logger.error(log_messages.PDF_UPLOAD_FAILED, exception=e, file_name=file_name)
            await self._discard(staged.file_path)
            await self._discard(compressed_path)
            raise

        await self._discard(staged.file_path)
        await self._discard(compressed_path)

        logger.info(log_messages.PDF_UPLOAD_SUCCESS, file_name=final.name)
        return PdfUploadResult(
            stored=final,
            original_name=original_name,
            message=MESSAGE_COMPRESSED,
            compression=outcome,
        )

    async def _compress_staged(self, staged: StoredFile, output_path: str) -> CompressionOutcome:
        outcome = await self.compressor.compress(staged.file_path, output_path)
        if not outcome.succeeded:
            raise CompressionFailedError(outcome.error or "Compression failed")
        return outcome

    async def _discard(self, path: str) -> None:
        """尽力删除暂存文件，失败只记录日志"""
        try:
            await self.storage.delete(path)
        except StorageError as e:
            logger.error(
                log_messages.PDF_STAGING_CLEANUP_FAILED,
                exception=e,
                file_name=os.path.basename(path)
            )

    async def delete_file(self, file_id: str) -> bool:
        """删除已上传的文件，文件不存在时不视为错误"""
        return await self.storage.delete(file_id)

    async def get_file_info(self, file_id: str) -> StoredFile:
        """
        获取文件信息

        Raises:
            NotFoundError: 文件不存在
        """
        stored = await self.storage.stat(file_id)
        if stored is None:
            raise NotFoundError("File not found", details={"file_id": file_id})
        return stored

    async def list_files(self) -> List[StoredFile]:
        return await self.storage.list_files()

    async def is_compression_available(self) -> bool:
        return await self.compressor.is_available()
