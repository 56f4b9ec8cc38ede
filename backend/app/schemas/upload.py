"""
PDF上传相关的Pydantic模型
"""

from typing import List, Optional

from pydantic import BaseModel

from app.schemas.common import CamelModel


class PdfUploadResponse(CamelModel):
    """PDF上传响应"""
    message: str
    file_id: str
    file_name: str
    original_name: str
    size: int
    original_size: Optional[str] = None
    compression_ratio: Optional[str] = None
    url: str
    file_path: str
    viewing_url: str
    embedded_url: str


class StoredFileResponse(CamelModel):
    """已存储文件信息"""
    id: str
    name: str
    file_path: str
    url: str
    mime_type: str
    size: str


class FileListResponse(BaseModel):
    """文件列表响应"""
    files: List[StoredFileResponse]


class CompressionStatusResponse(CamelModel):
    """压缩功能状态响应"""
    ghostscript_available: bool
    compression_enabled: bool
    message: str
