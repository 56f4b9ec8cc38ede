"""
PDF上传服务模块
"""

from .handler import PdfUploadHandler, build_upload_response
from .service import PdfUploadResult, PdfUploadService, should_compress

__all__ = [
    'PdfUploadHandler',
    'PdfUploadResult',
    'PdfUploadService',
    'build_upload_response',
    'should_compress',
]
