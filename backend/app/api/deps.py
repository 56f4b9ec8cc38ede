"""
API依赖注入
进程级单例（存储服务、压缩器、限流器）由 main.py 的 lifespan 挂在 app.state 上
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pdf import GhostscriptCompressor
from app.core.rate_limit import RateLimiter
from app.core.storage import BaseStorage
from app.db.database import get_db
from app.services.analytics import AnalyticsService
from app.services.resources import ChapterResourceFileService
from app.services.upload import PdfUploadHandler, PdfUploadService


def get_storage(request: Request) -> BaseStorage:
    return request.app.state.storage


def get_compressor(request: Request) -> GhostscriptCompressor:
    return request.app.state.compressor


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_upload_handler(
    storage: BaseStorage = Depends(get_storage),
    compressor: GhostscriptCompressor = Depends(get_compressor)
) -> PdfUploadHandler:
    return PdfUploadHandler(PdfUploadService(storage, compressor))


def get_analytics_service(db: AsyncSession = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService(db)


def get_resource_file_service(
    db: AsyncSession = Depends(get_db),
    storage: BaseStorage = Depends(get_storage)
) -> ChapterResourceFileService:
    return ChapterResourceFileService(db, storage)
