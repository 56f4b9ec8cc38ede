"""
章节资源服务模块
"""

from .service import ChapterResourceFileService

__all__ = [
    'ChapterResourceFileService',
]
