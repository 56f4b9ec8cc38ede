"""
Repository模块
提供数据访问层的统一接口
"""

from .base import BaseRepository
from .chapter_resource import ChapterResourceRepository
from .page_view import PageViewRepository

__all__ = [
    "BaseRepository",
    "ChapterResourceRepository",
    "PageViewRepository",
]
