"""
数据模型模块
"""

from .chapter_resource import ChapterResource, RESOURCE_TYPE_PDF
from .page_view import PageView, APP_OPEN_PAGE

__all__ = [
    'ChapterResource',
    'RESOURCE_TYPE_PDF',
    'PageView',
    'APP_OPEN_PAGE',
]
