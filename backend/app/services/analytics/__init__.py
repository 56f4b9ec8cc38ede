"""
统计服务模块
"""

from .service import AnalyticsService, normalize_platform

__all__ = [
    'AnalyticsService',
    'normalize_platform',
]
