"""
存储适配器模块
提供各种存储服务的适配器实现
"""

from app.core.storage.adapters.local_file import LocalFileStorage

__all__ = [
    'LocalFileStorage',
]
