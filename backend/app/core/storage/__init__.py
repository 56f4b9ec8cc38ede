"""
存储服务模块
提供统一的存储服务访问接口，支持多种存储适配器
"""

from typing import Any, Optional

from app.core.storage.base_storage import BaseStorage
from app.core.storage.adapters.local_file import LocalFileStorage
from app.core.storage.exceptions import *
from app.core.storage.factory import (
    create_adapter,
    list_available_adapters,
    register_adapter,
)
from app.core.storage.models import *

# 自动注册本地文件存储适配器
register_adapter(LocalFileStorage.ADAPTER_NAME, LocalFileStorage)


def get_storage_service(adapter_name: Optional[str] = None, **kwargs: Any) -> BaseStorage:
    """
    创建存储服务实例

    应用启动时调用一次，得到的实例挂在 app.state 上供各请求注入使用。

    Args:
        adapter_name: 适配器名称，不指定则使用本地文件存储
        **kwargs: 适配器构造参数（如 root_dir、base_url）

    Returns:
        BaseStorage: 存储服务实例

    Example:
        >>> storage = get_storage_service()
        >>> storage = get_storage_service('local', root_dir='/tmp/uploads')
    """
    return create_adapter(adapter_name or LocalFileStorage.ADAPTER_NAME, **kwargs)


__all__ = [
    # 工厂函数
    'get_storage_service',
    'create_adapter',
    'list_available_adapters',
    'register_adapter',
    # 抽象接口
    'BaseStorage',
    # 适配器类
    'LocalFileStorage',
    # 数据模型
    'StoredFile',
    # 异常
    'StorageError',
    'ConfigurationError',
    'StorageWriteError',
    'StorageAccessError',
    'DeleteError',
]
