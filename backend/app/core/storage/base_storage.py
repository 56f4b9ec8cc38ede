"""
存储抽象基类
定义统一的文件存储接口，支持多种存储后端
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from app.core.storage.models import StoredFile


class BaseStorage(ABC):
    """存储抽象基类"""

    @abstractmethod
    async def store(
        self,
        data: bytes,
        desired_name: str,
        original_name: str
    ) -> StoredFile:
        """
        保存文件

        Args:
            data: 文件数据
            desired_name: 期望的文件名（会追加时间戳和唯一标识）
            original_name: 原始文件名，用于确定扩展名

        Returns:
            StoredFile: 已存储文件信息

        Raises:
            StorageWriteError: 写入失败时抛出
        """

    @abstractmethod
    async def store_from_path(
        self,
        source_path: str,
        desired_name: str,
        original_name: str
    ) -> StoredFile:
        """
        将存储内已有的文件以新的文件名保存一份

        Args:
            source_path: 源文件（文件名、绝对路径或访问URL）
            desired_name: 期望的文件名
            original_name: 原始文件名

        Returns:
            StoredFile: 新文件信息
        """

    @abstractmethod
    async def delete(self, name_or_locator: str) -> bool:
        """
        删除文件，文件不存在时不视为错误

        Args:
            name_or_locator: 文件名、绝对路径或访问URL

        Returns:
            bool: 是否实际删除了文件

        Raises:
            StorageAccessError: 路径位于存储根目录之外时抛出
            DeleteError: 删除失败时抛出
        """

    @abstractmethod
    async def stat(self, name_or_locator: str) -> Optional[StoredFile]:
        """
        获取文件元数据（不读取文件内容）

        Args:
            name_or_locator: 文件名、绝对路径或访问URL

        Returns:
            Optional[StoredFile]: 文件信息，不存在时返回None
        """

    @abstractmethod
    async def list_files(self) -> List[StoredFile]:
        """
        列出所有已存储的PDF文件

        Returns:
            List[StoredFile]: 文件列表，顺序不保证
        """

    @abstractmethod
    def build_url(self, name: str) -> str:
        """
        生成文件访问URL

        Args:
            name: 存储文件名

        Returns:
            str: 访问URL
        """


__all__ = [
    'BaseStorage',
]
