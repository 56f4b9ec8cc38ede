"""
本地文件存储适配器
实现BaseStorage接口，将上传的PDF保存在本地上传目录中
"""

import asyncio
import re
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional, TypeVar
from urllib.parse import unquote, urlparse

from app.core.config import settings
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.storage.base_storage import BaseStorage
from app.core.storage.exceptions import (
    DeleteError,
    StorageAccessError,
    StorageWriteError,
)
from app.core.storage.models import StoredFile
from app.utils.datetime_utils import get_current_timestamp_ms
from app.utils.file_utils import PDF_EXTENSION, PDF_MIME_TYPE, get_file_extension
from app.utils.id_utils import generate_uuid

logger = get_logger(__name__)

T = TypeVar('T')

_SAFE_EXTENSION = re.compile(r"^\.[a-z0-9]{1,10}$")


class LocalFileStorage(BaseStorage):
    """
    本地文件存储适配器

    所有文件保存在同一个根目录下，文件名格式为
    ``<base>-<毫秒时间戳>-<uuid><扩展名>``，访问地址为 ``<base_url>/uploads/<文件名>``。
    每个进程只需要一个实例，由应用启动时创建并注入到各个服务中。
    """

    # 适配器名称，用于工厂模式注册
    ADAPTER_NAME: str = "local"

    def __init__(
        self,
        root_dir: Optional[str] = None,
        base_url: Optional[str] = None
    ) -> None:
        self.root_dir = Path(root_dir or settings.absolute_upload_dir).resolve()
        self.base_url = (base_url or settings.base_url).rstrip("/")

    async def _run_in_executor(self, func: Callable[..., T], *args) -> T:
        """在线程池中运行阻塞的文件操作"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    def ensure_root(self) -> None:
        """确保存储根目录存在"""
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def generate_storage_name(self, desired_name: str, original_name: str, file_id: str) -> str:
        """
        生成唯一的存储文件名

        Args:
            desired_name: 期望的文件名，只取去掉扩展名后的部分
            original_name: 原始文件名，提供扩展名（缺省或含非法字符时为 .pdf）
            file_id: 文件唯一标识

        Returns:
            str: 存储文件名
        """
        base = Path(Path(desired_name).name).stem or "file"
        extension = get_file_extension(original_name)
        if not _SAFE_EXTENSION.match(extension):
            extension = PDF_EXTENSION
        return f"{base}-{get_current_timestamp_ms()}-{file_id}{extension}"

    def build_url(self, name: str) -> str:
        """生成文件访问URL"""
        return f"{self.base_url}/uploads/{name}"

    def resolve_path(self, name_or_locator: str) -> Path:
        """
        将文件名、绝对路径或访问URL解析为根目录内的路径

        Args:
            name_or_locator: 文件名、绝对路径或访问URL

        Returns:
            Path: 解析后的绝对路径

        Raises:
            StorageAccessError: 解析结果位于根目录之外时抛出
        """
        target = name_or_locator.strip()
        if not target:
            raise StorageAccessError("文件名不能为空")

        parsed = urlparse(target)
        if parsed.scheme in ("http", "https"):
            # URL 只取路径中的最后一段作为文件名
            candidate = self.root_dir / Path(unquote(parsed.path)).name
        elif Path(target).is_absolute():
            candidate = Path(target)
        else:
            candidate = self.root_dir / target

        resolved = candidate.resolve()
        if resolved == self.root_dir or self.root_dir not in resolved.parents:
            logger.warning(log_messages.STORAGE_ACCESS_DENIED, target=name_or_locator)
            raise StorageAccessError(
                "路径位于存储根目录之外",
                details={"target": name_or_locator}
            )
        return resolved

    def _to_stored_file(self, path: Path, size: int, file_id: Optional[str] = None) -> StoredFile:
        return StoredFile(
            id=file_id or path.stem,
            name=path.name,
            file_path=str(path),
            url=self.build_url(path.name),
            size=size,
            mime_type=PDF_MIME_TYPE,
        )

    async def store(
        self,
        data: bytes,
        desired_name: str,
        original_name: str
    ) -> StoredFile:
        """
        保存文件到本地上传目录

        Args:
            data: 文件数据
            desired_name: 期望的文件名
            original_name: 原始文件名

        Returns:
            StoredFile: 已存储文件信息

        Raises:
            StorageWriteError: 写入失败时抛出
        """
        file_id = generate_uuid()
        file_name = self.generate_storage_name(desired_name, original_name, file_id)
        file_path = self.root_dir / file_name

        logger.debug(log_messages.STORAGE_WRITE_START, file_name=file_name)

        try:
            self.ensure_root()
            await self._run_in_executor(file_path.write_bytes, data)
            stat_result = await self._run_in_executor(file_path.stat)
        except (OSError, ValueError) as e:
            # 文件名含 NUL 等字符时 pathlib 抛出 ValueError
            logger.error(log_messages.STORAGE_WRITE_FAILED, exception=e, file_name=file_name)
            try:
                file_path.unlink(missing_ok=True)
            except (OSError, ValueError) as cleanup_error:
                logger.error(
                    log_messages.TEMP_FILE_CLEANUP_FAILED,
                    exception=cleanup_error,
                    file_name=file_name
                )
            raise StorageWriteError(
                "保存文件失败",
                details={"file_name": file_name, "error": str(e)}
            ) from e

        logger.info(
            log_messages.STORAGE_WRITE_SUCCESS,
            file_name=file_name,
            size=stat_result.st_size
        )
        return self._to_stored_file(file_path, stat_result.st_size, file_id=file_id)

    async def store_from_path(
        self,
        source_path: str,
        desired_name: str,
        original_name: str
    ) -> StoredFile:
        """
        读取根目录内的已有文件并以新的文件名保存

        Raises:
            StorageAccessError: 源文件位于根目录之外时抛出
            StorageWriteError: 读取或写入失败时抛出
        """
        source = self.resolve_path(source_path)
        try:
            data = await self._run_in_executor(source.read_bytes)
        except OSError as e:
            raise StorageWriteError(
                "读取源文件失败",
                details={"source": source.name, "error": str(e)}
            ) from e
        return await self.store(data, desired_name, original_name)

    async def delete(self, name_or_locator: str) -> bool:
        """
        删除本地文件，文件不存在时只记录日志

        Args:
            name_or_locator: 文件名、绝对路径或访问URL

        Returns:
            bool: 是否实际删除了文件

        Raises:
            StorageAccessError: 路径位于根目录之外时抛出
            DeleteError: 删除失败时抛出
        """
        path = self.resolve_path(name_or_locator)

        if not path.is_file():
            logger.warning(log_messages.STORAGE_DELETE_MISSING, file_name=path.name)
            return False

        try:
            await self._run_in_executor(path.unlink)
        except FileNotFoundError:
            # 并发删除时文件可能已被移除
            logger.warning(log_messages.STORAGE_DELETE_MISSING, file_name=path.name)
            return False
        except OSError as e:
            logger.error(log_messages.STORAGE_DELETE_FAILED, exception=e, file_name=path.name)
            raise DeleteError("删除文件失败", details={"file_name": path.name}) from e

        logger.info(log_messages.STORAGE_DELETE_SUCCESS, file_name=path.name)
        return True

    async def stat(self, name_or_locator: str) -> Optional[StoredFile]:
        """
        获取文件信息

        Args:
            name_or_locator: 文件名、绝对路径或访问URL

        Returns:
            Optional[StoredFile]: 文件信息，不存在时返回None
        """
        path = self.resolve_path(name_or_locator)
        try:
            stat_result = await self._run_in_executor(path.stat)
        except FileNotFoundError:
            return None
        if not path.is_file():
            return None
        return self._to_stored_file(path, stat_result.st_size)

    async def list_files(self) -> List[StoredFile]:
        """列出上传目录中的所有PDF文件"""
        if not self.root_dir.is_dir():
            return []

        try:
            entries = await self._run_in_executor(lambda: sorted(self.root_dir.iterdir()))
        except OSError as e:
            logger.error(log_messages.STORAGE_LIST_FAILED, exception=e)
            return []

        files: List[StoredFile] = []
        for entry in entries:
            if get_file_extension(entry) != PDF_EXTENSION:
                continue
            stored = await self.stat(entry.name)
            if stored:
                files.append(stored)
        return files


__all__ = [
    'LocalFileStorage',
]
