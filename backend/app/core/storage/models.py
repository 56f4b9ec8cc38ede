"""
存储服务数据模型
定义存储操作中使用的数据结构
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict

from app.utils.file_utils import PDF_MIME_TYPE


@dataclass(frozen=True)
class StoredFile:
    """
    已存储文件

    创建后不可变，只能通过显式删除销毁。上层只持有 name/url 作为引用，
    文件字节由存储服务独占管理。

    Attributes:
        id: 文件标识
        name: 唯一存储文件名
        file_path: 存储根目录内的绝对路径
        url: 外部可访问的定位地址
        mime_type: MIME类型
        size: 文件大小（字节）
    """
    id: str
    name: str
    file_path: str
    url: str
    size: int
    mime_type: str = PDF_MIME_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """转换为接口返回的字典格式"""
        data = asdict(self)
        return {
            "id": data["id"],
            "name": data["name"],
            "filePath": data["file_path"],
            "url": data["url"],
            "mimeType": data["mime_type"],
            "size": str(data["size"]),
        }


__all__ = [
    'StoredFile',
]
