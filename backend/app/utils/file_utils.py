"""
文件工具模块
提供统一的文件处理函数
"""

from pathlib import Path
from typing import Union

PDF_MIME_TYPE = "application/pdf"
PDF_EXTENSION = ".pdf"


def get_file_extension(file_path: Union[str, Path]) -> str:
    """
    获取文件扩展名（小写）

    Args:
        file_path: 文件路径

    Returns:
        str: 文件扩展名（如：.pdf）
    """
    return Path(file_path).suffix.lower()


def get_human_readable_size(size_bytes: int) -> str:
    """
    将字节大小转换为人类可读的格式

    Args:
        size_bytes: 字节大小

    Returns:
        str: 人类可读的大小（如：1.50 MB）
    """
    if size_bytes == 0:
        return "0 B"

    size_names = ["B", "KB", "MB", "GB", "TB"]
    size = float(size_bytes)
    i = 0
    while size >= 1024 and i < len(size_names) - 1:
        size /= 1024.0
        i += 1

    return f"{size:.2f} {size_names[i]}"
