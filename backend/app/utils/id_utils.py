"""
ID生成工具模块
提供统一的ID生成方法
"""

import uuid
import random

from app.utils.datetime_utils import get_current_timestamp_ms


def generate_uuid() -> str:
    """生成标准UUID字符串"""
    return str(uuid.uuid4())


def generate_unique_suffix() -> str:
    """
    生成上传文件名使用的唯一后缀（毫秒时间戳 + 随机数）

    Returns:
        str: 形如 ``1718000000000-123456789`` 的后缀
    """
    return f"{get_current_timestamp_ms()}-{random.randint(0, 10 ** 9)}"
