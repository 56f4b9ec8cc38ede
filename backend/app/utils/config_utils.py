"""
配置工具模块
处理配置加载、路径计算等工具方法
"""

import json
import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """获取项目根目录路径（backend 的上一级）"""
    return Path(__file__).resolve().parents[3]


def get_workspace_path(sub_path: str = "") -> Path:
    """
    获取workspace目录下的路径

    sub_path 为绝对路径时直接返回，便于通过环境变量把上传目录指向其他磁盘
    """
    if sub_path and Path(sub_path).is_absolute():
        return Path(sub_path)
    workspace_dir = get_project_root() / "workspace"
    return workspace_dir / sub_path if sub_path else workspace_dir


def get_config_path(sub_path: str = "") -> Path:
    """获取config目录路径"""
    config_dir = get_project_root() / "config"
    return config_dir / sub_path if sub_path else config_dir


def parse_json_config(value: str) -> List[str]:
    """
    解析列表类型的配置

    优先按JSON数组解析，否则按逗号分隔处理：
    ``'["http://a", "http://b"]'`` 与 ``"http://a, http://b"`` 结果相同
    """
    if not value:
        return []
    stripped = value.strip()
    if stripped.startswith("["):
        try:
            return [str(item) for item in json.loads(stripped)]
        except json.JSONDecodeError:
            logger.warning("JSON配置解析失败: %s", value)
            return []
    return [item.strip() for item in stripped.split(",") if item.strip()]
