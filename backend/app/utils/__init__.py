"""
通用工具模块包
提供项目通用的工具函数和辅助类
"""

from .config_utils import (
    get_project_root,
    get_workspace_path,
    get_config_path,
    parse_json_config
)

from .id_utils import (
    generate_uuid,
    generate_unique_suffix
)

from .datetime_utils import (
    get_current_timestamp_ms,
    utc_now_naive,
    days_ago,
    to_iso_string
)

from .file_utils import (
    PDF_MIME_TYPE,
    PDF_EXTENSION,
    get_file_extension,
    get_human_readable_size
)

__all__ = [
    # 配置工具
    'get_project_root',
    'get_workspace_path',
    'get_config_path',
    'parse_json_config',
    # ID工具
    'generate_uuid',
    'generate_unique_suffix',
    # 时间工具
    'get_current_timestamp_ms',
    'utc_now_naive',
    'days_ago',
    'to_iso_string',
    # 文件工具
    'PDF_MIME_TYPE',
    'PDF_EXTENSION',
    'get_file_extension',
    'get_human_readable_size',
]
