"""
测试工具包
提供统一的测试工具和辅助函数
"""

from .mock_utils import (
    PDF_BYTES,
    FakeClock,
    MockBuilder,
    make_gs_runner,
    output_path_from_argv,
)

__all__ = [
    'PDF_BYTES',
    'FakeClock',
    'MockBuilder',
    'make_gs_runner',
    'output_path_from_argv',
]
