"""
PDF处理模块
提供基于 Ghostscript 的PDF压缩能力
"""

from app.core.pdf.compressor import (
    GhostscriptCompressor,
    calculate_compression_ratio,
    cleanup_temp_file,
    get_optimal_quality,
    validate_command_path,
)
from app.core.pdf.models import (
    CommandResult,
    CompressionOptions,
    CompressionOutcome,
    SUPPORTED_COMPATIBILITY_LEVELS,
    SUPPORTED_QUALITIES,
)

__all__ = [
    'GhostscriptCompressor',
    'calculate_compression_ratio',
    'cleanup_temp_file',
    'get_optimal_quality',
    'validate_command_path',
    'CommandResult',
    'CompressionOptions',
    'CompressionOutcome',
    'SUPPORTED_COMPATIBILITY_LEVELS',
    'SUPPORTED_QUALITIES',
]
