"""
PDF压缩数据模型
"""

from dataclasses import dataclass
from typing import Optional

SUPPORTED_QUALITIES = ("screen", "ebook", "printer", "prepress")
SUPPORTED_COMPATIBILITY_LEVELS = ("1.3", "1.4", "1.5", "1.6", "1.7")


@dataclass(frozen=True)
class CompressionOptions:
    """
    压缩参数

    Attributes:
        quality: Ghostscript PDFSETTINGS 预设
        compatibility_level: 输出PDF的兼容版本
    """
    quality: str = "ebook"
    compatibility_level: str = "1.4"

    def __post_init__(self) -> None:
        if self.quality not in SUPPORTED_QUALITIES:
            raise ValueError(f"不支持的压缩质量: {self.quality}")
        if self.compatibility_level not in SUPPORTED_COMPATIBILITY_LEVELS:
            raise ValueError(f"不支持的PDF兼容级别: {self.compatibility_level}")


@dataclass(frozen=True)
class CompressionOutcome:
    """
    单次压缩的结果，只在一次上传请求内使用，不做持久化

    Attributes:
        succeeded: 是否压缩成功
        original_size: 原始大小（字节）
        compressed_size: 压缩后大小（字节）
        ratio_percent: 体积减少的百分比（整数）
        error: 失败原因
    """
    succeeded: bool
    original_size: int = 0
    compressed_size: int = 0
    ratio_percent: int = 0
    error: Optional[str] = None

    @classmethod
    def failure(cls, error: str) -> "CompressionOutcome":
        return cls(succeeded=False, error=error)


@dataclass(frozen=True)
class CommandResult:
    """子进程执行结果"""
    returncode: Optional[int]
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    output_overflow: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and not self.output_overflow

    @property
    def diagnostic(self) -> str:
        """用于错误消息的诊断文本"""
        if self.timed_out:
            return "Ghostscript timed out"
        if self.output_overflow:
            return "Ghostscript output exceeded buffer limit"
        text = (self.stderr or self.stdout).strip()
        return text or f"Ghostscript exited with code {self.returncode}"


__all__ = [
    'SUPPORTED_QUALITIES',
    'SUPPORTED_COMPATIBILITY_LEVELS',
    'CompressionOptions',
    'CompressionOutcome',
    'CommandResult',
]
