"""
Ghostscript PDF压缩器
以参数列表方式调用 gs 子进程（不经过 shell），带超时和输出缓冲上限
"""

import asyncio
import math
import os
from pathlib import Path
from typing import List, Optional, Sequence

from app.core.config import settings
from app.core.exceptions import InvalidPathError
from app.core.log_messages import log_messages
from app.core.log_utils import get_logger
from app.core.pdf.models import CommandResult, CompressionOptions, CompressionOutcome

logger = get_logger(__name__)

_READ_CHUNK_SIZE = 64 * 1024


class _OutputOverflow(Exception):
    """子进程输出超过缓冲上限"""


async def _read_bounded(stream: Optional[asyncio.StreamReader], limit: int) -> bytes:
    """读取子进程输出，超过上限时抛出 _OutputOverflow"""
    if stream is None:
        return b""
    buffer = bytearray()
    while True:
        chunk = await stream.read(_READ_CHUNK_SIZE)
        if not chunk:
            return bytes(buffer)
        if len(buffer) + len(chunk) > limit:
            raise _OutputOverflow()
        buffer.extend(chunk)


def validate_command_path(path: str) -> str:
    """
    校验传给子进程的文件路径

    Args:
        path: 文件路径

    Returns:
        str: 规范化后的路径

    Raises:
        InvalidPathError: 非绝对路径或包含上级目录片段
    """
    if not path or not os.path.isabs(path):
        raise InvalidPathError("Both input and output paths must be absolute")
    if ".." in Path(path).parts:
        raise InvalidPathError("Path traversal detected")
    return os.path.normpath(path)


def calculate_compression_ratio(original_size: int, compressed_size: int) -> int:
    """
    计算体积减少的百分比，四舍五入取整（.5 向上取整）

    >>> calculate_compression_ratio(5_000_000, 3_000_000)
    40
    """
    if original_size <= 0:
        return 0
    return int(math.floor((original_size - compressed_size) / original_size * 100 + 0.5))


def get_optimal_quality(file_size_bytes: int) -> str:
    """
    根据文件大小选择压缩质量

    > 10MB 使用 screen（压缩率最高），> 5MB 使用 ebook，其余使用 printer 以保证清晰度
    """
    file_size_mb = file_size_bytes / (1024 * 1024)
    if file_size_mb > 10:
        return "screen"
    if file_size_mb > 5:
        return "ebook"
    return "printer"


def cleanup_temp_file(file_path: str) -> None:
    """安全删除临时文件，失败只记录日志"""
    try:
        if os.path.exists(file_path):
            os.remove(file_path)
            logger.debug(log_messages.TEMP_FILE_CLEANED, file_name=os.path.basename(file_path))
    except OSError as e:
        logger.error(
            log_messages.TEMP_FILE_CLEANUP_FAILED,
            exception=e,
            file_name=os.path.basename(file_path)
        )


class GhostscriptCompressor:
    """Ghostscript 压缩器"""

    def __init__(
        self,
        binary: Optional[str] = None,
        timeout: Optional[float] = None,
        probe_timeout: Optional[float] = None,
        max_output_bytes: Optional[int] = None
    ) -> None:
        self.binary = binary or settings.ghostscript_binary
        self.timeout = timeout if timeout is not None else settings.ghostscript_timeout
        self.probe_timeout = (
            probe_timeout if probe_timeout is not None else settings.ghostscript_probe_timeout
        )
        self.max_output_bytes = max_output_bytes or settings.ghostscript_max_output_bytes

    def build_command(
        self,
        input_path: str,
        output_path: str,
        options: CompressionOptions
    ) -> List[str]:
        """构建 gs 参数列表"""
        return [
            self.binary,
            "-sDEVICE=pdfwrite",
            f"-dCompatibilityLevel={options.compatibility_level}",
            f"-dPDFSETTINGS=/{options.quality}",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            "-dSAFER",
            f"-sOutputFile={output_path}",
            input_path,
        ]

    async def _run_command(self, argv: Sequence[str], timeout: float) -> CommandResult:
        """
        执行子进程并收集输出

        超时或输出超过上限时终止子进程，结果中标记 timed_out / output_overflow。

        Raises:
            OSError: 可执行文件不存在等无法启动子进程的情况
        """
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

        async def communicate() -> CommandResult:
            stdout, stderr = await asyncio.gather(
                _read_bounded(process.stdout, self.max_output_bytes),
                _read_bounded(process.stderr, self.max_output_bytes),
            )
            returncode = await process.wait()
            return CommandResult(
                returncode=returncode,
                stdout=stdout.decode("utf-8", errors="replace"),
                stderr=stderr.decode("utf-8", errors="replace"),
            )

        try:
            return await asyncio.wait_for(communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            await self._kill(process)
            return CommandResult(returncode=process.returncode, timed_out=True)
        except _OutputOverflow:
            await self._kill(process)
            return CommandResult(returncode=process.returncode, output_overflow=True)

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        if process.returncode is None:
            try:
                process.kill()
            except ProcessLookupError:
                pass
        await process.wait()

    async def is_available(self) -> bool:
        """
        检查 Ghostscript 是否可用

        失败不会抛出异常，只返回 False。
        """
        try:
            result = await self._run_command([self.binary, "--version"], self.probe_timeout)
        except Exception as e:
            logger.debug(log_messages.GHOSTSCRIPT_UNAVAILABLE, error=str(e))
            return False
        if not result.ok:
            logger.debug(log_messages.GHOSTSCRIPT_UNAVAILABLE, error=result.diagnostic)
            return False
        return True

    async def compress(
        self,
        input_path: str,
        output_path: str,
        options: Optional[CompressionOptions] = None
    ) -> CompressionOutcome:
        """
        压缩PDF

        Args:
            input_path: 输入PDF的绝对路径
            output_path: 输出PDF的绝对路径
            options: 压缩参数，缺省使用配置中的默认值

        Returns:
            CompressionOutcome: 压缩结果，超时、非零退出码或没有生成输出文件时
            succeeded 为 False

        Raises:
            InvalidPathError: 路径不是绝对路径或包含上级目录片段
        """
        source = validate_command_path(input_path)
        target = validate_command_path(output_path)
        options = options or CompressionOptions(
            quality=settings.pdf_default_quality,
            compatibility_level=settings.pdf_default_compatibility_level,
        )

        if not os.path.isfile(source):
            return self._fail(target, f"Input file does not exist: {os.path.basename(source)}")

        original_size = os.path.getsize(source)
        os.makedirs(os.path.dirname(target), exist_ok=True)

        logger.info(log_messages.COMPRESSION_START, file_name=os.path.basename(source))

        try:
            result = await self._run_command(
                self.build_command(source, target, options), self.timeout
            )
        except OSError as e:
            return self._fail(target, str(e))

        if result.timed_out:
            logger.warning(log_messages.COMPRESSION_TIMEOUT, timeout=self.timeout)
        if not result.ok:
            return self._fail(target, result.diagnostic)

        if not os.path.isfile(target):
            return self._fail(target, "Compressed PDF was not created")

        compressed_size = os.path.getsize(target)
        ratio = calculate_compression_ratio(original_size, compressed_size)

        logger.info(
            log_messages.COMPRESSION_SUCCESS,
            original_size=original_size,
            compressed_size=compressed_size,
            ratio=ratio
        )
        return CompressionOutcome(
            succeeded=True,
            original_size=original_size,
            compressed_size=compressed_size,
            ratio_percent=ratio,
        )

    def _fail(self, output_path: str, error: str) -> CompressionOutcome:
        """记录失败并清理可能残留的输出文件"""
        logger.error(log_messages.COMPRESSION_FAILED, error=error)
        cleanup_temp_file(output_path)
        return CompressionOutcome.failure(error)


__all__ = [
    'GhostscriptCompressor',
    'validate_command_path',
    'calculate_compression_ratio',
    'get_optimal_quality',
    'cleanup_temp_file',
]
