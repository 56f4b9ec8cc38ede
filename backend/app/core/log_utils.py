"""
统一日志管理模块
提供标准化的结构化日志记录功能
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from app.core.config import settings
from app.core.log_messages import log_messages

# LogRecord 自带的属性名，不能作为 extra 字段传入
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class UnifiedLogger:
    """统一的业务日志记录器，提供结构化日志记录功能"""

    def __init__(self, name: str):
        """初始化日志记录器"""
        self.logger = logging.getLogger(name)
        self.name = name

    def _format_extra_data(self, **kwargs: Any) -> Dict[str, Any]:
        """格式化日志额外数据，与 LogRecord 属性冲突的字段加 ctx_ 前缀"""
        safe_kwargs = {
            (f"ctx_{key}" if key in _RESERVED_RECORD_ATTRS else key): value
            for key, value in kwargs.items()
        }
        return log_messages.get_structured_data(
            log_module=self.name,
            **safe_kwargs
        )

    @staticmethod
    def _render(message_template: str, **kwargs: Any) -> str:
        """
        渲染日志消息

        只有提供了格式化参数时才进行格式化，避免对已格式化字符串做二次格式化；
        格式化失败时退回原始模板。
        """
        if not kwargs:
            return message_template
        try:
            return log_messages.format_message(message_template, **kwargs)
        except (KeyError, ValueError, IndexError):
            return message_template

    def info(self, message_template: str, **kwargs: Any) -> None:
        """
        记录信息级别日志

        Args:
            message_template: 日志消息，可以是格式化模板或已格式化的字符串
            **kwargs: 格式化参数（可选），同时作为结构化字段记录

        示例:
            logger.info("简单消息")
            logger.info(log_messages.STORAGE_WRITE_SUCCESS, file_name="a.pdf")
        """
        self.logger.info(
            self._render(message_template, **kwargs),
            extra=self._format_extra_data(**kwargs)
        )

    def warning(self, message_template: str, **kwargs: Any) -> None:
        """记录警告级别日志"""
        self.logger.warning(
            self._render(message_template, **kwargs),
            extra=self._format_extra_data(**kwargs)
        )

    def error(self, message_template: str, exception: Optional[BaseException] = None, **kwargs: Any) -> None:
        """
        记录错误级别日志

        Args:
            message_template: 日志消息，可以是格式化模板或已格式化的字符串
            exception: 异常对象（可选）
            **kwargs: 格式化参数（可选）
        """
        message = self._render(message_template, **kwargs)
        extra_data = self._format_extra_data(**kwargs)

        if exception:
            extra_data.update({
                "exception_type": type(exception).__name__,
                "exception_message": str(exception)
            })
            self.logger.error(message, extra=extra_data, exc_info=exception)
        else:
            self.logger.error(message, extra=extra_data)

    def debug(self, message_template: str, **kwargs: Any) -> None:
        """记录调试级别日志，仅在调试模式下输出"""
        if settings.app_debug:
            self.logger.debug(
                self._render(message_template, **kwargs),
                extra=self._format_extra_data(**kwargs)
            )

    def critical(self, message_template: str, **kwargs: Any) -> None:
        """记录严重错误级别日志"""
        self.logger.critical(
            self._render(message_template, **kwargs),
            extra=self._format_extra_data(**kwargs)
        )


# 全局日志实例缓存
_loggers_cache: Dict[str, UnifiedLogger] = {}


def get_logger(name: str = __name__) -> UnifiedLogger:
    """
    获取统一的业务日志记录器

    Args:
        name: 日志记录器名称，默认为当前模块名

    Returns:
        UnifiedLogger实例
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = UnifiedLogger(name)
    return _loggers_cache[name]


def setup_logging() -> None:
    """配置全局日志系统"""
    log_dir = Path(settings.absolute_log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    log_level = logging.DEBUG if settings.app_debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    root_logger.setLevel(log_level)

    # 清除现有的处理器
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_dir / settings.log_file, encoding="utf-8")
    file_handler.setLevel(logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    formatter = logging.Formatter(settings.log_format)
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # 设置第三方库的日志级别
    for logger_name in ("uvicorn", "fastapi", "sqlalchemy", "multipart"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    get_logger(__name__).info(log_messages.OPERATION_SUCCESS, operation_name="日志系统配置")
