"""
日志系统单元测试
遵循项目测试规范：快速执行，无外部依赖
"""

import logging
from unittest.mock import patch

import pytest

from app.core.log_messages import LogMessages, log_messages
from app.core.log_utils import UnifiedLogger, get_logger


@pytest.mark.unit
@pytest.mark.logging
class TestUnifiedLogger:
    """UnifiedLogger 单元测试类"""

    def setup_method(self):
        self.unified_logger = UnifiedLogger("test_upload_logger")

    def test_init(self):
        assert self.unified_logger.name == "test_upload_logger"
        assert isinstance(self.unified_logger.logger, logging.Logger)

    def test_template_is_formatted_and_fields_kept(self):
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info(log_messages.PDF_UPLOAD_SUCCESS, file_name="pdf-1.pdf")

            args, kwargs = mock_info.call_args
            assert args[0] == "PDF上传成功: pdf-1.pdf"
            assert kwargs['extra']['file_name'] == "pdf-1.pdf"
            assert kwargs['extra']['log_module'] == "test_upload_logger"

    def test_preformatted_message_with_braces_is_untouched(self):
        """已格式化的消息中含有花括号时不再二次格式化"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            message = "压缩结果: {'ratio': 40}"
            self.unified_logger.info(message)

            assert mock_info.call_args[0][0] == message

    def test_missing_template_field_falls_back_to_template(self):
        with patch.object(self.unified_logger.logger, 'warning') as mock_warning:
            self.unified_logger.warning(log_messages.RATE_LIMITED, other="x")

            assert mock_warning.call_args[0][0] == log_messages.RATE_LIMITED

    def test_reserved_record_attributes_are_prefixed(self):
        """与 LogRecord 属性同名的字段加 ctx_ 前缀，避免 logging 抛出 KeyError"""
        with patch.object(self.unified_logger.logger, 'info') as mock_info:
            self.unified_logger.info("上传 {filename}", filename="a.pdf")

            args, kwargs = mock_info.call_args
            assert args[0] == "上传 a.pdf"
            assert kwargs['extra']['ctx_filename'] == "a.pdf"
            assert 'filename' not in kwargs['extra']

    def test_reserved_attribute_reaches_real_handler(self, caplog):
        logger = UnifiedLogger("test_reserved_handler")
        with caplog.at_level(logging.INFO, logger="test_reserved_handler"):
            logger.info("模块 {module}", module="upload")

        assert "模块 upload" in caplog.text

    def test_error_with_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            error = OSError("No space left on device")
            self.unified_logger.error(
                log_messages.STORAGE_WRITE_FAILED, exception=error, file_name="pdf-1.pdf"
            )

            args, kwargs = mock_error.call_args
            assert args[0] == "本地文件写入失败: pdf-1.pdf"
            assert kwargs['extra']['exception_type'] == 'OSError'
            assert kwargs['extra']['exception_message'] == "No space left on device"
            assert kwargs['exc_info'] is error

    def test_error_without_exception(self):
        with patch.object(self.unified_logger.logger, 'error') as mock_error:
            self.unified_logger.error(log_messages.STORAGE_LIST_FAILED)

            assert 'exc_info' not in mock_error.call_args[1]

    @patch('app.core.log_utils.settings')
    def test_debug_when_debug_enabled(self, mock_settings):
        mock_settings.app_debug = True

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug(log_messages.RATE_LIMIT_SWEEP, removed=1, remaining=0)

            mock_debug.assert_called_once()

    @patch('app.core.log_utils.settings')
    def test_debug_when_debug_disabled(self, mock_settings):
        mock_settings.app_debug = False

        with patch.object(self.unified_logger.logger, 'debug') as mock_debug:
            self.unified_logger.debug("调试消息")

            mock_debug.assert_not_called()

    def test_critical(self):
        with patch.object(self.unified_logger.logger, 'critical') as mock_critical:
            self.unified_logger.critical("上传目录不可写")

            mock_critical.assert_called_once()


@pytest.mark.unit
@pytest.mark.logging
class TestGetLogger:
    """get_logger 单元测试类"""

    def test_get_logger_caching(self):
        assert get_logger("app.services.upload") is get_logger("app.services.upload")

    def test_get_logger_different_names(self):
        logger1 = get_logger("module1")
        logger2 = get_logger("module2")

        assert logger1 is not logger2
        assert logger2.name == "module2"


@pytest.mark.unit
@pytest.mark.logging
class TestLogMessages:
    """LogMessages 单元测试类"""

    def test_format_message(self):
        result = LogMessages.format_message(
            LogMessages.COMPRESSION_SUCCESS,
            original_size=5_000_000,
            compressed_size=3_000_000,
            ratio=40
        )

        assert result == "PDF压缩完成: 5000000 -> 3000000 字节，压缩率 40%"

    def test_get_structured_data(self):
        assert LogMessages.get_structured_data(client_key="1.2.3.4", count=5) == {
            "client_key": "1.2.3.4",
            "count": 5,
        }
