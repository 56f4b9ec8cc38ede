"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== PDF上传相关 ====================
    PDF_UPLOAD_START = "开始上传PDF: {original_name} ({size})"
    PDF_UPLOAD_SUCCESS = "PDF上传成功: {file_name}"
    PDF_UPLOAD_FAILED = "PDF上传失败"
    PDF_VALIDATION_FAILED = "PDF文件验证失败: {reason}"
    PDF_STAGED = "原始PDF已暂存: {file_name}"
    PDF_COMPRESSION_FALLBACK = "PDF压缩失败，使用原始文件: {file_name}"
    PDF_COMPRESSION_SKIPPED = "跳过PDF压缩: {reason}"
    PDF_STAGING_CLEANUP_FAILED = "清理暂存文件失败: {file_name}"

    # ==================== 本地存储相关 ====================
    STORAGE_WRITE_START = "开始写入本地文件: {file_name}"
    STORAGE_WRITE_SUCCESS = "本地文件写入成功: {file_name}"
    STORAGE_WRITE_FAILED = "本地文件写入失败: {file_name}"
    STORAGE_DELETE_SUCCESS = "本地文件删除成功: {file_name}"
    STORAGE_DELETE_MISSING = "待删除的文件不存在: {file_name}"
    STORAGE_DELETE_FAILED = "本地文件删除失败: {file_name}"
    STORAGE_ACCESS_DENIED = "拒绝访问存储根目录之外的路径: {target}"
    STORAGE_LIST_FAILED = "列出本地文件失败"

    # ==================== PDF压缩相关 ====================
    COMPRESSION_START = "开始压缩PDF: {file_name}"
    COMPRESSION_SUCCESS = "PDF压缩完成: {original_size} -> {compressed_size} 字节，压缩率 {ratio}%"
    COMPRESSION_FAILED = "PDF压缩失败: {error}"
    COMPRESSION_TIMEOUT = "PDF压缩超时({timeout}秒)"
    GHOSTSCRIPT_UNAVAILABLE = "Ghostscript不可用，PDF压缩已禁用"
    TEMP_FILE_CLEANED = "已清理临时文件: {file_name}"
    TEMP_FILE_CLEANUP_FAILED = "清理临时文件失败: {file_name}"

    # ==================== 限流相关 ====================
    RATE_LIMITED = "请求被限流: {client_key}"
    RATE_LIMIT_SWEEP = "限流记录清理完成，移除 {removed} 条，剩余 {remaining} 条"
    RATE_LIMIT_SWEEP_FAILED = "限流记录清理失败"

    # ==================== 统计相关 ====================
    APP_OPEN_TRACKED = "记录应用打开: {platform}"
    APP_OPEN_TRACK_FAILED = "记录应用打开失败"

    # ==================== 课程资源相关 ====================
    RESOURCE_NOT_FOUND = "课程资源不存在: {resource_id}"
    RESOURCE_DELETE_SUCCESS = "课程资源已删除: {resource_id}"
    RESOURCE_FILE_DETACHED = "课程资源文件已解除关联: {resource_id}"
    RESOURCE_FILE_DELETE_FAILED = "删除课程资源关联文件失败: {resource_id}"

    # ==================== 认证相关 ====================
    AUTH_TOKEN_MISSING = "缺少访问令牌"
    AUTH_TOKEN_INVALID = "访问令牌无效或已过期"

    # ==================== 数据库操作相关 ====================
    DB_QUERY_FAILED = "数据库查询失败"
    DB_UPDATE_SUCCESS = "数据库更新成功"
    DB_UPDATE_FAILED = "数据库更新失败"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
