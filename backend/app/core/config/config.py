"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator, ConfigDict

from app.utils.config_utils import (
    get_workspace_path, get_config_path, parse_json_config
)


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "Shala Shikshak"
    app_version: str = "1.0.0"
    app_debug: bool = True
    app_env: str = "development"

    # ==================== API配置 ====================
    api_prefix: str = "/api"
    project_name: str = "Shala Shikshak API"

    # ==================== 数据库配置 ====================
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "shala_dev"
    POSTGRES_PASSWORD: str = "dev_password"
    POSTGRES_DB: str = "shala_shikshak_dev"
    database_url_override: Optional[str] = None
    db_echo: bool = False
    db_auto_create: bool = False  # 启动时自动建表（本地开发用）

    # ==================== 安全配置 ====================
    SECRET_KEY: str = "development-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    # ==================== 文件存储配置 ====================
    upload_dir: str = "uploads"
    log_dir: str = "log"
    base_url: str = "http://localhost:5000"

    max_pdf_upload_size: int = 30 * 1024 * 1024        # 30MB
    compression_threshold_bytes: int = 2 * 1024 * 1024  # 2MB

    # ==================== PDF压缩配置 ====================
    ghostscript_binary: str = "gs"
    ghostscript_timeout: float = 60.0
    ghostscript_probe_timeout: float = 5.0
    ghostscript_max_output_bytes: int = 10 * 1024 * 1024  # 10MB
    pdf_default_quality: str = "ebook"
    pdf_default_compatibility_level: str = "1.4"

    # ==================== 限流配置 ====================
    app_open_rate_limit_max_requests: int = 30
    app_open_rate_limit_window_ms: int = 60_000
    rate_limit_sweep_interval_seconds: float = 300.0

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: str = "backend.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 应用服务配置 ====================
    app_port: int = 5000
    app_host: str = "0.0.0.0"

    # ==================== CORS配置 ====================
    cors_origins: str = (
        '["http://localhost:3000", "http://localhost:5173", '
        '"https://shalashikshak.in", "https://shala-shikshak.pages.dev"]'
    )

    # ==================== 验证器 ====================
    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, value: str) -> List[str]:
        """解析CORS origins配置"""
        return parse_json_config(value)

    @field_validator("pdf_default_quality")
    @classmethod
    def check_pdf_quality(cls, value: str) -> str:
        """校验默认压缩质量"""
        if value not in ("screen", "ebook", "printer", "prepress"):
            raise ValueError(f"不支持的PDF压缩质量: {value}")
        return value

    @field_validator("pdf_default_compatibility_level")
    @classmethod
    def check_pdf_compatibility_level(cls, value: str) -> str:
        """校验默认PDF兼容级别"""
        if value not in ("1.3", "1.4", "1.5", "1.6", "1.7"):
            raise ValueError(f"不支持的PDF兼容级别: {value}")
        return value

    # ==================== 计算属性 ====================
    @property
    def async_database_url(self) -> str:
        """构建异步数据库连接URL"""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def absolute_upload_dir(self) -> str:
        """获取绝对上传目录路径"""
        return str(get_workspace_path(self.upload_dir))

    @property
    def absolute_log_dir(self) -> str:
        """获取绝对日志目录路径"""
        return str(get_workspace_path(self.log_dir))

    @property
    def workspace_dir(self) -> str:
        """获取workspace目录路径"""
        return str(get_workspace_path())

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    # 环境变量文件加载由外部环境控制（Docker Compose、launch.json等）
    return Settings()


# 全局配置实例
settings = get_settings()
