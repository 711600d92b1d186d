"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import Dict, List, Optional
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, ConfigDict, Field, field_validator

from sketchify.utils.config_utils import (
    get_config_path, get_workspace_path, parse_json_config, parse_json_mapping
)


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "AI Sketch Studio"
    app_version: str = "1.0.0"
    app_debug: bool = False
    app_env: str = "development"

    # ==================== API配置 ====================
    api_v1_str: str = "/api/v1"
    project_name: str = "AI Sketch Studio API"

    # ==================== 应用服务配置 ====================
    app_port: int = 8080
    app_host: str = "0.0.0.0"

    # ==================== CORS配置 ====================
    cors_origins: str = '["*"]'

    # ==================== 上传限制 ====================
    max_image_size: int = 10485760  # 10MB

    # ==================== 素描生成模型配置 ====================
    # API Key 兼容前端部署时常用的 API_KEY / VITE_API_KEY 变量名
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "api_key", "vite_api_key")
    )
    sketch_model: str = "gemini-3-pro-image-preview"
    sketch_transport: str = "genai"
    sketch_base_url: Optional[str] = None
    sketch_api_version: str = "v1beta"
    sketch_extra_headers: str = "{}"
    sketch_key_in_query: bool = True
    sketch_key_in_header: bool = False
    sketch_request_timeout: int = 120

    # ==================== 重试配置 ====================
    sketch_max_retries: int = 3
    sketch_retry_initial_delay: float = 2.0
    sketch_retry_backoff_factor: float = 2.0

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: str = "backend.log"
    log_dir: str = "log"
    log_to_file: bool = False
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 验证器 ====================
    @field_validator("cors_origins")
    @classmethod
    def parse_cors_origins(cls, value: str) -> List[str]:
        """解析CORS origins配置"""
        return parse_json_config(value)

    @field_validator("sketch_extra_headers")
    @classmethod
    def parse_extra_headers(cls, value: str) -> Dict[str, str]:
        """解析额外HTTP头配置（JSON对象）"""
        return parse_json_mapping(value)

    @field_validator("sketch_transport")
    @classmethod
    def normalize_transport(cls, value: str) -> str:
        """传输方式名称统一为小写"""
        return value.strip().lower()

    # ==================== 计算属性 ====================
    @property
    def absolute_log_dir(self) -> str:
        """获取绝对日志目录路径"""
        return str(get_workspace_path(self.log_dir))

    @property
    def absolute_log_file(self) -> str:
        """获取绝对日志文件路径"""
        return str(get_workspace_path(self.log_dir) / self.log_file)

    model_config = ConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def get_settings() -> Settings:
    """获取应用配置实例"""
    # 环境变量文件加载由外部环境控制（Docker Compose、.env等）
    return Settings()


# 全局配置实例
settings = get_settings()
