"""
素描生成客户端配置
把全局配置转换为显式传入客户端的配置对象，核心逻辑不直接读取环境变量
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from sketchify.core.sketch.retry import RetryPolicy

DEFAULT_MODEL = "gemini-3-pro-image-preview"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"


@dataclass(frozen=True)
class SketchClientConfig:
    """
    传输层配置

    Attributes:
        api_key: 模型服务 API Key
        model: 目标模型名称
        transport: 传输方式名称（在 SketchTransportFactory 中注册）
        base_url: 网关/代理基础 URL，为空时使用官方地址
        api_version: REST 路径中的 API 版本
        extra_headers: 提供商特定的额外请求头
        key_in_query: REST 方式下通过 ?key= 传递 API Key
        key_in_header: REST 方式下通过 x-goog-api-key 请求头传递 API Key
        timeout: 单次请求超时（秒）
        retry_policy: 瞬时故障重试参数
    """
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    transport: str = "genai"
    base_url: Optional[str] = None
    api_version: str = "v1beta"
    extra_headers: Dict[str, str] = field(default_factory=dict)
    key_in_query: bool = True
    key_in_header: bool = False
    timeout: float = 120
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)

    @classmethod
    def from_settings(cls, settings) -> "SketchClientConfig":
        """根据应用配置构建客户端配置"""
        return cls(
            api_key=settings.gemini_api_key or None,
            model=settings.sketch_model,
            transport=settings.sketch_transport,
            base_url=settings.sketch_base_url or None,
            api_version=settings.sketch_api_version,
            extra_headers=dict(settings.sketch_extra_headers or {}),
            key_in_query=settings.sketch_key_in_query,
            key_in_header=settings.sketch_key_in_header,
            timeout=settings.sketch_request_timeout,
            retry_policy=RetryPolicy(
                max_retries=settings.sketch_max_retries,
                initial_delay=settings.sketch_retry_initial_delay,
                backoff_factor=settings.sketch_retry_backoff_factor,
            ),
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def __repr__(self) -> str:
        # 不输出 API Key
        return (
            f"SketchClientConfig(model={self.model!r}, transport={self.transport!r}, "
            f"base_url={self.base_url!r}, has_api_key={self.has_api_key})"
        )
