"""
素描生成异常定义
定义传输层与解析层中使用的所有异常类型
"""

from typing import Any, Dict, Optional


class SketchGenerationError(Exception):
    """
    素描生成基础异常

    Attributes:
        message: 错误消息（可直接展示给用户）
        code: 错误码
        details: 错误详情
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigurationError(SketchGenerationError):
    """生成服务配置错误"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="CONFIG_ERROR", details=details)


class MissingCredentialError(SketchGenerationError):
    """未配置 API Key"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="MISSING_CREDENTIAL", details=details)


class UpstreamHTTPError(SketchGenerationError):
    """上游服务返回非成功状态码"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(message, code="HTTP_ERROR", details=details)
        self.status_code = status_code


class NetworkTransportError(SketchGenerationError):
    """网络层错误（连接失败、跨域拒绝、超时等）"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="NETWORK_ERROR", details=details)


class MalformedResponseError(SketchGenerationError):
    """响应体无法解析"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="MALFORMED_RESPONSE", details=details)


class InvalidImageError(SketchGenerationError):
    """上传的图片数据无效"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_IMAGE", details=details)


__all__ = [
    'SketchGenerationError',
    'ConfigurationError',
    'MissingCredentialError',
    'UpstreamHTTPError',
    'NetworkTransportError',
    'MalformedResponseError',
    'InvalidImageError',
]
