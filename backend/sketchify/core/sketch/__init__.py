"""
素描生成模块
"""

from .models import (
    SketchStyle,
    LineWeight,
    FailureKind,
    SketchSettings,
    ImagePayload,
    GenerationResult,
    DEFAULT_SETTINGS,
)
from .prompt_builder import build_sketch_prompt
from .payload import parse_data_url
from .response_parser import parse_generation_response
from .retry import RetryPolicy, call_with_retry, classify_transient
from .config import SketchClientConfig
from .base import BaseSketchTransport
from .factory import SketchTransportFactory
from .client import SketchGenerationClient
from .transports import GenAITransport, GeminiRestTransport

# 注册所有传输方式
SketchTransportFactory.register_transport("genai", GenAITransport)
SketchTransportFactory.register_transport("gemini_rest", GeminiRestTransport)

__all__ = [
    "SketchStyle",
    "LineWeight",
    "FailureKind",
    "SketchSettings",
    "ImagePayload",
    "GenerationResult",
    "DEFAULT_SETTINGS",
    "build_sketch_prompt",
    "parse_data_url",
    "parse_generation_response",
    "RetryPolicy",
    "call_with_retry",
    "classify_transient",
    "SketchClientConfig",
    "BaseSketchTransport",
    "SketchTransportFactory",
    "SketchGenerationClient",
    "GenAITransport",
    "GeminiRestTransport",
]
