"""
素描生成传输实现
"""

from .genai_sdk import GenAITransport
from .gemini_rest import GeminiRestTransport

__all__ = ["GenAITransport", "GeminiRestTransport"]
