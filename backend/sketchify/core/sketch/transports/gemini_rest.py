"""
Gemini REST 传输
通过 aiohttp 直接向 generateContent 接口（或兼容网关）发送 JSON 请求
"""

import asyncio
import json
from typing import Any, Callable, Dict, Optional

import aiohttp

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.base import (
    BaseSketchTransport,
    RESPONSE_MODALITIES,
    build_request_parts,
)
from sketchify.core.sketch.config import DEFAULT_GEMINI_BASE_URL, SketchClientConfig
from sketchify.core.sketch.exceptions import (
    MalformedResponseError,
    NetworkTransportError,
    UpstreamHTTPError,
)
from sketchify.core.sketch.models import ImagePayload

logger = get_logger(__name__)


class GeminiRestTransport(BaseSketchTransport):
    """Gemini REST / 网关传输"""

    # HTTP头信息
    HTTP_HEADERS = {
        "Content-Type": "application/json",
    }

    def __init__(
        self,
        config: SketchClientConfig,
        session_factory: Optional[Callable[..., aiohttp.ClientSession]] = None
    ):
        super().__init__(config)
        self._session_factory = session_factory or aiohttp.ClientSession

    def get_transport_name(self) -> str:
        return "gemini_rest"

    def build_url(self) -> str:
        """构建 generateContent 接口地址"""
        base_url = (self.config.base_url or DEFAULT_GEMINI_BASE_URL).rstrip("/")
        return f"{base_url}/{self.config.api_version}/models/{self.config.model}:generateContent"

    def build_headers(self) -> Dict[str, str]:
        """构建请求头：默认头 + API Key 头（可选）+ 提供商额外头"""
        headers = self.HTTP_HEADERS.copy()
        if self.config.key_in_header:
            headers["x-goog-api-key"] = self._require_api_key()
        headers.update(self.config.extra_headers)
        return headers

    def build_params(self) -> Dict[str, str]:
        """构建查询参数"""
        if self.config.key_in_query:
            return {"key": self._require_api_key()}
        return {}

    def build_body(self, payload: ImagePayload, prompt: str) -> Dict[str, Any]:
        """构建 JSON 请求体"""
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": build_request_parts(payload, prompt),
                }
            ],
            "generationConfig": {
                "responseModalities": RESPONSE_MODALITIES,
            },
        }

    async def send(self, payload: ImagePayload, prompt: str) -> Dict[str, Any]:
        url = self.build_url()
        headers = self.build_headers()
        params = self.build_params()
        body = self.build_body(payload, prompt)

        logger.info(
            log_messages.MODEL_REQUEST_START,
            operation="api_call_start",
            transport=self.get_transport_name(),
            model=self.config.model,
            prompt_length=len(prompt),
            mime_type=payload.mime_type
        )

        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        try:
            async with self._session_factory(timeout=timeout) as session:
                async with session.post(url, params=params, headers=headers, json=body) as response:
                    status = response.status
                    text = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkTransportError(
                "无法连接图片生成服务，请检查网络或网关配置。",
                details={"error": str(e), "error_type": type(e).__name__}
            ) from e

        if status != 200:
            logger.error(
                "图片生成服务返回错误状态",
                operation="api_http_error",
                status_code=status
            )
            raise UpstreamHTTPError(
                self._extract_error_message(text, status),
                status_code=status
            )

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                "图片生成服务返回了无法解析的响应。",
                details={"error": str(e)}
            ) from e

        logger.debug(
            log_messages.MODEL_RESPONSE_RECEIVED,
            operation="api_response_received",
            candidates_count=len(data.get("candidates") or []) if isinstance(data, dict) else 0
        )
        return data

    @staticmethod
    def _extract_error_message(text: str, status: int) -> str:
        """从 Google 风格的错误体 {"error": {"message": ...}} 中提取消息"""
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, TypeError):
            data = None
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if message:
                return f"{status} {message}"
        return f"图片生成服务返回错误状态 {status}"
