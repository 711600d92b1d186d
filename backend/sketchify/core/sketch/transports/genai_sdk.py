"""
Google GenAI SDK 传输
通过 google-genai 的异步接口直接调用 Gemini 图片模型（Nano Banana Pro）
"""

import base64
from typing import Any, Dict, List, Optional

import aiohttp
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.base import BaseSketchTransport, RESPONSE_MODALITIES
from sketchify.core.sketch.exceptions import (
    MalformedResponseError,
    NetworkTransportError,
    UpstreamHTTPError,
)
from sketchify.core.sketch.models import ImagePayload

logger = get_logger(__name__)


class GenAITransport(BaseSketchTransport):
    """Google GenAI SDK 传输"""

    def get_transport_name(self) -> str:
        return "genai"

    def _build_http_options(self) -> Optional[types.HttpOptions]:
        options: Dict[str, Any] = {}
        if self.config.base_url:
            options["base_url"] = self.config.base_url
        if self.config.extra_headers:
            options["headers"] = dict(self.config.extra_headers)
        if self.config.timeout:
            # SDK 超时单位为毫秒
            options["timeout"] = int(self.config.timeout * 1000)
        return types.HttpOptions(**options) if options else None

    def _create_client(self) -> genai.Client:
        """每次请求新建客户端，调用之间不共享状态"""
        return genai.Client(
            api_key=self._require_api_key(),
            http_options=self._build_http_options()
        )

    def _build_contents(self, payload: ImagePayload, prompt: str) -> List[types.Content]:
        return [
            types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=payload.to_bytes(), mime_type=payload.mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
        ]

    async def send(self, payload: ImagePayload, prompt: str) -> Dict[str, Any]:
        contents = self._build_contents(payload, prompt)
        client = self._create_client()

        logger.info(
            log_messages.MODEL_REQUEST_START,
            operation="api_call_start",
            transport=self.get_transport_name(),
            model=self.config.model,
            prompt_length=len(prompt),
            mime_type=payload.mime_type
        )

        try:
            response = await self._generate(client, contents)
        finally:
            # 每次请求的客户端都在本次请求内关闭，释放其连接池
            await client.aio.aclose()

        normalized = self._normalize_response(response)
        logger.debug(
            log_messages.MODEL_RESPONSE_RECEIVED,
            operation="api_response_received",
            parts_count=len(normalized["candidates"][0]["content"]["parts"]) if normalized["candidates"] else 0
        )
        return normalized

    async def _generate(self, client: genai.Client, contents: List[types.Content]) -> Any:
        """发起一次 generate_content 调用，并把 SDK 异常转换为传输层异常"""
        try:
            return await client.aio.models.generate_content(
                model=self.config.model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=RESPONSE_MODALITIES),
            )
        except genai_errors.APIError as e:
            raise UpstreamHTTPError(
                e.message or str(e),
                status_code=e.code,
                details={"status": e.status}
            ) from e
        except (httpx.TransportError, aiohttp.ClientError) as e:
            raise NetworkTransportError(
                "无法连接图片生成服务，请检查网络或网关配置。",
                details={"error": str(e), "error_type": type(e).__name__}
            ) from e

    @staticmethod
    def _normalize_response(response: Any) -> Dict[str, Any]:
        """
        把 SDK 响应对象转换为 REST 形式的字典

        只保留第一个候选结果中的内联图片与文本 part，图片字节转为 base64 文本
        """
        try:
            candidates = list(getattr(response, "candidates", None) or [])
        except TypeError as e:
            raise MalformedResponseError(
                "图片生成服务返回了无法解析的响应。",
                details={"error": str(e)}
            ) from e

        if not candidates:
            return {"candidates": []}

        content = getattr(candidates[0], "content", None)
        parts: List[Dict[str, Any]] = []
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            data = getattr(inline, "data", None) if inline is not None else None
            if data:
                if isinstance(data, (bytes, bytearray)):
                    data = base64.b64encode(data).decode("ascii")
                parts.append({
                    "inlineData": {
                        "mimeType": getattr(inline, "mime_type", None),
                        "data": data,
                    }
                })
                continue
            text = getattr(part, "text", None)
            if text:
                parts.append({"text": text})

        return {"candidates": [{"content": {"parts": parts}}]}
