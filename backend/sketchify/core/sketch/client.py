"""
素描生成客户端

对外唯一入口：generate(image, settings) -> GenerationResult
    1. 根据素描参数构建提示词
    2. 拆分 data URL 得到 mime 类型与图片数据
    3. 经由传输层发送请求（429 / 503 自动指数退避重试）
    4. 解析响应得到图片或失败原因

所有失败都转换为 GenerationResult.failure，消息可直接展示给用户。
每次调用独立构建、独立销毁，调用之间不共享任何可变状态。
"""

import asyncio
import time
from typing import Optional

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.base import BaseSketchTransport
from sketchify.core.sketch.exceptions import (
    ConfigurationError,
    InvalidImageError,
    MalformedResponseError,
    MissingCredentialError,
    NetworkTransportError,
    SketchGenerationError,
)
from sketchify.core.sketch.models import FailureKind, GenerationResult, SketchSettings
from sketchify.core.sketch.payload import parse_data_url
from sketchify.core.sketch.prompt_builder import build_sketch_prompt
from sketchify.core.sketch.response_parser import parse_generation_response
from sketchify.core.sketch.retry import RetryPolicy, SleepFunc, call_with_retry, classify_transient

logger = get_logger(__name__)

RATE_LIMITED_MESSAGE = "当前请求过多，系统繁忙。已尝试自动重连但失败，请稍后几分钟再试。"
SERVICE_UNAVAILABLE_MESSAGE = "图片生成服务暂时不可用。已尝试自动重连但失败，请稍后几分钟再试。"
NETWORK_TRANSPORT_MESSAGE = "无法连接图片生成服务，请检查网络或网关配置。"
MALFORMED_RESPONSE_MESSAGE = "图片生成服务返回了无法解析的响应。"
GENERIC_FAILURE_MESSAGE = "生成素描时遇到网络或 API 错误。"
EMPTY_IMAGE_MESSAGE = "未检测到上传的图片，请先选择一张照片。"


class SketchGenerationClient:
    """素描生成客户端（传输 + 重试 + 响应解析）"""

    def __init__(
        self,
        transport: BaseSketchTransport,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        self.transport = transport
        self.retry_policy = retry_policy or transport.config.retry_policy
        self._sleep = sleep

    async def generate(self, image: str, settings: SketchSettings) -> GenerationResult:
        """
        把照片转换为素描

        Args:
            image: 浏览器编码的图片（data URL 或裸 base64）
            settings: 素描参数

        Returns:
            GenerationResult: 成功时为 PNG data URL，失败时为失败类型与提示消息
        """
        start_time = time.time()
        prompt = build_sketch_prompt(settings)
        payload = parse_data_url(image)

        metadata = {
            "model": self.transport.config.model,
            "transport": self.transport.get_transport_name(),
            "mime_type": payload.mime_type,
        }

        if not payload.data:
            return GenerationResult.failure(FailureKind.INVALID_IMAGE, EMPTY_IMAGE_MESSAGE, metadata)

        logger.debug(
            log_messages.SKETCH_PROMPT_BUILT,
            operation="prompt_built",
            prompt_length=len(prompt)
        )

        try:
            self.transport.check_credentials()
        except MissingCredentialError as e:
            metadata["attempts"] = 0
            metadata["execution_time_seconds"] = round(time.time() - start_time, 3)
            return self._failure_from_error(e, metadata)

        attempts = 0

        async def send_once():
            nonlocal attempts
            attempts += 1
            return await self.transport.send(payload, prompt)

        try:
            response = await call_with_retry(send_once, self.retry_policy, self._sleep)
        except Exception as e:
            metadata["attempts"] = attempts
            metadata["execution_time_seconds"] = round(time.time() - start_time, 3)
            return self._failure_from_error(e, metadata)

        metadata["attempts"] = attempts
        metadata["execution_time_seconds"] = round(time.time() - start_time, 3)
        return parse_generation_response(response).with_metadata(**metadata)

    def _failure_from_error(self, error: Exception, metadata: dict) -> GenerationResult:
        """把传输层异常转换为失败结果"""
        kind, message = self._classify_error(error)

        if kind == FailureKind.TRANSPORT and not isinstance(error, SketchGenerationError):
            logger.error(
                "素描生成过程中发生未预期的异常",
                exception=error,
                operation="unexpected_error",
                attempts=metadata.get("attempts")
            )
        else:
            logger.warning(
                log_messages.SKETCH_GENERATION_FAILED,
                operation="generation_failed",
                failure_kind=kind.value,
                error=str(error),
                attempts=metadata.get("attempts")
            )

        return GenerationResult.failure(kind, message, metadata)

    @staticmethod
    def _classify_error(error: Exception):
        if isinstance(error, MissingCredentialError):
            return FailureKind.MISSING_CREDENTIAL, error.message
        if isinstance(error, ConfigurationError):
            return FailureKind.CONFIGURATION, error.message
        if isinstance(error, InvalidImageError):
            return FailureKind.INVALID_IMAGE, error.message
        if isinstance(error, NetworkTransportError):
            return FailureKind.NETWORK_TRANSPORT, error.message or NETWORK_TRANSPORT_MESSAGE
        if isinstance(error, MalformedResponseError):
            return FailureKind.MALFORMED_RESPONSE, error.message or MALFORMED_RESPONSE_MESSAGE

        transient = classify_transient(error)
        if transient == FailureKind.RATE_LIMITED:
            return FailureKind.RATE_LIMITED, RATE_LIMITED_MESSAGE
        if transient == FailureKind.SERVICE_UNAVAILABLE:
            return FailureKind.SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE_MESSAGE

        if isinstance(error, SketchGenerationError) and error.message:
            return FailureKind.TRANSPORT, error.message
        return FailureKind.TRANSPORT, GENERIC_FAILURE_MESSAGE
