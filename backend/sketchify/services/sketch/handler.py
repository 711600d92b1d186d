"""
素描生成Handler（重处理）
负责日志记录、结果转换与异常映射
"""

import time
from typing import Dict

from fastapi import HTTPException, status

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.models import FailureKind, GenerationResult
from sketchify.schemas.sketch import SketchGenerationData, SketchGenerationRequest, SketchOptionsData
from sketchify.services.sketch.service import SketchGenerationService

logger = get_logger(__name__)

HTTP_422_UNPROCESSABLE = 422

# 失败类型 -> HTTP 状态码
FAILURE_STATUS_CODES: Dict[FailureKind, int] = {
    FailureKind.MISSING_CREDENTIAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    FailureKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    FailureKind.SERVICE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    FailureKind.NETWORK_TRANSPORT: status.HTTP_502_BAD_GATEWAY,
    FailureKind.TRANSPORT: status.HTTP_502_BAD_GATEWAY,
    FailureKind.MALFORMED_RESPONSE: status.HTTP_502_BAD_GATEWAY,
    FailureKind.MODEL_REFUSAL: HTTP_422_UNPROCESSABLE,
    FailureKind.EMPTY_RESPONSE: HTTP_422_UNPROCESSABLE,
    FailureKind.INVALID_IMAGE: status.HTTP_400_BAD_REQUEST,
}


class SketchGenerationHandler:
    """素描生成处理器"""

    def __init__(self, service: SketchGenerationService = None):
        self.service = service or SketchGenerationService()

    def handle_get_options(self) -> SketchOptionsData:
        """处理获取可选参数请求"""
        return SketchOptionsData(**self.service.get_options())

    async def handle_generate(self, request: SketchGenerationRequest) -> GenerationResult:
        """
        处理素描生成请求

        Args:
            request: 素描生成请求

        Returns:
            GenerationResult: 成功的生成结果

        Raises:
            HTTPException: 生成失败，detail 为可直接展示的消息
        """
        start_time = time.time()
        sketch_settings = request.settings.to_settings()

        logger.info(
            log_messages.SKETCH_GENERATION_START,
            operation="handle_generate",
            style=sketch_settings.style.value,
            line_weight=sketch_settings.line_weight.value,
            darkness=sketch_settings.darkness
        )

        result = await self.service.generate_sketch(request.image, sketch_settings)
        duration = time.time() - start_time

        if not result.success:
            logger.warning(
                log_messages.SKETCH_GENERATION_FAILED,
                operation="handle_generate",
                failure_kind=result.error_kind.value,
                duration_ms=int(duration * 1000)
            )
            raise HTTPException(
                status_code=FAILURE_STATUS_CODES.get(
                    result.error_kind, status.HTTP_500_INTERNAL_SERVER_ERROR
                ),
                detail=result.error_message
            )

        logger.info(
            log_messages.SKETCH_GENERATION_SUCCESS,
            operation="handle_generate",
            duration_ms=int(duration * 1000),
            attempts=result.metadata.get("attempts")
        )
        return result.with_metadata(generation_time=round(duration, 3))

    @staticmethod
    def to_response_data(result: GenerationResult) -> SketchGenerationData:
        """把成功的生成结果转换为响应数据"""
        return SketchGenerationData(
            image_url=result.image_url,
            model=result.metadata.get("model"),
            mime_type=result.metadata.get("mime_type"),
            attempts=result.metadata.get("attempts"),
            generation_time=result.metadata.get("generation_time")
        )
