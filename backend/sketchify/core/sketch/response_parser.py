"""
模型响应解析

只看第一个候选结果，两轮扫描：
    1. 第一个带内联图片数据的 part -> 成功，统一包装为 PNG data URL
       （数据不是合法 base64 时为响应格式错误）
    2. 没有图片时，第一个文本 part -> 模型拒绝，消息为模型原文
    3. 都没有 -> 空响应
"""

import base64
import binascii
from typing import Any, Dict, List, Optional

from sketchify.core.log_messages import log_messages
from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.models import FailureKind, GenerationResult

logger = get_logger(__name__)

EMPTY_RESPONSE_MESSAGE = "模型未返回图片，亦无错误说明。请重试。"
UNDECODABLE_IMAGE_MESSAGE = "图片生成服务返回的图片数据无法解码，请重试。"


def _first_candidate_parts(response: Any) -> List[Dict[str, Any]]:
    if not isinstance(response, dict):
        return []
    candidates = response.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return []
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        return []
    content = candidate.get("content")
    if not isinstance(content, dict):
        return []
    parts = content.get("parts")
    if not isinstance(parts, list):
        return []
    return [part for part in parts if isinstance(part, dict)]


def _inline_image_data(part: Dict[str, Any]) -> Optional[str]:
    inline = part.get("inlineData") or part.get("inline_data")
    if not isinstance(inline, dict):
        return None
    data = inline.get("data")
    if isinstance(data, str) and data:
        return data
    return None


def _is_decodable(data: str) -> bool:
    try:
        return bool(base64.b64decode(data, validate=True))
    except (binascii.Error, ValueError):
        return False


def parse_generation_response(response: Any) -> GenerationResult:
    """
    从标准化的 generateContent 响应中提取结果

    Args:
        response: {"candidates": [{"content": {"parts": [...]}}]} 形式的字典

    Returns:
        GenerationResult: 图片、模型拒绝或空响应
    """
    parts = _first_candidate_parts(response)

    for index, part in enumerate(parts):
        data = _inline_image_data(part)
        if data:
            if not _is_decodable(data):
                logger.warning(
                    "模型返回的图片数据无法解码",
                    operation="image_undecodable",
                    part_index=index
                )
                return GenerationResult.failure(FailureKind.MALFORMED_RESPONSE, UNDECODABLE_IMAGE_MESSAGE)
            logger.debug(
                "成功提取图片",
                operation="image_extracted",
                part_index=index
            )
            return GenerationResult.image(data)

    for part in parts:
        text = part.get("text")
        if isinstance(text, str) and text:
            logger.warning(
                log_messages.MODEL_REFUSED,
                operation="model_refusal",
                text_length=len(text)
            )
            return GenerationResult.failure(FailureKind.MODEL_REFUSAL, text)

    logger.warning(
        log_messages.MODEL_EMPTY_RESPONSE,
        operation="empty_response",
        parts_count=len(parts)
    )
    return GenerationResult.failure(FailureKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE)
