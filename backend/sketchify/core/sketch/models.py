"""
素描生成的数据模型
"""

import base64
import binascii
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List

from sketchify.core.sketch.exceptions import InvalidImageError


class SketchStyle(str, Enum):
    """素描风格枚举"""
    PENCIL = "pencil"
    CHARCOAL = "charcoal"
    INK = "ink"
    MINIMALIST = "minimalist"
    STIPPLE = "stipple"
    CROSSHATCH = "crosshatch"


class LineWeight(str, Enum):
    """线条粗细枚举"""
    THIN = "thin"
    MEDIUM = "medium"
    THICK = "thick"


class FailureKind(str, Enum):
    """生成失败类型"""
    MISSING_CREDENTIAL = "missing_credential"
    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"
    NETWORK_TRANSPORT = "network_transport"
    TRANSPORT = "transport"
    MODEL_REFUSAL = "model_refusal"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    INVALID_IMAGE = "invalid_image"


# 前端展示用的中文名称
STYLE_LABELS: Dict[SketchStyle, str] = {
    SketchStyle.PENCIL: "铅笔素描",
    SketchStyle.CHARCOAL: "炭笔画",
    SketchStyle.INK: "钢笔/墨水",
    SketchStyle.MINIMALIST: "极简线条",
    SketchStyle.STIPPLE: "点画风格",
    SketchStyle.CROSSHATCH: "交叉排线",
}

LINE_WEIGHT_LABELS: Dict[LineWeight, str] = {
    LineWeight.THIN: "细线条 / 精细",
    LineWeight.MEDIUM: "标准 / 平衡",
    LineWeight.THICK: "粗线条 / 加粗",
}


@dataclass(frozen=True)
class SketchSettings:
    """
    素描参数

    Attributes:
        style: 素描风格
        line_weight: 线条粗细
        darkness: 明暗程度，0-100
    """
    style: Optional[SketchStyle] = SketchStyle.PENCIL
    line_weight: Optional[LineWeight] = LineWeight.MEDIUM
    darkness: int = 50


DEFAULT_SETTINGS = SketchSettings()


@dataclass(frozen=True)
class ImagePayload:
    """从 data URL 中拆出的图片数据（base64 文本）"""
    mime_type: str
    data: str

    def to_bytes(self) -> bytes:
        """
        解码为原始字节

        Raises:
            InvalidImageError: base64 内容无法解码
        """
        try:
            return base64.b64decode(self.data, validate=False)
        except (binascii.Error, ValueError) as e:
            raise InvalidImageError(
                "上传的图片数据无法解码，请重新选择图片",
                details={"mime_type": self.mime_type, "error": str(e)}
            ) from e


@dataclass(frozen=True)
class GenerationResult:
    """
    素描生成结果

    成功时恰好携带一张 PNG data URL 图片；失败时携带失败类型和可直接展示的消息。
    请通过 image() / failure() 构造。
    """
    success: bool
    image_url: Optional[str] = None
    error_kind: Optional[FailureKind] = None
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def image(cls, base64_data: str, metadata: Optional[Dict[str, Any]] = None) -> "GenerationResult":
        """以 PNG data URL 包装模型返回的图片数据"""
        return cls(
            success=True,
            image_url=f"data:image/png;base64,{base64_data}",
            metadata=dict(metadata or {})
        )

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "GenerationResult":
        """构造失败结果，消息为空时回退到通用提示"""
        return cls(
            success=False,
            error_kind=kind,
            error_message=message or "生成素描时遇到网络或 API 错误。",
            metadata=dict(metadata or {})
        )

    def image_bytes(self) -> bytes:
        """返回成功结果中 PNG 图片的原始字节"""
        if not self.success or not self.image_url:
            raise ValueError("失败的生成结果不包含图片")
        _, _, encoded = self.image_url.partition(",")
        return base64.b64decode(encoded)

    def with_metadata(self, **extra: Any) -> "GenerationResult":
        """返回附加了元数据的新结果"""
        merged = dict(self.metadata)
        merged.update(extra)
        return GenerationResult(
            success=self.success,
            image_url=self.image_url,
            error_kind=self.error_kind,
            error_message=self.error_message,
            metadata=merged
        )


def list_style_options() -> List[Dict[str, str]]:
    """列出可选素描风格"""
    return [{"value": style.value, "label": STYLE_LABELS[style]} for style in SketchStyle]


def list_line_weight_options() -> List[Dict[str, str]]:
    """列出可选线条粗细"""
    return [{"value": weight.value, "label": LINE_WEIGHT_LABELS[weight]} for weight in LineWeight]
