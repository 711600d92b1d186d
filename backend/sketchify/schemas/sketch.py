"""
素描生成相关的Pydantic数据模型
用于素描生成API的请求和响应验证
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from sketchify.core.config import settings as app_settings
from sketchify.core.sketch.models import LineWeight, SketchSettings, SketchStyle


# ============================================================================
# 请求模型
# ============================================================================

class SketchSettingsInput(BaseModel):
    """素描参数"""
    style: SketchStyle = Field(default=SketchStyle.PENCIL, description="素描风格")
    line_weight: LineWeight = Field(default=LineWeight.MEDIUM, description="线条粗细")
    darkness: int = Field(default=50, ge=0, le=100, description="明暗程度（0-100）")

    def to_settings(self) -> SketchSettings:
        """转换为核心层的素描参数"""
        return SketchSettings(
            style=self.style,
            line_weight=self.line_weight,
            darkness=self.darkness
        )


class SketchGenerationRequest(BaseModel):
    """素描生成请求"""
    image: str = Field(..., min_length=1, description="上传的照片（data URL 或 base64）")
    settings: SketchSettingsInput = Field(default_factory=SketchSettingsInput, description="素描参数")

    @field_validator("image")
    @classmethod
    def check_image_size(cls, value: str) -> str:
        """按 base64 长度估算解码后的大小，超过上限时拒绝"""
        encoded = value.partition(",")[2] or value
        estimated_size = len(encoded) * 3 // 4
        if estimated_size > app_settings.max_image_size:
            raise ValueError(
                f"图片过大（约 {estimated_size} 字节），上限为 {app_settings.max_image_size} 字节"
            )
        return value


# ============================================================================
# 响应模型
# ============================================================================

class SketchOption(BaseModel):
    """可选项"""
    value: str = Field(..., description="取值")
    label: str = Field(..., description="显示名称")


class SketchOptionsData(BaseModel):
    """素描参数可选项"""
    styles: List[SketchOption] = Field(..., description="素描风格")
    line_weights: List[SketchOption] = Field(..., description="线条粗细")
    defaults: SketchSettingsInput = Field(..., description="默认参数")


class SketchGenerationData(BaseModel):
    """素描生成结果"""
    image_url: str = Field(..., description="PNG data URL")
    model: Optional[str] = Field(None, description="使用的模型")
    mime_type: Optional[str] = Field(None, description="上传图片的 mime 类型")
    attempts: Optional[int] = Field(None, description="请求次数（含重试）")
    generation_time: Optional[float] = Field(None, description="生成耗时(秒)")
