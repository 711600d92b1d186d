"""
素描生成服务（业务逻辑）
负责根据应用配置组装传输与客户端，并执行一次生成
"""

from typing import Optional

from sketchify.core.config import Settings, settings as app_settings
from sketchify.core.sketch import (
    GenerationResult,
    SketchClientConfig,
    SketchGenerationClient,
    SketchSettings,
    SketchTransportFactory,
)
from sketchify.core.sketch.exceptions import ConfigurationError
from sketchify.core.sketch.models import FailureKind, list_line_weight_options, list_style_options, DEFAULT_SETTINGS


class SketchGenerationService:
    """素描生成服务"""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or app_settings

    def build_client(self) -> SketchGenerationClient:
        """
        构建客户端

        Raises:
            ConfigurationError: 配置的传输方式不存在
        """
        config = SketchClientConfig.from_settings(self.settings)
        transport = SketchTransportFactory.create_transport(config)
        return SketchGenerationClient(transport)

    async def generate_sketch(self, image: str, sketch_settings: SketchSettings) -> GenerationResult:
        """
        生成素描

        Args:
            image: 浏览器编码的照片
            sketch_settings: 素描参数

        Returns:
            GenerationResult: 生成结果
        """
        try:
            client = self.build_client()
        except ConfigurationError as e:
            return GenerationResult.failure(FailureKind.CONFIGURATION, e.message, e.details)
        return await client.generate(image, sketch_settings)

    @staticmethod
    def get_options() -> dict:
        """获取前端可选的素描参数与默认值"""
        return {
            "styles": list_style_options(),
            "line_weights": list_line_weight_options(),
            "defaults": {
                "style": DEFAULT_SETTINGS.style.value,
                "line_weight": DEFAULT_SETTINGS.line_weight.value,
                "darkness": DEFAULT_SETTINGS.darkness,
            },
        }
