"""
素描生成传输层基类
定义所有传输方式（SDK / REST 网关）的统一接口
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.config import SketchClientConfig
from sketchify.core.sketch.exceptions import MissingCredentialError
from sketchify.core.sketch.models import ImagePayload

logger = get_logger(__name__)

MISSING_API_KEY_MESSAGE = (
    "未检测到 API Key。请在环境变量中设置 GEMINI_API_KEY（或 API_KEY / VITE_API_KEY），"
    "或在 config/.env 文件中配置。"
)

RESPONSE_MODALITIES = ["TEXT", "IMAGE"]


def build_request_parts(payload: ImagePayload, prompt: str) -> List[Dict[str, Any]]:
    """
    构建请求 parts：先图片、后文本

    顺序是接口约定的一部分，模型会把前面的图片作为后面指令的上下文。
    """
    return [
        {
            "inlineData": {
                "mimeType": payload.mime_type,
                "data": payload.data,
            }
        },
        {"text": prompt},
    ]


class BaseSketchTransport(ABC):
    """素描生成传输基类"""

    def __init__(self, config: SketchClientConfig):
        self.config = config

    def _require_api_key(self) -> str:
        """返回 API Key，未配置时抛出 MissingCredentialError"""
        if not self.config.has_api_key:
            raise MissingCredentialError(
                MISSING_API_KEY_MESSAGE,
                details={"transport": self.get_transport_name()}
            )
        return self.config.api_key.strip()

    def check_credentials(self) -> None:
        """
        在发送任何请求之前检查凭据

        Raises:
            MissingCredentialError: 未配置 API Key
        """
        self._require_api_key()

    @abstractmethod
    async def send(self, payload: ImagePayload, prompt: str) -> Dict[str, Any]:
        """
        发送一次生成请求（不含重试）

        Args:
            payload: 上传图片
            prompt: 素描提示词

        Returns:
            Dict[str, Any]: 标准化为 {"candidates": [{"content": {"parts": [...]}}]} 的响应

        Raises:
            SketchGenerationError 的子类
        """
        pass

    @abstractmethod
    def get_transport_name(self) -> str:
        """获取传输方式名称"""
        pass
