"""
素描生成传输工厂
负责注册和创建传输实例
"""

from typing import Dict, List, Type

from sketchify.core.log_utils import get_logger
from sketchify.core.sketch.base import BaseSketchTransport
from sketchify.core.sketch.config import SketchClientConfig
from sketchify.core.sketch.exceptions import ConfigurationError

logger = get_logger(__name__)


class SketchTransportFactory:
    """素描生成传输工厂"""

    _transports: Dict[str, Type[BaseSketchTransport]] = {}

    @classmethod
    def register_transport(cls, transport_name: str, transport_class: Type[BaseSketchTransport]):
        """
        注册传输方式

        Args:
            transport_name: 传输方式名称
            transport_class: 传输类
        """
        if transport_name in cls._transports:
            logger.warning("传输方式已存在，将被覆盖", transport_name=transport_name)

        cls._transports[transport_name] = transport_class
        logger.debug("注册素描生成传输方式", transport_name=transport_name)

    @classmethod
    def create_transport(cls, config: SketchClientConfig) -> BaseSketchTransport:
        """
        创建传输实例

        Args:
            config: 客户端配置

        Returns:
            BaseSketchTransport: 传输实例

        Raises:
            ConfigurationError: 如果传输方式不支持
        """
        transport_class = cls._transports.get(config.transport)
        if transport_class is None:
            raise ConfigurationError(
                f"不支持的传输方式: {config.transport}",
                details={"available": cls.get_available_transports()}
            )
        return transport_class(config)

    @classmethod
    def get_available_transports(cls) -> List[str]:
        """获取所有已注册的传输方式名称"""
        return sorted(cls._transports.keys())

    @classmethod
    def is_transport_supported(cls, transport_name: str) -> bool:
        """检查是否支持指定的传输方式"""
        return transport_name in cls._transports
