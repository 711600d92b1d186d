"""
素描生成服务
"""

from .service import SketchGenerationService
from .handler import SketchGenerationHandler

__all__ = ["SketchGenerationService", "SketchGenerationHandler"]
