"""
统一日志管理模块
提供标准化的结构化日志记录功能
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any

from sketchify.core.config import settings
from sketchify.core.log_messages import log_messages

# 结构化字段中不允许出现的凭据
SENSITIVE_FIELDS = frozenset({"api_key", "gemini_api_key", "key", "x-goog-api-key"})
REDACTED_VALUE = "***"


class UnifiedLogger:
    """统一的业务日志记录器，提供结构化日志记录功能"""

    def __init__(self, name: str):
        """初始化日志记录器"""
        self.logger = logging.getLogger(name)
        self.name = name

    def _format_extra_data(self, **kwargs: Any) -> Dict[str, Any]:
        """格式化日志额外数据，凭据类字段一律打码"""
        masked = {
            key: REDACTED_VALUE if key.lower() in SENSITIVE_FIELDS and value else value
            for key, value in kwargs.items()
        }
        return log_messages.get_structured_data(
            log_module=self.name,
            **masked
        )

    def _render(self, message_template: str, **kwargs: Any) -> str:
        """
        渲染日志消息

        只有提供了格式化参数时才进行格式化，避免对已格式化字符串（如包含字典的
        f-string）二次格式化；格式化失败时使用原始消息
        """
        if not kwargs:
            return message_template
        try:
            return log_messages.format_message(message_template, **kwargs)
        except (KeyError, ValueError, IndexError):
            return message_template

    def info(self, message_template: str, **kwargs: Any) -> None:
        """
        记录信息级别日志

        Args:
            message_template: 日志消息，可以是格式化模板或已格式化的字符串
            **kwargs: 格式化参数，同时作为结构化字段写入 extra

        示例:
            logger.info("简单消息")
            logger.info("{operation_name} 完成", operation_name="素描生成")
        """
        message = self._render(message_template, **kwargs)
        self.logger.info(message, extra=self._format_extra_data(**kwargs))

    def error(self, message_template: str, exception: Optional[Exception] = None, **kwargs: Any) -> None:
        """
        记录错误级别日志

        Args:
            message_template: 日志消息，可以是格式化模板或已格式化的字符串
            exception: 异常对象（可选），附带堆栈信息
            **kwargs: 格式化参数（可选）
        """
        message = self._render(message_template, **kwargs)
        extra_data = self._format_extra_data(**kwargs)

        if exception:
            extra_data.update({
                "exception_type": type(exception).__name__,
                "exception_message": str(exception)
            })
            self.logger.error(message, extra=extra_data, exc_info=exception)
        else:
            self.logger.error(message, extra=extra_data)

    def warning(self, message_template: str, **kwargs: Any) -> None:
        """记录警告级别日志"""
        message = self._render(message_template, **kwargs)
        self.logger.warning(message, extra=self._format_extra_data(**kwargs))

    def debug(self, message_template: str, **kwargs: Any) -> None:
        """记录调试级别日志（仅在 app_debug 开启时输出）"""
        if settings.app_debug:
            message = self._render(message_template, **kwargs)
            self.logger.debug(message, extra=self._format_extra_data(**kwargs))

    def critical(self, message_template: str, **kwargs: Any) -> None:
        """记录严重错误级别日志"""
        message = self._render(message_template, **kwargs)
        self.logger.critical(message, extra=self._format_extra_data(**kwargs))


# 全局日志实例缓存
_loggers_cache: Dict[str, UnifiedLogger] = {}


def get_logger(name: str = __name__) -> UnifiedLogger:
    """
    获取统一的业务日志记录器

    Args:
        name: 日志记录器名称，默认为当前模块名

    Returns:
        UnifiedLogger实例
    """
    if name not in _loggers_cache:
        _loggers_cache[name] = UnifiedLogger(name)
    return _loggers_cache[name]


def setup_logging() -> None:
    """配置全局日志系统"""
    root_logger = logging.getLogger()
    log_level = logging.DEBUG if settings.app_debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    root_logger.setLevel(log_level)

    # 清除现有的处理器
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(settings.log_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if settings.log_to_file:
        log_file_path = Path(settings.absolute_log_file)
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # 设置第三方库的日志级别
    third_party_loggers = ["uvicorn", "fastapi", "aiohttp", "httpx", "google_genai"]
    for logger_name in third_party_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    config_logger = get_logger(__name__)
    config_logger.info(log_messages.OPERATION_SUCCESS, operation_name="日志系统配置")


# 导出常用函数别名，方便使用
logger = get_logger
