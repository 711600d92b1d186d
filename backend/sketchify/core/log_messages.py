"""
日志消息模板模块
统一管理所有业务日志消息模板，便于维护和国际化
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    # ==================== 通用日志消息 ====================
    START_OPERATION = "开始执行操作: {operation_name}"
    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== 素描生成相关 ====================
    SKETCH_GENERATION_START = "开始素描生成"
    SKETCH_GENERATION_SUCCESS = "素描生成成功"
    SKETCH_GENERATION_FAILED = "素描生成失败"
    SKETCH_PROMPT_BUILT = "素描提示词已构建"

    # ==================== 模型调用相关 ====================
    MODEL_REQUEST_START = "调用图片生成模型"
    MODEL_RESPONSE_RECEIVED = "模型响应已接收"
    MODEL_RETRY_SCHEDULED = "请求失败（{status}），{delay}秒后重试，剩余重试次数 {retries_left}"
    MODEL_RETRY_EXHAUSTED = "重试次数已用尽"
    MODEL_REFUSED = "模型未返回图片，返回了文字说明"
    MODEL_EMPTY_RESPONSE = "模型既未返回图片也未返回说明"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        """格式化日志消息模板"""
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """获取结构化日志数据"""
        return kwargs


# 全局实例
log_messages = LogMessages()
