"""
配置工具模块
处理配置加载、路径计算等工具方法
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


def get_project_root() -> Path:
    """获取项目根目录路径"""
    return Path(__file__).parent.parent.parent.parent


def get_workspace_path(sub_path: str = "") -> Path:
    """获取workspace目录路径"""
    workspace_dir = get_project_root() / "workspace"
    if sub_path:
        return workspace_dir / sub_path
    return workspace_dir


def get_config_path(sub_path: str = "") -> Path:
    """获取config目录路径"""
    config_dir = get_project_root() / "config"
    if sub_path:
        return config_dir / sub_path
    return config_dir


def parse_json_config(value: str) -> List[str]:
    """解析JSON格式的列表配置字符串"""
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        logger.warning(f"JSON配置解析失败: {value}")
        return []
    if not isinstance(parsed, list):
        logger.warning(f"JSON配置不是列表: {value}")
        return []
    return [str(item) for item in parsed]


def parse_json_mapping(value: str) -> Dict[str, str]:
    """
    解析JSON格式的键值对配置字符串（如额外的HTTP头）

    非对象或解析失败时返回空字典，值统一转为字符串
    """
    if not value:
        return {}
    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        logger.warning("JSON映射配置解析失败，已忽略")
        return {}
    if not isinstance(parsed, dict):
        logger.warning("JSON映射配置不是对象，已忽略")
        return {}
    return {str(key): str(item) for key, item in parsed.items()}
