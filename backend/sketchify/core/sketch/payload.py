"""
上传图片预处理
把浏览器编码的 data URL 拆成 (mime_type, base64 数据)
"""

import re

from sketchify.core.sketch.models import ImagePayload

DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL_PATTERN = re.compile(r"data:([a-zA-Z0-9]+/[a-zA-Z0-9\-.+]+).*,.*", re.DOTALL)


def detect_mime_type(data_url: str) -> str:
    """识别 data URL 中的 mime 类型，识别不到时按 JPEG 处理"""
    match = _DATA_URL_PATTERN.match(data_url or "")
    return match.group(1) if match else DEFAULT_MIME_TYPE


def strip_data_url_prefix(data_url: str) -> str:
    """去掉 data:image/xyz;base64, 前缀；没有前缀时原样返回，前缀后为空时返回空字符串"""
    _, separator, encoded = (data_url or "").partition(",")
    return encoded if separator else (data_url or "")


def parse_data_url(data_url: str) -> ImagePayload:
    """
    解析浏览器上传的图片

    该步骤从不失败：缺少或无法识别的格式标记一律按 image/jpeg 处理。

    Args:
        data_url: 形如 "data:image/png;base64,iVBOR..." 的字符串，也可以是裸 base64

    Returns:
        ImagePayload: mime 类型与 base64 数据
    """
    return ImagePayload(
        mime_type=detect_mime_type(data_url),
        data=strip_data_url_prefix(data_url).strip()
    )
