"""
上传图片预处理与结果模型单元测试
"""

import base64

import pytest

from sketchify.core.sketch.exceptions import InvalidImageError
from sketchify.core.sketch.models import FailureKind, GenerationResult, ImagePayload
from sketchify.core.sketch.payload import (
    DEFAULT_MIME_TYPE,
    detect_mime_type,
    parse_data_url,
    strip_data_url_prefix,
)


@pytest.mark.unit
@pytest.mark.sketch
class TestParseDataUrl:
    """parse_data_url 单元测试类"""

    def test_png_data_url(self):
        """标准 PNG data URL"""
        payload = parse_data_url("data:image/png;base64,iVBORw0KGgo=")

        assert payload.mime_type == "image/png"
        assert payload.data == "iVBORw0KGgo="

    def test_webp_data_url(self):
        payload = parse_data_url("data:image/webp;base64,UklGRg==")

        assert payload.mime_type == "image/webp"
        assert payload.data == "UklGRg=="

    def test_mime_with_symbols(self):
        """mime 子类型允许包含 + . - 字符"""
        assert detect_mime_type("data:image/svg+xml;base64,PHN2Zz4=") == "image/svg+xml"

    def test_bare_base64_defaults_to_jpeg(self):
        """没有前缀时按 JPEG 处理，数据原样使用"""
        payload = parse_data_url("/9j/4AAQSkZJRg==")

        assert payload.mime_type == DEFAULT_MIME_TYPE == "image/jpeg"
        assert payload.data == "/9j/4AAQSkZJRg=="

    def test_unrecognized_prefix_defaults_to_jpeg(self):
        """无法识别的格式标记按 JPEG 处理，从不失败"""
        payload = parse_data_url("data:;base64,AAAA")

        assert payload.mime_type == "image/jpeg"
        assert payload.data == "AAAA"

    def test_empty_input(self):
        payload = parse_data_url("")

        assert payload.mime_type == "image/jpeg"
        assert payload.data == ""

    def test_strip_prefix_keeps_text_after_first_comma(self):
        assert strip_data_url_prefix("data:image/png;base64,abc,def") == "abc,def"

    def test_empty_data_after_prefix(self):
        """前缀后没有数据时得到空数据，而不是把前缀当作图片"""
        payload = parse_data_url("data:image/png;base64,")

        assert payload.mime_type == "image/png"
        assert payload.data == ""
        assert strip_data_url_prefix("data:image/png;base64,") == ""

    def test_whitespace_trimmed(self):
        payload = parse_data_url("data:image/png;base64,QUJD\n")

        assert payload.data == "QUJD"


@pytest.mark.unit
@pytest.mark.sketch
class TestImagePayload:
    """ImagePayload 单元测试类"""

    def test_to_bytes(self):
        payload = ImagePayload(mime_type="image/png", data=base64.b64encode(b"hello").decode())

        assert payload.to_bytes() == b"hello"

    def test_to_bytes_invalid(self):
        """无法解码的数据抛出 InvalidImageError"""
        payload = ImagePayload(mime_type="image/png", data="abc")

        with pytest.raises(InvalidImageError) as exc_info:
            payload.to_bytes()

        assert exc_info.value.code == "INVALID_IMAGE"


@pytest.mark.unit
@pytest.mark.sketch
class TestGenerationResult:
    """GenerationResult 单元测试类"""

    def test_image_wraps_as_png_data_url(self):
        result = GenerationResult.image("QUJD", {"model": "m"})

        assert result.success is True
        assert result.image_url == "data:image/png;base64,QUJD"
        assert result.error_kind is None
        assert result.metadata == {"model": "m"}

    def test_image_bytes(self):
        result = GenerationResult.image(base64.b64encode(b"png-bytes").decode())

        assert result.image_bytes() == b"png-bytes"

    def test_failure_has_no_image(self):
        result = GenerationResult.failure(FailureKind.MODEL_REFUSAL, "I cannot do that")

        assert result.success is False
        assert result.image_url is None
        assert result.error_message == "I cannot do that"
        with pytest.raises(ValueError):
            result.image_bytes()

    def test_failure_empty_message_falls_back(self):
        result = GenerationResult.failure(FailureKind.TRANSPORT, "")

        assert result.error_message

    def test_with_metadata_returns_new_result(self):
        original = GenerationResult.image("QUJD", {"model": "m"})
        updated = original.with_metadata(attempts=2)

        assert updated.metadata == {"model": "m", "attempts": 2}
        assert original.metadata == {"model": "m"}
        assert updated.image_url == original.image_url
