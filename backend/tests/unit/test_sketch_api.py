"""
素描生成API单元测试
使用 FastAPI TestClient 与依赖覆盖，Service 层替换为假实现
"""

import base64

import pytest
from fastapi.testclient import TestClient

from main import app
from sketchify.api.v1.endpoints.sketch import get_sketch_handler
from sketchify.core.config import settings
from sketchify.core.sketch.models import FailureKind, GenerationResult, SketchStyle
from sketchify.core.sketch.response_parser import parse_generation_response
from sketchify.services.sketch.handler import FAILURE_STATUS_CODES, SketchGenerationHandler
from sketchify.services.sketch.service import SketchGenerationService
from tests.utils.mock_utils import ResponseBuilder

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake"
PNG_BASE64 = base64.b64encode(PNG_BYTES).decode("ascii")
GENERATE_URL = f"{settings.api_v1_str}/sketch/generate"


class FakeSketchService(SketchGenerationService):
    """返回预设结果的 Service，并记录调用参数"""

    def __init__(self, result: GenerationResult):
        super().__init__()
        self.result = result
        self.calls = []

    async def generate_sketch(self, image, sketch_settings):
        self.calls.append((image, sketch_settings))
        return self.result


@pytest.mark.unit
@pytest.mark.api
class TestSketchAPI:
    """素描生成API单元测试类"""

    def setup_method(self):
        """每个测试方法执行前的设置"""
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def use_result(self, result: GenerationResult) -> FakeSketchService:
        service = FakeSketchService(result)
        app.dependency_overrides[get_sketch_handler] = lambda: SketchGenerationHandler(service=service)
        return service

    def test_health(self):
        response = self.client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["transport"] == settings.sketch_transport
        assert "api_key_configured" in body
        assert "gemini_api_key" not in body

    def test_get_options(self):
        """返回全部风格、线条粗细与默认参数"""
        response = self.client.get(f"{settings.api_v1_str}/sketch/options")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [item["value"] for item in data["styles"]] == [style.value for style in SketchStyle]
        assert [item["value"] for item in data["line_weights"]] == ["thin", "medium", "thick"]
        assert data["defaults"] == {"style": "pencil", "line_weight": "medium", "darkness": 50}

    def test_generate_success(self):
        service = self.use_result(
            GenerationResult.image(PNG_BASE64, {"model": "gemini-3-pro-image-preview", "attempts": 1})
        )

        response = self.client.post(GENERATE_URL, json={
            "image": "data:image/png;base64,QUJD",
            "settings": {"style": "charcoal", "line_weight": "thick", "darkness": 80}
        })

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["image_url"] == f"data:image/png;base64,{PNG_BASE64}"
        assert body["data"]["model"] == "gemini-3-pro-image-preview"
        assert body["data"]["attempts"] == 1
        assert body["data"]["generation_time"] is not None

        image, sketch_settings = service.calls[0]
        assert image == "data:image/png;base64,QUJD"
        assert sketch_settings.style == SketchStyle.CHARCOAL
        assert sketch_settings.darkness == 80

    def test_generate_default_settings(self):
        service = self.use_result(GenerationResult.image(PNG_BASE64))

        response = self.client.post(GENERATE_URL, json={"image": "QUJD"})

        assert response.status_code == 200
        _, sketch_settings = service.calls[0]
        assert sketch_settings.style == SketchStyle.PENCIL
        assert sketch_settings.darkness == 50

    def test_generate_model_refusal(self):
        """模型拒绝：状态码 422，detail 为模型原文"""
        self.use_result(GenerationResult.failure(FailureKind.MODEL_REFUSAL, "I can't do that."))

        response = self.client.post(GENERATE_URL, json={"image": "QUJD"})

        assert response.status_code == 422
        assert response.json()["detail"] == "I can't do that."

    @pytest.mark.parametrize("kind", list(FailureKind))
    def test_failure_status_codes(self, kind):
        """每种失败类型映射到固定的状态码"""
        self.use_result(GenerationResult.failure(kind, "失败"))

        response = self.client.post(GENERATE_URL, json={"image": "QUJD"})

        assert response.status_code == FAILURE_STATUS_CODES[kind]
        assert response.json()["detail"] == "失败"

    @pytest.mark.parametrize("payload", [
        {},
        {"image": ""},
        {"image": "QUJD", "settings": {"style": "watercolor"}},
        {"image": "QUJD", "settings": {"line_weight": "heavy"}},
        {"image": "QUJD", "settings": {"darkness": 101}},
        {"image": "QUJD", "settings": {"darkness": -1}},
    ])
    def test_request_validation(self, payload):
        """请求参数校验失败时不调用 Service"""
        service = self.use_result(GenerationResult.image(PNG_BASE64))

        response = self.client.post(GENERATE_URL, json=payload)

        assert response.status_code == 422
        assert service.calls == []

    def test_download(self):
        """下载接口返回 PNG 附件"""
        self.use_result(GenerationResult.image(PNG_BASE64))

        response = self.client.post(f"{GENERATE_URL}/download", json={
            "image": "QUJD",
            "settings": {"style": "ink"}
        })

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["content-disposition"] == 'attachment; filename="sketch-ink.png"'
        assert response.content == PNG_BYTES

    def test_download_undecodable_model_image(self):
        """模型返回无法解码的图片时返回 502，而不是未处理的 500"""
        self.use_result(parse_generation_response(ResponseBuilder.image("abc")))

        response = self.client.post(f"{GENERATE_URL}/download", json={"image": "QUJD"})

        assert response.status_code == 502
        assert response.json()["detail"]

    def test_download_failure(self):
        self.use_result(GenerationResult.failure(FailureKind.RATE_LIMITED, "系统繁忙"))

        response = self.client.post(f"{GENERATE_URL}/download", json={"image": "QUJD"})

        assert response.status_code == 429
        assert response.json()["detail"] == "系统繁忙"


@pytest.mark.unit
@pytest.mark.api
class TestSketchGenerationService:
    """SketchGenerationService 单元测试类"""

    @pytest.mark.asyncio
    async def test_unknown_transport_is_configuration_failure(self):
        app_settings = settings.model_copy(update={"sketch_transport": "carrier-pigeon"})
        service = SketchGenerationService(settings=app_settings)

        result = await service.generate_sketch("QUJD", None)

        assert result.success is False
        assert result.error_kind == FailureKind.CONFIGURATION

    def test_options_defaults(self):
        options = SketchGenerationService.get_options()

        assert options["defaults"] == {"style": "pencil", "line_weight": "medium", "darkness": 50}
        assert len(options["styles"]) == 6
        assert options["styles"][0] == {"value": "pencil", "label": "铅笔素描"}
