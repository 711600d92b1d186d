"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

单元测试不依赖外部服务：模型调用全部通过假传输层 / 假会话完成，
重试等待通过可记录的 sleep 替换，不会真正等待。
"""

import base64

import pytest

from sketchify.core.sketch import SketchClientConfig, RetryPolicy
from tests.utils.mock_utils import RecordingSleep

# 1x1 PNG
SAMPLE_PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
SAMPLE_PNG_BASE64 = base64.b64encode(SAMPLE_PNG_BYTES).decode("ascii")
SAMPLE_JPEG_DATA_URL = "data:image/jpeg;base64,/9j/4AAQSkZJRgABAQ=="


@pytest.fixture(scope="function")
def client_config():
    """带 API Key 的客户端配置"""
    return SketchClientConfig(api_key="test-api-key", retry_policy=RetryPolicy())


@pytest.fixture(scope="function")
def keyless_config():
    """未配置 API Key 的客户端配置"""
    return SketchClientConfig(api_key=None)


@pytest.fixture(scope="function")
def recording_sleep():
    """记录等待秒数、不真正等待的 sleep"""
    return RecordingSleep()


@pytest.fixture(scope="function")
def sample_png_base64():
    return SAMPLE_PNG_BASE64


@pytest.fixture(scope="function")
def sample_data_url():
    return SAMPLE_JPEG_DATA_URL


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "sketch: 素描生成核心测试")
    config.addinivalue_line("markers", "prompt: 提示词构建测试")
    config.addinivalue_line("markers", "retry: 重试策略测试")
    config.addinivalue_line("markers", "transport: 传输层测试")
    config.addinivalue_line("markers", "api: API接口测试")
    config.addinivalue_line("markers", "logging: 日志系统测试")
    config.addinivalue_line("markers", "config: 配置测试")
