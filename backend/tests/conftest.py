"""
测试配置和fixtures
为所有测试提供共享的配置和fixtures

接口测试在进程内通过 FastAPI TestClient 运行，不需要启动服务、数据库或Ghostscript
"""

import os
import tempfile

# 必须在导入 app 之前设置，settings 在导入时读取环境变量
_TEST_WORKSPACE = tempfile.mkdtemp(prefix="shala-tests-")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TEST_WORKSPACE, "uploads"))
os.environ.setdefault("LOG_DIR", os.path.join(_TEST_WORKSPACE, "log"))
os.environ.setdefault("APP_DEBUG", "true")
os.environ.setdefault("BASE_URL", "http://testserver")

import pytest

from app.core.rate_limit import RateLimiter
from app.core.security import create_access_token
from app.core.storage import LocalFileStorage
from tests.utils.mock_utils import FakeClock, MockBuilder

TEST_BASE_URL = "http://testserver"


@pytest.fixture
def storage(tmp_path):
    """指向临时目录的本地存储"""
    return LocalFileStorage(root_dir=str(tmp_path / "uploads"), base_url=TEST_BASE_URL)


@pytest.fixture
def fake_clock():
    """可手动推进的毫秒时钟"""
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock):
    return RateLimiter(clock=fake_clock)


@pytest.fixture
def mock_compressor():
    """默认不可用的压缩器mock"""
    return MockBuilder.create_mock_compressor(available=False)


@pytest.fixture
def mock_db_session():
    """创建mock数据库会话"""
    return MockBuilder.create_mock_db_session()


@pytest.fixture
def admin_token():
    return create_access_token("admin-1", "admin@example.com", "Test Admin")


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def api_app(storage, mock_compressor, rate_limiter):
    """
    替换了进程级单例的应用实例

    不进入 lifespan，存储、压缩器和限流器通过依赖覆盖注入
    """
    from main import app
    from app.api.deps import get_compressor, get_rate_limiter, get_storage

    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_compressor] = lambda: mock_compressor
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    """进程内测试客户端"""
    from fastapi.testclient import TestClient

    return TestClient(api_app)


# 测试标记配置
def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "interface: 接口测试")
    config.addinivalue_line("markers", "storage: 本地存储测试")
    config.addinivalue_line("markers", "compressor: PDF压缩测试")
    config.addinivalue_line("markers", "rate_limit: 限流测试")
    config.addinivalue_line("markers", "upload: PDF上传测试")
    config.addinivalue_line("markers", "analytics: 统计测试")
    config.addinivalue_line("markers", "resources: 章节资源测试")
    config.addinivalue_line("markers", "security: 认证测试")
    config.addinivalue_line("markers", "logging: 日志测试")
