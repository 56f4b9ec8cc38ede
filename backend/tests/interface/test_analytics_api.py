"""
统计与章节资源接口测试
数据库相关服务通过依赖覆盖替换为mock
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.api.deps import get_analytics_service, get_resource_file_service
from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.models.chapter_resource import ChapterResource


@pytest.fixture
def analytics_service(api_app):
    service = MagicMock()
    service.track_app_open = AsyncMock(return_value=True)
    service.get_app_open_stats = AsyncMock(return_value={
        "totalOpens": 3,
        "appOpens": 2,
        "webOpens": 1,
        "last24Hours": 1,
        "last7Days": 2,
        "last30Days": 3,
    })
    api_app.dependency_overrides[get_analytics_service] = lambda: service
    return service


@pytest.fixture
def resource_service(api_app):
    service = MagicMock()
    service.delete_resource = AsyncMock(return_value=None)
    service.detach_file = AsyncMock()
    api_app.dependency_overrides[get_resource_file_service] = lambda: service
    return service


@pytest.mark.interface
@pytest.mark.analytics
class TestAppOpenApi:
    """应用打开上报接口测试类"""

    def test_app_open_records_platform(self, client, analytics_service):
        response = client.post("/api/analytics/app-open", json={"platform": "app"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        analytics_service.track_app_open.assert_awaited_once_with("app")

    def test_app_open_without_body(self, client, analytics_service):
        response = client.post("/api/analytics/app-open")

        assert response.status_code == 200
        analytics_service.track_app_open.assert_awaited_once_with(None)

    def test_app_open_succeeds_when_tracking_fails(self, client, analytics_service):
        analytics_service.track_app_open.return_value = False

        response = client.post("/api/analytics/app-open", json={"platform": "web"})

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_app_open_rate_limited_per_client(self, client, analytics_service):
        limit = settings.app_open_rate_limit_max_requests
        headers = {"X-Forwarded-For": "203.0.113.10"}

        statuses = [
            client.post("/api/analytics/app-open", json={}, headers=headers).status_code
            for _ in range(limit + 1)
        ]

        assert statuses[:limit] == [200] * limit
        assert statuses[limit] == 429
        assert analytics_service.track_app_open.await_count == limit

        limited = client.post("/api/analytics/app-open", json={}, headers=headers)
        assert limited.json() == {"error": "Too many requests"}

        other = client.post(
            "/api/analytics/app-open", json={}, headers={"X-Forwarded-For": "198.51.100.1"}
        )
        assert other.status_code == 200

    def test_rate_limit_window_resets(self, client, analytics_service, fake_clock):
        limit = settings.app_open_rate_limit_max_requests
        headers = {"X-Real-IP": "192.0.2.44"}
        for _ in range(limit + 1):
            client.post("/api/analytics/app-open", json={}, headers=headers)

        fake_clock.advance(settings.app_open_rate_limit_window_ms + 1)

        response = client.post("/api/analytics/app-open", json={}, headers=headers)
        assert response.status_code == 200

    def test_stats_require_token(self, client, analytics_service):
        response = client.get("/api/analytics/stats")

        assert response.status_code == 401

    def test_stats(self, client, analytics_service, auth_headers):
        response = client.get("/api/analytics/stats", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            "totalOpens": 3,
            "appOpens": 2,
            "webOpens": 1,
            "last24Hours": 1,
            "last7Days": 2,
            "last30Days": 3,
        }


@pytest.mark.interface
@pytest.mark.resources
class TestChapterResourceApi:
    """章节资源接口测试类"""

    def test_delete_resource(self, client, resource_service, auth_headers):
        response = client.delete("/api/chapter-resources/res-1", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Resource deleted successfully"}
        resource_service.delete_resource.assert_awaited_once_with("res-1")

    def test_delete_missing_resource(self, client, resource_service, auth_headers):
        resource_service.delete_resource.side_effect = NotFoundError("Resource not found")

        response = client.delete("/api/chapter-resources/missing", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Resource not found"}

    def test_detach_file(self, client, resource_service, auth_headers):
        resource_service.detach_file.return_value = ChapterResource(
            id="res-1",
            chapter_id="chapter-1",
            title="Swadhyay 1",
            type="svadhyay",
            resource_type="pdf",
            url=None,
            file_name=None,
        )

        response = client.delete("/api/chapter-resources/res-1/file", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "res-1"
        assert body["fileName"] is None
        assert body["url"] is None

    def test_delete_requires_token(self, client, resource_service):
        response = client.delete("/api/chapter-resources/res-1")

        assert response.status_code == 401
