"""app/main.py 테스트"""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.core.exceptions import NotFoundError, UpstreamFetchError, register_exception_handlers
from app.main import app


class TestHealthCheck:
    """헬스체크 엔드포인트 테스트"""

    @pytest.mark.asyncio
    async def test_health_check_returns_up(self):
        """헬스체크 엔드포인트가 정상 응답을 반환"""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "UP"}


class TestAppConfiguration:
    """앱 설정 테스트"""

    def test_app_has_correct_title(self):
        """앱 제목이 올바르게 설정됨"""
        assert app.title == "Release Radar"

    def test_app_has_correct_version(self):
        """앱 버전이 올바르게 설정됨"""
        assert app.version == "1.0.0"

    def test_router_is_included(self):
        """API 라우터가 포함됨"""
        assert app.url_path_for("health_check") == "/health"
        assert app.url_path_for("get_settings") == "/api/v1/settings"
        assert app.url_path_for("list_repositories") == "/api/v1/repositories"
        assert (
            app.url_path_for("analyze_repository", repository_id="1001")
            == "/api/v1/repositories/1001/analyze"
        )


class TestExceptionHandlers:
    """CustomException 응답 변환 테스트"""

    @pytest.fixture
    def error_app(self) -> FastAPI:
        error_app = FastAPI()
        register_exception_handlers(error_app)

        @error_app.get("/not-found")
        async def not_found():
            raise NotFoundError(detail="1001")

        @error_app.get("/upstream")
        async def upstream():
            raise UpstreamFetchError()

        return error_app

    @pytest.mark.asyncio
    async def test_not_found_with_detail(self, error_app):
        transport = ASGITransport(app=error_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/not-found")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error_code": "NOT_FOUND",
            "message": "요청한 리소스를 찾을 수 없습니다",
            "detail": "1001",
        }

    @pytest.mark.asyncio
    async def test_without_detail(self, error_app):
        transport = ASGITransport(app=error_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/upstream")

        assert response.status_code == 502
        assert "detail" not in response.json()
        assert response.json()["error_code"] == "GITHUB_API_ERROR"
