"""테스트 공통 fixture"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["LLM_PROVIDER"] = "openai"
os.environ["GITHUB_TOKEN"] = ""
os.environ["LANGFUSE_PUBLIC_KEY"] = ""
os.environ["LANGFUSE_SECRET_KEY"] = ""

from datetime import datetime  # noqa: E402
from unittest.mock import MagicMock, patch  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402, F401
from app.db.session import Base, get_db  # noqa: E402
from app.domain.release import store  # noqa: E402
from app.domain.release.schemas import ReleaseData, RepositoryData  # noqa: E402
from app.main import app  # noqa: E402

PROJECT_DESCRIPTION = "FastAPI 기반 백엔드 서비스, httpx와 pydantic v2에 의존"


@pytest.fixture
def db() -> Session:
    """테스트용 인메모리 SQLite 세션"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def project_settings(db):
    """전역 프로젝트 설정 저장"""
    row = store.upsert_project_settings(db, PROJECT_DESCRIPTION, "English")
    db.commit()
    return row


@pytest.fixture
def sample_repository_data() -> RepositoryData:
    """테스트용 레포지토리 - 릴리스는 최신순"""
    return RepositoryData(
        id="1001",
        name="encode/httpx",
        url="https://github.com/encode/httpx",
        stars=12000,
        forks=800,
        releases=[
            ReleaseData(
                id="r3",
                version="v2.0.0",
                published_at=datetime(2024, 3, 1, 12, 0, 0),
                raw_notes="BREAKING: removed the `Client.send_legacy` API.",
            ),
            ReleaseData(
                id="r2",
                version="v1.1.0",
                published_at=datetime(2024, 2, 1, 12, 0, 0),
                raw_notes="Deprecated `Client.send_legacy`, use `Client.send` instead.",
            ),
            ReleaseData(
                id="r1",
                version="v1.0.0",
                published_at=datetime(2024, 1, 1, 12, 0, 0),
                raw_notes="Fixed connection pool leak.",
            ),
        ],
    )


@pytest.fixture
def tracked_repository(db, project_settings, sample_repository_data):
    """DB에 저장된 추적 레포지토리"""
    repository = store.create_repository(db, sample_repository_data)
    db.commit()
    return repository


@pytest.fixture
def async_client(db):
    """테스트 DB 세션을 사용하는 비동기 HTTP 클라이언트"""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    yield AsyncClient(transport=transport, base_url="http://test")
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def mock_llm_client():
    """릴리스 분석용 LLM 클라이언트 mock"""
    with patch("app.infra.llm.client.get_llm_client") as mock_get:
        mock_client = MagicMock()
        mock_get.return_value = mock_client
        yield mock_client


@pytest.fixture
def mock_github_response():
    """GitHub API 응답 mock 생성"""

    def _create(payload):
        mock = MagicMock()
        mock.json.return_value = payload
        mock.raise_for_status = MagicMock()
        return mock

    return _create


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://api.github.com"),
            response=httpx.Response(status_code),
        )

    return _create


@pytest.fixture
def github_release():
    """GitHub 릴리스 API 응답 항목 생성 helper"""

    def _create(release_id: int, tag: str, published_at: str, body: str | None = "notes") -> dict:
        return {
            "id": release_id,
            "tag_name": tag,
            "published_at": published_at,
            "body": body,
        }

    return _create
