from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.exceptions import CustomException, ErrorCode
from app.domain.release.schemas.analysis import ImpactAnalysis, ImpactLevel


class ProjectSettingsView(BaseModel):
    """전역 프로젝트 설정"""

    model_config = ConfigDict(from_attributes=True)

    project_description: str
    language: str
    updated_at: datetime | None = None


class ReleaseView(BaseModel):
    """저장된 릴리스"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    version: str
    published_at: datetime
    raw_notes: str
    summary: str | None = None
    impact: ImpactLevel | None = None
    reason: str | None = None


class RepositoryView(BaseModel):
    """저장된 레포지토리와 릴리스 목록"""

    id: str
    name: str
    url: str
    stars: int
    forks: int
    project_description: str
    project_description_override: str | None = None
    overall_impact: ImpactAnalysis | None = None
    overall_analyzed_at: datetime | None = None
    releases: list[ReleaseView]


class RefreshSummary(BaseModel):
    """새로고침 결과"""

    new_releases_count: int
    skipped_repositories: list[str] = Field(default_factory=list)


class ActionResult(BaseModel):
    """사용자 액션 처리 결과"""

    success: bool
    message: str
    error_code: ErrorCode | None = None
    repository: RepositoryView | None = None
    analysis: ImpactAnalysis | None = None
    settings: ProjectSettingsView | None = None
    refresh: RefreshSummary | None = None

    status_code: int = Field(default=200, exclude=True)

    @classmethod
    def failure(cls, exc: CustomException) -> "ActionResult":
        """예외를 실패 결과로 변환"""
        return cls(
            success=False,
            message=exc.message,
            error_code=exc.error_code,
            status_code=exc.status_code,
        )
