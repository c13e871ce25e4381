"""레포지토리/릴리스/프로젝트 설정 저장소

커밋은 호출자(service)가 담당한다. 여기서는 flush까지만 수행해
하나의 사용자 액션이 한 트랜잭션으로 묶이도록 한다.
"""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.release.constants import DEFAULT_LANGUAGE
from app.domain.release.schemas import (
    ImpactAnalysis,
    ProjectSettingsView,
    ReleaseData,
    ReleaseNote,
    ReleaseView,
    RepositoryData,
    RepositoryView,
)
from app.models import ProjectSettings, Release, Repository
from app.models.project_settings import SETTINGS_ID


def _to_naive_utc(value: datetime) -> datetime:
    """DB 저장용 naive UTC 시각으로 변환"""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def get_project_settings(db: Session) -> ProjectSettings | None:
    """전역 프로젝트 설정 조회"""
    return db.get(ProjectSettings, SETTINGS_ID)


def upsert_project_settings(
    db: Session, project_description: str, language: str = DEFAULT_LANGUAGE
) -> ProjectSettings:
    """고정 키로 프로젝트 설정 upsert - 레코드는 항상 하나"""
    row = db.get(ProjectSettings, SETTINGS_ID)
    if row is None:
        row = ProjectSettings(
            id=SETTINGS_ID,
            project_description=project_description,
            language=language,
        )
        db.add(row)
    else:
        row.project_description = project_description
        row.language = language
        row.updated_at = datetime.now(UTC)
    db.flush()
    return row


def list_repositories(db: Session) -> list[Repository]:
    """추적 중인 레포지토리 목록, 최근 추가 순"""
    stmt = select(Repository).order_by(Repository.created_at.desc(), Repository.name)
    return list(db.scalars(stmt))


def get_repository(db: Session, repository_id: str) -> Repository | None:
    return db.get(Repository, repository_id)


def get_release(db: Session, repository_id: str, release_id: str) -> Release | None:
    """레포지토리에 속한 릴리스 조회"""
    release = db.get(Release, release_id)
    if release is None or release.repository_id != repository_id:
        return None
    return release


def sorted_releases(repository: Repository) -> list[Release]:
    """발행일 내림차순 릴리스 목록 - 첫 번째가 최신 버전"""
    return sorted(repository.releases, key=lambda r: r.published_at, reverse=True)


def latest_release(repository: Repository) -> Release | None:
    releases = sorted_releases(repository)
    return releases[0] if releases else None


def _new_release(data: ReleaseData) -> Release:
    return Release(
        id=data.id,
        version=data.version,
        published_at=_to_naive_utc(data.published_at),
        raw_notes=data.raw_notes,
    )


def create_repository(
    db: Session, data: RepositoryData, project_description: str | None = None
) -> Repository:
    """레포지토리와 릴리스 생성"""
    repository = Repository(
        id=data.id,
        name=data.name,
        url=data.url,
        stars=data.stars,
        forks=data.forks,
        project_description=project_description,
        created_at=datetime.now(UTC),
    )
    repository.releases = [_new_release(r) for r in data.releases]
    db.add(repository)
    db.flush()
    return repository


def add_releases(db: Session, repository: Repository, releases: list[ReleaseData]) -> int:
    """레포지토리에 새 릴리스 추가, 이미 있는 id는 건너뜀

    Returns:
        실제로 추가된 릴리스 수
    """
    known_ids = {r.id for r in repository.releases}
    added = 0
    for data in releases:
        if data.id in known_ids:
            continue
        repository.releases.append(_new_release(data))
        known_ids.add(data.id)
        added += 1
    db.flush()
    return added


def delete_repository(db: Session, repository: Repository) -> None:
    """레포지토리 삭제 - 소속 릴리스도 함께 삭제"""
    db.delete(repository)
    db.flush()


def set_repository_description(
    db: Session, repository: Repository, project_description: str | None
) -> Repository:
    """레포지토리별 프로젝트 설명 설정, 빈 값이면 해제"""
    value = (project_description or "").strip()
    repository.project_description = value or None
    db.flush()
    return repository


def update_release_analysis(db: Session, release: Release, analysis: ImpactAnalysis) -> Release:
    release.summary = analysis.summary
    release.impact = analysis.impact
    release.reason = analysis.reason
    db.flush()
    return release


def update_overall_impact(
    db: Session, repository: Repository, analysis: ImpactAnalysis
) -> Repository:
    repository.overall_summary = analysis.summary
    repository.overall_impact = analysis.impact
    repository.overall_reason = analysis.reason
    repository.overall_analyzed_at = datetime.now(UTC)
    db.flush()
    return repository


def resolve_project_description(
    repository: Repository | None, project_settings: ProjectSettings | None
) -> str:
    """레포지토리 설명이 있으면 사용하고, 없으면 전역 설정 설명 사용"""
    if repository is not None and repository.project_description:
        override = repository.project_description.strip()
        if override:
            return override
    if project_settings is not None and project_settings.project_description:
        return project_settings.project_description.strip()
    return ""


def resolve_language(project_settings: ProjectSettings | None) -> str:
    if project_settings is None or not project_settings.language:
        return DEFAULT_LANGUAGE
    return project_settings.language


def release_notes_oldest_first(repository: Repository) -> list[ReleaseNote]:
    """통합 분석 입력 - 원본 노트만 사용하며 오래된 순서로 정렬"""
    return [
        ReleaseNote(version=r.version, raw_notes=r.raw_notes)
        for r in reversed(sorted_releases(repository))
    ]


def to_settings_view(project_settings: ProjectSettings) -> ProjectSettingsView:
    return ProjectSettingsView.model_validate(project_settings)


def to_repository_view(
    repository: Repository, project_settings: ProjectSettings | None
) -> RepositoryView:
    """DB 모델을 API 응답 형태로 변환"""
    overall = None
    if repository.overall_summary and repository.overall_impact and repository.overall_reason:
        overall = ImpactAnalysis(
            summary=repository.overall_summary,
            impact=repository.overall_impact,
            reason=repository.overall_reason,
        )

    return RepositoryView(
        id=repository.id,
        name=repository.name,
        url=repository.url,
        stars=repository.stars,
        forks=repository.forks,
        project_description=resolve_project_description(repository, project_settings),
        project_description_override=repository.project_description,
        overall_impact=overall,
        overall_analyzed_at=repository.overall_analyzed_at,
        releases=[ReleaseView.model_validate(r) for r in sorted_releases(repository)],
    )
