import asyncio

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.context import set_repository
from app.core.exceptions import (
    CustomException,
    DuplicateRepositoryError,
    ErrorCode,
    InsufficientReleasesError,
    MissingProjectDescriptionError,
    NoReleasesError,
    NotFoundError,
    ValidationError,
)
from app.core.logging import get_logger
from app.domain.release import store
from app.domain.release.analysis import analyze_overall_impact, analyze_release
from app.domain.release.constants import DEFAULT_LANGUAGE, MIN_RELEASES_FOR_OVERALL_ANALYSIS
from app.domain.release.schemas import (
    ActionResult,
    ProjectSettingsView,
    RefreshSummary,
    ReleaseData,
    RepositoryView,
)
from app.infra.github.client import (
    fetch_releases_newer_than,
    fetch_repository_and_releases_from,
    parse_repo_url,
)

logger = get_logger(__name__)


def _fail(db: Session, action: str, exc: CustomException) -> ActionResult:
    """롤백 후 실패 결과 반환"""
    db.rollback()
    logger.warning(
        "%s 실패 error_code=%s message=%s detail=%s",
        action,
        exc.error_code,
        exc.message,
        exc.detail,
    )
    return ActionResult.failure(exc)


def _fail_db(db: Session, action: str, exc: SQLAlchemyError) -> ActionResult:
    db.rollback()
    logger.error("%s DB 오류 error=%s", action, type(exc).__name__, exc_info=True)
    return ActionResult.failure(
        CustomException(
            status_code=500,
            error_code=ErrorCode.INTERNAL_ERROR,
            message="데이터 저장에 실패했습니다",
            detail=type(exc).__name__,
        )
    )


def _get_repository_or_raise(db: Session, repository_id: str):
    repository = store.get_repository(db, repository_id)
    if repository is None:
        raise NotFoundError(
            detail=repository_id,
            message=f"레포지토리를 찾을 수 없습니다: {repository_id}",
        )
    return repository


def load_repositories(db: Session) -> list[RepositoryView]:
    """추적 중인 레포지토리 전체 조회"""
    project_settings = store.get_project_settings(db)
    return [store.to_repository_view(r, project_settings) for r in store.list_repositories(db)]


def load_project_settings(db: Session) -> ProjectSettingsView | None:
    """전역 프로젝트 설정 조회, 없으면 None"""
    project_settings = store.get_project_settings(db)
    if project_settings is None:
        return None
    return store.to_settings_view(project_settings)


def update_project_settings(
    db: Session, project_description: str, language: str = DEFAULT_LANGUAGE
) -> ActionResult:
    """전역 프로젝트 설정 저장 - 항상 한 건만 유지"""
    action = "프로젝트 설정 저장"
    try:
        description = (project_description or "").strip()
        if not description:
            raise ValidationError(
                detail="project_description",
                message="프로젝트 설명을 입력해주세요",
                error_code=ErrorCode.PROJECT_DESCRIPTION_REQUIRED,
            )

        row = store.upsert_project_settings(db, description, language.strip() or DEFAULT_LANGUAGE)
        db.commit()

        logger.info("프로젝트 설정 저장 완료 language=%s", row.language)
        return ActionResult(
            success=True,
            message="프로젝트 설정이 저장되었습니다",
            settings=store.to_settings_view(row),
        )
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)


async def add_repository(
    db: Session,
    url: str,
    start_version: str,
    project_description: str | None = None,
) -> ActionResult:
    """레포지토리 추가

    프로젝트 설명(전역 설정 또는 직접 입력)이 없으면 GitHub 호출 전에 거절한다.
    """
    action = "레포지토리 추가"
    try:
        override = (project_description or "").strip() or None
        project_settings = store.get_project_settings(db)
        if override is None and not store.resolve_project_description(None, project_settings):
            raise MissingProjectDescriptionError(detail="레포지토리 추가 전 프로젝트 설명을 설정해주세요")

        parse_repo_url(url)

        set_repository(url)
        data = await fetch_repository_and_releases_from(url, start_version.strip())

        if store.get_repository(db, data.id) is not None:
            raise DuplicateRepositoryError(data.name)

        repository = store.create_repository(db, data, override)
        db.commit()

        logger.info("레포지토리 추가 완료 name=%s releases=%d", data.name, len(data.releases))
        return ActionResult(
            success=True,
            message=f"{data.name} 추가 완료",
            repository=store.to_repository_view(repository, project_settings),
        )
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)
    finally:
        set_repository(None)


def remove_repository(db: Session, repository_id: str) -> ActionResult:
    """레포지토리와 소속 릴리스 삭제"""
    action = "레포지토리 삭제"
    try:
        repository = _get_repository_or_raise(db, repository_id)
        name = repository.name
        store.delete_repository(db, repository)
        db.commit()

        logger.info("레포지토리 삭제 완료 name=%s", name)
        return ActionResult(success=True, message=f"{name} 삭제 완료")
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)


def update_repository_description(
    db: Session, repository_id: str, project_description: str | None
) -> ActionResult:
    """레포지토리별 프로젝트 설명 변경, 빈 값이면 전역 설정으로 되돌림"""
    action = "레포지토리 설명 변경"
    try:
        repository = _get_repository_or_raise(db, repository_id)
        store.set_repository_description(db, repository, project_description)
        db.commit()

        project_settings = store.get_project_settings(db)
        return ActionResult(
            success=True,
            message="레포지토리 프로젝트 설명이 변경되었습니다",
            repository=store.to_repository_view(repository, project_settings),
        )
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)


async def _fetch_new_releases(
    semaphore: asyncio.Semaphore, repo_name: str, latest_version: str
) -> list[ReleaseData] | None:
    """레포 하나의 새 릴리스 조회, 실패 시 None"""
    async with semaphore:
        set_repository(repo_name)
        try:
            return await fetch_releases_newer_than(repo_name, latest_version)
        except Exception as e:
            logger.warning("새 릴리스 조회 실패, 건너뜀 error=%s", e)
            return None


async def refresh_repositories(db: Session) -> ActionResult:
    """모든 레포지토리의 새 릴리스 조회

    레포별 조회는 동시에 수행하며 한 레포의 실패는 나머지에 영향을 주지 않는다.
    """
    action = "레포지토리 새로고침"
    try:
        targets = []
        for repository in store.list_repositories(db):
            latest = store.latest_release(repository)
            if latest is None:
                continue
            targets.append((repository, latest.version))

        semaphore = asyncio.Semaphore(settings.refresh_max_concurrent_requests)
        results = await asyncio.gather(
            *[_fetch_new_releases(semaphore, repo.name, version) for repo, version in targets]
        )

        total_new = 0
        skipped = []
        for (repository, _), new_releases in zip(targets, results, strict=True):
            if new_releases is None:
                skipped.append(repository.name)
                continue
            if new_releases:
                added = store.add_releases(db, repository, new_releases)
                total_new += added
                logger.info("새 릴리스 추가 name=%s count=%d", repository.name, added)

        db.commit()

        logger.info(
            "새로고침 완료 repos=%d new=%d skipped=%d", len(targets), total_new, len(skipped)
        )
        return ActionResult(
            success=True,
            message=f"새 릴리스 {total_new}개를 찾았습니다",
            refresh=RefreshSummary(new_releases_count=total_new, skipped_repositories=skipped),
        )
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)


async def analyze_release_impact(db: Session, repository_id: str, release_id: str) -> ActionResult:
    """단일 릴리스 영향도 분석 후 저장"""
    action = "릴리스 분석"
    try:
        repository = _get_repository_or_raise(db, repository_id)
        release = store.get_release(db, repository_id, release_id)
        if release is None:
            raise NotFoundError(
                detail=release_id,
                message=f"릴리스를 찾을 수 없습니다: {release_id}",
            )

        project_settings = store.get_project_settings(db)
        description = store.resolve_project_description(repository, project_settings)
        if not description:
            raise MissingProjectDescriptionError(detail=repository.name)

        set_repository(repository.name)
        analysis = await analyze_release(
            release.raw_notes,
            description,
            store.resolve_language(project_settings),
            session_id=repository.id,
        )

        store.update_release_analysis(db, release, analysis)
        db.commit()

        logger.info("릴리스 분석 저장 version=%s impact=%s", release.version, analysis.impact)
        return ActionResult(success=True, message="릴리스 분석이 완료되었습니다", analysis=analysis)
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)
    finally:
        set_repository(None)


async def analyze_overall_repository_impact(db: Session, repository_id: str) -> ActionResult:
    """레포지토리 전체 릴리스 구간의 통합 영향도 분석 후 저장

    개별 릴리스 요약이 있더라도 원본 노트만 사용한다.
    """
    action = "전체 영향도 분석"
    try:
        repository = _get_repository_or_raise(db, repository_id)

        project_settings = store.get_project_settings(db)
        description = store.resolve_project_description(repository, project_settings)
        if not description:
            raise MissingProjectDescriptionError(detail=repository.name)

        release_notes = store.release_notes_oldest_first(repository)
        if not release_notes:
            raise NoReleasesError(detail=repository.name)
        if len(release_notes) < MIN_RELEASES_FOR_OVERALL_ANALYSIS:
            raise InsufficientReleasesError(MIN_RELEASES_FOR_OVERALL_ANALYSIS, len(release_notes))

        set_repository(repository.name)
        analysis = await analyze_overall_impact(
            release_notes,
            description,
            store.resolve_language(project_settings),
            session_id=repository.id,
        )

        store.update_overall_impact(db, repository, analysis)
        db.commit()

        logger.info(
            "전체 영향도 저장 releases=%d impact=%s", len(release_notes), analysis.impact
        )
        return ActionResult(
            success=True,
            message="전체 영향도 분석이 완료되었습니다",
            analysis=analysis,
        )
    except CustomException as e:
        return _fail(db, action, e)
    except SQLAlchemyError as e:
        return _fail_db(db, action, e)
    finally:
        set_repository(None)
