"""
샘플 데이터 적재

    python -m app.db.seed
"""

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.core.logging import get_logger, setup_logging
from app.db.session import SessionLocal, init_db
from app.domain.release import store
from app.domain.release.schemas import ImpactAnalysis, ReleaseData, RepositoryData
from app.models import ProjectSettings, Release, Repository

logger = get_logger(__name__)

SAMPLE_PROJECT_DESCRIPTION = (
    "A modern web application tracking GitHub releases and their impact analysis using AI."
)

SAMPLE_REPOSITORY = RepositoryData(
    id="70107786",
    name="vercel/next.js",
    url="https://github.com/vercel/next.js",
    stars=120000,
    forks=26000,
    releases=[
        ReleaseData(
            id="seed-v15.3.3",
            version="v15.3.3",
            published_at=datetime(2024, 12, 15, 10, 0, 0),
            raw_notes="Bug fixes and performance improvements for App Router stability.",
        ),
        ReleaseData(
            id="seed-v15.3.0",
            version="v15.3.0",
            published_at=datetime(2024, 12, 1, 10, 0, 0),
            raw_notes=(
                "Major improvements to the App Router, new experimental features, "
                "and breaking changes to the API."
            ),
        ),
    ],
)

SAMPLE_ANALYSES = {
    "v15.3.3": ImpactAnalysis(
        summary="Minor bug fixes and performance optimizations",
        impact="low",
        reason=(
            "This release contains only bug fixes and minor performance improvements, "
            "unlikely to impact existing functionality."
        ),
    ),
    "v15.3.0": ImpactAnalysis(
        summary="Major App Router improvements with breaking changes",
        impact="high",
        reason="Contains breaking changes to the API that may require code modifications.",
    ),
}


def seed_database(db: Session) -> Repository:
    """기존 데이터를 지우고 기본 설정과 샘플 레포지토리 생성"""
    db.execute(delete(Release))
    db.execute(delete(Repository))
    db.execute(delete(ProjectSettings))

    store.upsert_project_settings(db, SAMPLE_PROJECT_DESCRIPTION)
    repository = store.create_repository(db, SAMPLE_REPOSITORY)
    for release in repository.releases:
        store.update_release_analysis(db, release, SAMPLE_ANALYSES[release.version])

    db.commit()
    logger.info(
        "샘플 데이터 생성 완료 repository=%s releases=%d",
        repository.name,
        len(SAMPLE_REPOSITORY.releases),
    )
    return repository


def main() -> None:
    setup_logging()
    init_db()
    with SessionLocal() as db:
        seed_database(db)


if __name__ == "__main__":
    main()
