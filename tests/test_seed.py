"""샘플 데이터 적재 테스트"""

from sqlalchemy import func, select

from app.db.seed import SAMPLE_PROJECT_DESCRIPTION, seed_database
from app.domain.release import store
from app.models import ProjectSettings, Repository


class TestSeedDatabase:
    """seed_database 함수 테스트"""

    def test_creates_sample_data(self, db):
        seed_database(db)

        settings_row = store.get_project_settings(db)
        repository = store.get_repository(db, "70107786")
        assert settings_row.project_description == SAMPLE_PROJECT_DESCRIPTION
        assert repository.name == "vercel/next.js"
        releases = store.sorted_releases(repository)
        assert [r.version for r in releases] == ["v15.3.3", "v15.3.0"]
        assert [r.impact for r in releases] == ["low", "high"]

    def test_reseed_replaces_existing(self, db, tracked_repository):
        """기존 데이터를 지우고 다시 생성"""
        seed_database(db)
        seed_database(db)

        assert db.scalar(select(func.count()).select_from(Repository)) == 1
        assert db.scalar(select(func.count()).select_from(ProjectSettings)) == 1
        assert store.get_repository(db, "1001") is None
