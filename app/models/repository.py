"""Repository 모델"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.session import Base


class Repository(Base):
    """추적 중인 GitHub 레포지토리"""

    __tablename__ = "repositories"

    # GitHub 레포지토리 id
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    stars: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    forks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # 레포지토리별 프로젝트 설명, 없으면 전역 설정 사용
    project_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    overall_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    overall_impact: Mapped[str | None] = mapped_column(String(16), nullable=True)
    overall_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    overall_analyzed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=lambda: datetime.now(UTC), nullable=False
    )

    releases: Mapped[list["Release"]] = relationship(
        "Release",
        back_populates="repository",
        cascade="all, delete-orphan",
        order_by="desc(Release.published_at)",
    )

    def __repr__(self) -> str:
        return f"<Repository {self.name}>"
