from datetime import datetime

from pydantic import BaseModel


class ReleaseData(BaseModel):
    """GitHub에서 조회한 릴리스 정보"""

    id: str
    version: str
    published_at: datetime
    raw_notes: str


class RepositoryData(BaseModel):
    """GitHub에서 조회한 레포지토리와 시작 버전 이후 릴리스"""

    id: str
    name: str
    url: str
    stars: int
    forks: int
    releases: list[ReleaseData]
