import re

import httpx
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import (
    InvalidUrlError,
    NoReleasesError,
    NotFoundError,
    UpstreamFetchError,
    VersionNotFoundError,
)
from app.core.logging import get_logger
from app.domain.release.constants import NO_RELEASE_NOTES_PLACEHOLDER
from app.domain.release.schemas import ReleaseData, RepositoryData

logger = get_logger(__name__)

GITHUB_API_BASE = "https://api.github.com"

# owner/repo 뒤의 경로(/tree/main, /releases 등)와 쿼리는 무시
GITHUB_URL_PATTERN = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/([a-zA-Z0-9_.-]+)/([a-zA-Z0-9_.-]+)(?:[/?#].*)?$"
)

_client = httpx.AsyncClient(timeout=settings.github_timeout)


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 토큰, 없으면 설정값 사용

    Returns:
        HTTP 헤더 딕셔너리
    """
    headers = {"Accept": "application/vnd.github.v3+json"}
    token = token or settings.github_token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def parse_repo_url(repo_url: str) -> tuple[str, str]:
    """GitHub URL에서 owner와 repo 추출

    Args:
        repo_url: GitHub 레포지토리 URL

    Returns:
        owner, repo 튜플

    Raises:
        InvalidUrlError: github.com/<owner>/<repo> 형식이 아닌 경우
    """
    match = GITHUB_URL_PATTERN.match(repo_url.strip())
    if not match:
        raise InvalidUrlError(repo_url)
    owner = match.group(1)
    repo = match.group(2).removesuffix(".git")
    if not repo:
        raise InvalidUrlError(repo_url)
    return owner, repo


def split_repo_name(repo_name: str) -> tuple[str, str]:
    """owner/repo 형식 이름 분리"""
    parts = repo_name.split("/")
    if len(parts) != 2 or not all(parts):
        raise InvalidUrlError(repo_name)
    return parts[0], parts[1]


def _to_release(data: dict) -> ReleaseData:
    """GitHub 릴리스 응답을 ReleaseData로 변환"""
    return ReleaseData(
        id=str(data["id"]),
        version=data["tag_name"],
        published_at=data["published_at"],
        raw_notes=data.get("body") or NO_RELEASE_NOTES_PLACEHOLDER,
    )


async def _get_json(url: str, params: dict | None = None):
    """GitHub API GET 요청

    Raises:
        NotFoundError: 404 응답
        UpstreamFetchError: 그 외 비정상 응답 또는 네트워크 오류
    """
    try:
        response = await _client.get(url, headers=_get_headers(), params=params)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        if status_code == 404:
            raise NotFoundError(detail=url, message=f"GitHub에서 찾을 수 없습니다: {url}") from e
        raise UpstreamFetchError(detail=f"HTTP {status_code} {url}") from e
    except httpx.RequestError as e:
        raise UpstreamFetchError(detail=f"{type(e).__name__} {url}") from e
    except ValueError as e:
        raise UpstreamFetchError(detail=f"JSON 파싱 실패 {url}") from e


async def get_releases(owner: str, repo: str) -> list[ReleaseData]:
    """최근 릴리스 한 페이지 조회 (최신순)

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름

    Returns:
        릴리스 목록, 최신 릴리스가 먼저
    """
    url = f"{GITHUB_API_BASE}/repos/{owner}/{repo}/releases"
    data = await _get_json(url, params={"per_page": settings.github_releases_per_page})

    if not isinstance(data, list):
        raise UpstreamFetchError(detail=f"릴리스 응답 형식 오류 repo={owner}/{repo}")

    # 초안 릴리스는 push 권한 토큰에만 보이며 published_at이 없음
    published = [
        item
        for item in data
        if not (
            isinstance(item, dict)
            and (item.get("draft") or item.get("published_at") is None)
        )
    ]
    if len(published) != len(data):
        logger.debug(
            "미발행 릴리스 제외 repo=%s/%s count=%d", owner, repo, len(data) - len(published)
        )

    try:
        releases = [_to_release(item) for item in published]
    except (KeyError, TypeError, PydanticValidationError) as e:
        raise UpstreamFetchError(detail=f"릴리스 데이터 오류 repo={owner}/{repo} error={e}") from e

    logger.info("릴리스 조회 완료 repo=%s/%s count=%d", owner, repo, len(releases))
    return releases


async def get_repo_info(owner: str, repo: str) -> dict:
    """레포지토리 메타데이터 조회

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름

    Returns:
        id, name, url, stars, forks 딕셔너리
    """
    url = f"{GITHUB_API_BASE}/repos/{owner}/{repo}"
    data = await _get_json(url)

    try:
        info = {
            "id": str(data["id"]),
            "name": data["full_name"],
            "url": data["html_url"],
            "stars": data.get("stargazers_count", 0),
            "forks": data.get("forks_count", 0),
        }
    except (KeyError, TypeError) as e:
        raise UpstreamFetchError(detail=f"레포 정보 형식 오류 repo={owner}/{repo}") from e

    logger.info("레포 정보 조회 완료 repo=%s/%s", owner, repo)
    return info


async def fetch_repository_and_releases_from(repo_url: str, start_version: str) -> RepositoryData:
    """레포지토리 정보와 시작 버전부터 최신까지의 릴리스 조회

    Args:
        repo_url: GitHub 레포지토리 URL
        start_version: 추적을 시작할 버전 태그

    Returns:
        최신 릴리스부터 시작 버전까지 포함한 레포지토리 데이터

    Raises:
        InvalidUrlError: 유효하지 않은 GitHub URL
        NoReleasesError: 릴리스가 하나도 없는 경우
        VersionNotFoundError: 최근 페이지에서 시작 버전을 찾지 못한 경우
    """
    owner, repo = parse_repo_url(repo_url)

    info = await get_repo_info(owner, repo)
    releases = await get_releases(owner, repo)

    if not releases:
        raise NoReleasesError(detail=f"{owner}/{repo}")

    start_index = next(
        (idx for idx, release in enumerate(releases) if release.version == start_version),
        None,
    )
    if start_index is None:
        raise VersionNotFoundError(start_version, settings.github_releases_per_page)

    tracked = releases[: start_index + 1]
    logger.info(
        "레포 추적 릴리스 확정 repo=%s start=%s count=%d",
        info["name"],
        start_version,
        len(tracked),
    )
    return RepositoryData(**info, releases=tracked)


async def fetch_releases_newer_than(repo_name: str, latest_known_version: str) -> list[ReleaseData]:
    """알려진 최신 버전보다 새로운 릴리스만 조회

    Args:
        repo_name: owner/repo 형식 이름
        latest_known_version: 저장된 최신 버전 태그

    Returns:
        새 릴리스 목록, 최신순. 알려진 버전이 최신이거나 페이지에 없으면 빈 목록
    """
    owner, repo = split_repo_name(repo_name)
    releases = await get_releases(owner, repo)

    known_index = next(
        (idx for idx, release in enumerate(releases) if release.version == latest_known_version),
        -1,
    )
    if known_index <= 0:
        if known_index == -1:
            logger.info(
                "알려진 버전이 최근 페이지에 없음 repo=%s version=%s",
                repo_name,
                latest_known_version,
            )
        return []

    return releases[:known_index]
