from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from app.api.v1.schemas import AddRepositoryRequest, UpdateRepositoryRequest
from app.core.config import settings
from app.core.limiter import limiter
from app.db.session import get_db
from app.domain.release.schemas import ActionResult, RepositoryView
from app.domain.release.service import (
    add_repository,
    analyze_overall_repository_impact,
    analyze_release_impact,
    load_repositories,
    refresh_repositories,
    remove_repository,
    update_repository_description,
)

router = APIRouter(prefix="/repositories", tags=["repositories"])


def _respond(response: Response, result: ActionResult) -> ActionResult:
    """실패 결과는 원인 예외의 HTTP 상태 코드로 응답"""
    response.status_code = result.status_code
    return result


@router.get("", response_model=list[RepositoryView])
async def list_repositories(db: Session = Depends(get_db)) -> list[RepositoryView]:
    return load_repositories(db)


@router.post("", response_model=ActionResult)
async def create_repository(
    body: AddRepositoryRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = await add_repository(db, body.url, body.start_version, body.project_description)
    if result.success:
        result.status_code = 201
    return _respond(response, result)


@router.post("/refresh", response_model=ActionResult)
async def refresh(response: Response, db: Session = Depends(get_db)) -> ActionResult:
    result = await refresh_repositories(db)
    return _respond(response, result)


@router.patch("/{repository_id}", response_model=ActionResult)
async def patch_repository(
    repository_id: str,
    body: UpdateRepositoryRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = update_repository_description(db, repository_id, body.project_description)
    return _respond(response, result)


@router.delete("/{repository_id}", response_model=ActionResult)
async def delete_repository(
    repository_id: str,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = remove_repository(db, repository_id)
    return _respond(response, result)


@router.post("/{repository_id}/analyze", response_model=ActionResult)
@limiter.limit(settings.analysis_rate_limit)
async def analyze_repository(
    request: Request,
    repository_id: str,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = await analyze_overall_repository_impact(db, repository_id)
    return _respond(response, result)


@router.post("/{repository_id}/releases/{release_id}/analyze", response_model=ActionResult)
@limiter.limit(settings.analysis_rate_limit)
async def analyze_release(
    request: Request,
    repository_id: str,
    release_id: str,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = await analyze_release_impact(db, repository_id, release_id)
    return _respond(response, result)
