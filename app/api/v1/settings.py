from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.v1.schemas import UpdateSettingsRequest
from app.db.session import get_db
from app.domain.release.schemas import ActionResult, ProjectSettingsView
from app.domain.release.service import load_project_settings, update_project_settings

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=ProjectSettingsView | None)
async def get_settings(db: Session = Depends(get_db)) -> ProjectSettingsView | None:
    return load_project_settings(db)


@router.put("", response_model=ActionResult)
async def put_settings(
    body: UpdateSettingsRequest,
    response: Response,
    db: Session = Depends(get_db),
) -> ActionResult:
    result = update_project_settings(db, body.project_description, body.language)
    response.status_code = result.status_code
    return result
