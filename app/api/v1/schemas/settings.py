"""프로젝트 설정 API 스키마."""

from pydantic import BaseModel, ConfigDict, Field

from app.domain.release.constants import DEFAULT_LANGUAGE


class UpdateSettingsRequest(BaseModel):
    """프로젝트 설정 저장 요청."""

    model_config = ConfigDict(populate_by_name=True)

    project_description: str = Field(alias="projectDescription")
    language: str = Field(default=DEFAULT_LANGUAGE, min_length=1)
