"""레포지토리 API 스키마."""

from pydantic import BaseModel, ConfigDict, Field


class AddRepositoryRequest(BaseModel):
    """레포지토리 추가 요청. URL 형식은 서비스에서 검증."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(min_length=1)
    start_version: str = Field(min_length=1, alias="startVersion")
    project_description: str | None = Field(default=None, alias="projectDescription")


class UpdateRepositoryRequest(BaseModel):
    """레포지토리별 프로젝트 설명 변경 요청. 빈 값이면 전역 설정 사용."""

    model_config = ConfigDict(populate_by_name=True)

    project_description: str | None = Field(default=None, alias="projectDescription")
