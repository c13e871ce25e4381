from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_URL = "INVALID_URL"
    PROJECT_DESCRIPTION_REQUIRED = "PROJECT_DESCRIPTION_REQUIRED"
    NO_RELEASES = "NO_RELEASES"
    INSUFFICIENT_RELEASES = "INSUFFICIENT_RELEASES"
    DUPLICATE_REPOSITORY = "DUPLICATE_REPOSITORY"

    NOT_FOUND = "NOT_FOUND"
    VERSION_NOT_FOUND = "VERSION_NOT_FOUND"

    GITHUB_API_ERROR = "GITHUB_API_ERROR"

    LLM_ERROR = "LLM_ERROR"
    GENERATE_ERROR = "GENERATE_ERROR"
    EMPTY_SUMMARY = "EMPTY_SUMMARY"
    IMPACT_PREDICTION_FAILED = "IMPACT_PREDICTION_FAILED"
    OVERALL_ANALYSIS_FAILED = "OVERALL_ANALYSIS_FAILED"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class ValidationError(CustomException):
    def __init__(
        self,
        detail: str | None = None,
        message: str = "입력값이 올바르지 않습니다",
        error_code: ErrorCode = ErrorCode.INVALID_INPUT,
    ):
        super().__init__(
            status_code=400,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class InvalidUrlError(ValidationError):
    def __init__(self, url: str):
        super().__init__(
            detail=url,
            message=f"유효하지 않은 GitHub URL: {url}",
            error_code=ErrorCode.INVALID_URL,
        )


class MissingProjectDescriptionError(ValidationError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            message="영향도 분석에는 프로젝트 설명이 필요합니다",
            error_code=ErrorCode.PROJECT_DESCRIPTION_REQUIRED,
        )


class NoReleasesError(ValidationError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            message="분석할 릴리스가 없습니다",
            error_code=ErrorCode.NO_RELEASES,
        )


class InsufficientReleasesError(ValidationError):
    def __init__(self, required: int, actual: int):
        super().__init__(
            detail=f"required={required} actual={actual}",
            message=f"전체 영향도 분석에는 최소 {required}개의 릴리스가 필요합니다 (현재 {actual}개)",
            error_code=ErrorCode.INSUFFICIENT_RELEASES,
        )


class DuplicateRepositoryError(ValidationError):
    def __init__(self, name: str):
        super().__init__(
            detail=name,
            message=f"이미 추적 중인 레포지토리입니다: {name}",
            error_code=ErrorCode.DUPLICATE_REPOSITORY,
        )


class NotFoundError(CustomException):
    def __init__(
        self,
        detail: str | None = None,
        message: str = "요청한 리소스를 찾을 수 없습니다",
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
    ):
        super().__init__(
            status_code=404,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class VersionNotFoundError(NotFoundError):
    def __init__(self, version: str, searched: int):
        super().__init__(
            detail=version,
            message=f'최근 {searched}개 릴리스에서 버전 태그 "{version}"를 찾을 수 없습니다',
            error_code=ErrorCode.VERSION_NOT_FOUND,
        )


class UpstreamFetchError(CustomException):
    def __init__(self, detail: str | None = None, message: str = "GitHub API 호출에 실패했습니다"):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_API_ERROR,
            message=message,
            detail=detail,
        )


class LLMError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.LLM_ERROR,
            message="LLM 호출에 실패했습니다",
            detail=detail,
        )


class GenerationError(CustomException):
    def __init__(
        self,
        detail: str | None = None,
        message: str = "LLM 응답을 해석할 수 없습니다",
        error_code: ErrorCode = ErrorCode.GENERATE_ERROR,
    ):
        super().__init__(
            status_code=502,
            error_code=error_code,
            message=message,
            detail=detail,
        )


class EmptySummaryError(GenerationError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            message="릴리스 노트 요약 생성에 실패했습니다",
            error_code=ErrorCode.EMPTY_SUMMARY,
        )


class ImpactPredictionError(GenerationError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            message="영향도 예측에 실패했습니다",
            error_code=ErrorCode.IMPACT_PREDICTION_FAILED,
        )


class OverallAnalysisError(GenerationError):
    def __init__(self, detail: str | None = None):
        super().__init__(
            detail=detail,
            message="전체 영향도 분석에 실패했습니다",
            error_code=ErrorCode.OVERALL_ANALYSIS_FAILED,
        )


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "success": False,
            "error_code": exc.error_code,
            "message": exc.message,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )
