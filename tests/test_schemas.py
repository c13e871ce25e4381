"""스키마 모델 테스트"""

import pytest
from pydantic import ValidationError

from app.api.v1.schemas import AddRepositoryRequest, UpdateRepositoryRequest, UpdateSettingsRequest
from app.core.exceptions import ErrorCode, VersionNotFoundError
from app.domain.release.schemas import ActionResult, ImpactAnalysis, ImpactPredictionOutput


class TestAddRepositoryRequest:
    """AddRepositoryRequest 검증 테스트"""

    def test_aliases(self):
        request = AddRepositoryRequest.model_validate(
            {
                "url": " https://github.com/encode/httpx ",
                "startVersion": "v1.0.0",
                "projectDescription": "CLI",
            }
        )

        assert request.url == "https://github.com/encode/httpx"
        assert request.start_version == "v1.0.0"
        assert request.project_description == "CLI"

    def test_url_format_not_checked(self):
        """URL 형식 검증은 서비스에서 InvalidUrlError로 처리"""
        request = AddRepositoryRequest.model_validate(
            {"url": "https://gitlab.com/a/b", "startVersion": "v1"}
        )
        assert request.url == "https://gitlab.com/a/b"

    def test_field_names_accepted(self):
        request = AddRepositoryRequest(url="github.com/encode/httpx", start_version="v1.0.0")
        assert request.project_description is None

    @pytest.mark.parametrize(
        "payload",
        [
            {"url": "", "startVersion": "v1"},
            {"url": "https://github.com/a/b", "startVersion": ""},
            {"url": "https://github.com/a/b"},
        ],
        ids=["empty_url", "empty_version", "missing_version"],
    )
    def test_invalid(self, payload):
        with pytest.raises(ValidationError):
            AddRepositoryRequest.model_validate(payload)


class TestOtherRequests:
    def test_update_repository_defaults_to_none(self):
        assert UpdateRepositoryRequest().project_description is None

    def test_update_settings_default_language(self):
        request = UpdateSettingsRequest.model_validate({"projectDescription": "desc"})
        assert request.language == "English"


class TestAnalysisSchemas:
    """분석 스키마 테스트"""

    def test_impact_level_must_be_known(self):
        with pytest.raises(ValidationError):
            ImpactAnalysis(summary="s", impact="critical", reason="r")

    def test_llm_output_fields_optional(self):
        output = ImpactPredictionOutput()
        assert output.impact_level is None
        assert output.reason is None


class TestActionResult:
    """ActionResult 테스트"""

    def test_failure_from_exception(self):
        result = ActionResult.failure(VersionNotFoundError("v9", 30))

        assert result.success is False
        assert result.error_code == ErrorCode.VERSION_NOT_FOUND
        assert result.status_code == 404
        assert "v9" in result.message

    def test_status_code_not_serialized(self):
        result = ActionResult(success=True, message="ok", status_code=201)
        assert "status_code" not in result.model_dump()
