"""릴리스 분석 파이프라인 테스트"""

from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import (
    EmptySummaryError,
    ImpactPredictionError,
    MissingProjectDescriptionError,
    NoReleasesError,
    OverallAnalysisError,
)
from app.domain.release.analysis import analyze_overall_impact, analyze_release
from app.domain.release.schemas import (
    ImpactPredictionOutput,
    OverallImpactOutput,
    ReleaseNote,
    ReleaseSummaryOutput,
)

PROJECT = "Django app that relies on the legacy session API"


@pytest.fixture
def mock_summarize():
    with patch(
        "app.domain.release.analysis.summarize_release_notes", new_callable=AsyncMock
    ) as mock:
        yield mock


@pytest.fixture
def mock_predict():
    with patch(
        "app.domain.release.analysis.predict_impact_level", new_callable=AsyncMock
    ) as mock:
        yield mock


@pytest.fixture
def mock_consolidate():
    with patch(
        "app.domain.release.analysis.consolidate_release_notes", new_callable=AsyncMock
    ) as mock:
        yield mock


class TestAnalyzeRelease:
    """analyze_release 함수 테스트"""

    @pytest.mark.asyncio
    async def test_two_step_analysis(self, mock_summarize, mock_predict):
        """요약 후 요약만으로 영향도 예측"""
        mock_summarize.return_value = ReleaseSummaryOutput(
            summary="  Removed legacy session API  ", impact_prediction="low"
        )
        mock_predict.return_value = ImpactPredictionOutput(
            impact_level="high", reason="The project uses the removed API"
        )

        result = await analyze_release("BREAKING: removed legacy sessions", PROJECT)

        assert result.summary == "Removed legacy session API"
        assert result.impact == "high"
        assert result.reason == "The project uses the removed API"
        mock_summarize.assert_awaited_once_with("BREAKING: removed legacy sessions", None, None)
        mock_predict.assert_awaited_once_with("Removed legacy session API", PROJECT, None, None)

    @pytest.mark.asyncio
    async def test_preliminary_impact_is_discarded(self, mock_summarize, mock_predict):
        """요약 단계의 예비 영향도는 결과에 반영되지 않음"""
        mock_summarize.return_value = ReleaseSummaryOutput(
            summary="Bug fixes", impact_prediction="high"
        )
        mock_predict.return_value = ImpactPredictionOutput(impact_level="low", reason="Fixes only")

        result = await analyze_release("fixes", PROJECT)

        assert result.impact == "low"

    @pytest.mark.asyncio
    async def test_passes_language_and_session(self, mock_summarize, mock_predict):
        mock_summarize.return_value = ReleaseSummaryOutput(summary="s", impact_prediction="low")
        mock_predict.return_value = ImpactPredictionOutput(impact_level="low", reason="r")

        await analyze_release("notes", PROJECT, language="Korean", session_id="1001")

        mock_summarize.assert_awaited_once_with("notes", "Korean", "1001")
        mock_predict.assert_awaited_once_with("s", PROJECT, "Korean", "1001")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("description", ["", "   ", None])
    async def test_missing_description(self, mock_summarize, mock_predict, description):
        """프로젝트 설명이 없으면 LLM 호출 없이 실패"""
        with pytest.raises(MissingProjectDescriptionError):
            await analyze_release("notes", description)

        mock_summarize.assert_not_awaited()
        mock_predict.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("summary", [None, "", "  "])
    async def test_empty_summary(self, mock_summarize, mock_predict, summary):
        """요약이 비면 EmptySummaryError, 평가 단계 호출 안 함"""
        mock_summarize.return_value = ReleaseSummaryOutput(summary=summary)

        with pytest.raises(EmptySummaryError):
            await analyze_release("notes", PROJECT)

        mock_predict.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "impact_level,reason",
        [(None, "reason"), ("high", None), ("medium", "  ")],
        ids=["no_level", "no_reason", "blank_reason"],
    )
    async def test_incomplete_prediction(self, mock_summarize, mock_predict, impact_level, reason):
        """영향도나 근거가 빠지면 ImpactPredictionError"""
        mock_summarize.return_value = ReleaseSummaryOutput(summary="s", impact_prediction="low")
        mock_predict.return_value = ImpactPredictionOutput(impact_level=impact_level, reason=reason)

        with pytest.raises(ImpactPredictionError):
            await analyze_release("notes", PROJECT)


class TestAnalyzeOverallImpact:
    """analyze_overall_impact 함수 테스트"""

    @pytest.fixture
    def releases(self) -> list[ReleaseNote]:
        """오래된 순서의 릴리스 노트"""
        return [
            ReleaseNote(version="v1.0.0", raw_notes="Fixed connection pool leak."),
            ReleaseNote(version="v1.1.0", raw_notes="Deprecated legacy sessions."),
            ReleaseNote(version="v2.0.0", raw_notes="BREAKING: removed legacy sessions."),
        ]

    @pytest.mark.asyncio
    async def test_single_consolidated_call(self, mock_consolidate, releases):
        """모든 릴리스를 한 번의 호출로 분석"""
        mock_consolidate.return_value = OverallImpactOutput(
            summary="Legacy sessions deprecated in v1.1.0 and removed in v2.0.0",
            impact_level="high",
            reason="The project relies on legacy sessions",
        )

        result = await analyze_overall_impact(releases, PROJECT)

        assert result.impact == "high"
        assert "removed in v2.0.0" in result.summary
        mock_consolidate.assert_awaited_once_with(releases, PROJECT, None, None)

    @pytest.mark.asyncio
    async def test_single_release_allowed(self, mock_consolidate, releases):
        """파이프라인 자체는 한 건도 허용"""
        mock_consolidate.return_value = OverallImpactOutput(
            summary="s", impact_level="low", reason="r"
        )

        result = await analyze_overall_impact(releases[:1], PROJECT)

        assert result.impact == "low"

    @pytest.mark.asyncio
    async def test_no_releases(self, mock_consolidate):
        with pytest.raises(NoReleasesError):
            await analyze_overall_impact([], PROJECT)

        mock_consolidate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_description(self, mock_consolidate, releases):
        with pytest.raises(MissingProjectDescriptionError):
            await analyze_overall_impact(releases, " ")

        mock_consolidate.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "output,missing",
        [
            (OverallImpactOutput(impact_level="high", reason="r"), "summary"),
            (OverallImpactOutput(summary="s", reason="r"), "impact_level"),
            (OverallImpactOutput(summary="s", impact_level="low", reason=" "), "reason"),
            (OverallImpactOutput(), "summary,impact_level,reason"),
        ],
        ids=["no_summary", "no_level", "blank_reason", "empty"],
    )
    async def test_incomplete_output(self, mock_consolidate, releases, output, missing):
        """필드가 하나라도 빠지면 OverallAnalysisError"""
        mock_consolidate.return_value = output

        with pytest.raises(OverallAnalysisError) as exc_info:
            await analyze_overall_impact(releases, PROJECT)

        assert exc_info.value.detail == f"missing={missing}"
