"""릴리스 영향도 분석 파이프라인

- 단일 릴리스: 요약 → 영향도 평가 2단계
- 다중 릴리스: 원본 노트 전체를 한 번에 통합 분석

저장은 호출자 책임이며 이 모듈은 입력에 대한 순수 함수만 제공한다.
"""

from app.core.exceptions import (
    EmptySummaryError,
    ImpactPredictionError,
    MissingProjectDescriptionError,
    NoReleasesError,
    OverallAnalysisError,
)
from app.core.logging import get_logger
from app.domain.release.schemas import ImpactAnalysis, ReleaseNote
from app.infra.llm.client import (
    consolidate_release_notes,
    predict_impact_level,
    summarize_release_notes,
)

logger = get_logger(__name__)


def _require_description(project_description: str | None) -> str:
    if not project_description or not project_description.strip():
        raise MissingProjectDescriptionError()
    return project_description.strip()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


async def analyze_release(
    raw_notes: str,
    project_description: str,
    language: str | None = None,
    session_id: str | None = None,
) -> ImpactAnalysis:
    """단일 릴리스 영향도 분석

    Args:
        raw_notes: 릴리스 원본 노트
        project_description: 사용자 프로젝트 설명
        language: 요약과 근거의 출력 언어

    Returns:
        요약, 영향도, 근거

    Raises:
        MissingProjectDescriptionError: 프로젝트 설명이 비어 있는 경우
        EmptySummaryError: 요약 단계에서 요약이 생성되지 않은 경우
        ImpactPredictionError: 평가 단계에서 영향도나 근거가 빠진 경우
    """
    description = _require_description(project_description)

    summary_result = await summarize_release_notes(raw_notes, language, session_id)
    if _is_blank(summary_result.summary):
        raise EmptySummaryError()

    # 요약 단계의 예비 영향도는 버리고 요약만 다음 단계로 넘긴다
    summary = summary_result.summary.strip()

    impact_result = await predict_impact_level(summary, description, language, session_id)
    if impact_result.impact_level is None or _is_blank(impact_result.reason):
        raise ImpactPredictionError(
            detail=f"impact_level={impact_result.impact_level} reason_present={not _is_blank(impact_result.reason)}"
        )

    logger.info(
        "릴리스 분석 완료 preliminary=%s impact=%s",
        summary_result.impact_prediction,
        impact_result.impact_level,
    )
    return ImpactAnalysis(
        summary=summary,
        impact=impact_result.impact_level,
        reason=impact_result.reason.strip(),
    )


async def analyze_overall_impact(
    releases: list[ReleaseNote],
    project_description: str,
    language: str | None = None,
    session_id: str | None = None,
) -> ImpactAnalysis:
    """다중 릴리스 업그레이드 통합 영향도 분석

    Args:
        releases: 오래된 순서부터 정렬된 릴리스 원본 노트
        project_description: 사용자 프로젝트 설명
        language: 요약과 근거의 출력 언어

    Raises:
        MissingProjectDescriptionError: 프로젝트 설명이 비어 있는 경우
        NoReleasesError: 릴리스 목록이 비어 있는 경우
        OverallAnalysisError: 요약, 영향도, 근거 중 하나라도 빠진 경우
    """
    description = _require_description(project_description)
    if not releases:
        raise NoReleasesError()

    result = await consolidate_release_notes(releases, description, language, session_id)

    missing = [
        name
        for name, value in (
            ("summary", result.summary),
            ("impact_level", result.impact_level),
            ("reason", result.reason),
        )
        if value is None or (isinstance(value, str) and not value.strip())
    ]
    if missing:
        raise OverallAnalysisError(detail=f"missing={','.join(missing)}")

    logger.info(
        "통합 분석 완료 releases=%d from=%s to=%s impact=%s",
        len(releases),
        releases[0].version,
        releases[-1].version,
        result.impact_level,
    )
    return ImpactAnalysis(
        summary=result.summary.strip(),
        impact=result.impact_level,
        reason=result.reason.strip(),
    )
