import os
from typing import TypeVar

from langchain_core.exceptions import OutputParserException
from langchain_core.messages import HumanMessage, SystemMessage
from langfuse.langchain import CallbackHandler
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.exceptions import GenerationError, LLMError
from app.core.logging import get_logger
from app.domain.release.prompts import (
    IMPACT_PREDICTION_HUMAN,
    IMPACT_PREDICTION_SYSTEM,
    OVERALL_IMPACT_HUMAN,
    OVERALL_IMPACT_SYSTEM,
    RELEASE_SUMMARY_HUMAN,
    RELEASE_SUMMARY_SYSTEM,
)
from app.domain.release.schemas import (
    ImpactPredictionOutput,
    OverallImpactOutput,
    ReleaseNote,
    ReleaseSummaryOutput,
)
from app.infra.llm.factory import get_llm_client

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

if settings.langfuse_public_key:
    os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
if settings.langfuse_secret_key:
    os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
if settings.langfuse_base_url:
    os.environ["LANGFUSE_HOST"] = settings.langfuse_base_url


def get_langfuse_handler() -> CallbackHandler | None:
    """Langfuse 콜백 핸들러 반환"""
    if not settings.langfuse_public_key or not settings.langfuse_secret_key:
        return None

    return CallbackHandler()


def format_language_instruction(language: str | None, fields: str) -> str:
    """출력 언어 지시문 생성

    영향도 등급(high/medium/low)은 번역하지 않도록 명시한다.
    """
    if not language:
        return ""
    return (
        f"- Write the {fields} in {language}. "
        "Keep the impact level value itself in English as exactly high, medium or low."
    )


def format_release_notes(releases: list[ReleaseNote]) -> str:
    """릴리스 노트 목록을 프롬프트용 텍스트로 포맷 (오래된 순서 유지)"""
    lines = []
    total = len(releases)

    for idx, release in enumerate(releases, start=1):
        lines.append("---")
        lines.append(f"### Release {idx}/{total}: {release.version}")
        lines.append(release.raw_notes)
    lines.append("---")

    return "\n".join(lines)


async def _invoke_structured(
    schema: type[T],
    system_content: str,
    human_content: str,
    tags: list[str],
    session_id: str | None = None,
) -> T:
    """구조화 출력 LLM 호출

    Raises:
        GenerationError: 응답을 스키마로 해석할 수 없는 경우
        LLMError: LLM 호출 자체가 실패한 경우
    """
    langfuse_handler = get_langfuse_handler()
    config = {
        "callbacks": [langfuse_handler] if langfuse_handler else [],
        "metadata": {
            "langfuse_session_id": session_id,
            "langfuse_tags": ["release-radar", *tags],
        },
    }

    messages = [
        SystemMessage(content=system_content),
        HumanMessage(content=human_content),
    ]

    try:
        llm = get_llm_client().with_structured_output(schema)
        result = await llm.ainvoke(messages, config=config)
    except (OutputParserException, PydanticValidationError) as e:
        logger.warning("LLM 응답 파싱 실패 schema=%s error=%s", schema.__name__, e)
        raise GenerationError(detail=f"{schema.__name__}: {e}") from e
    except Exception as e:
        logger.error("LLM 호출 실패 schema=%s error=%s", schema.__name__, type(e).__name__)
        raise LLMError(detail=f"{type(e).__name__}: {e}") from e

    if result is None:
        logger.warning("LLM 구조화 출력 없음 schema=%s", schema.__name__)
        return schema()
    return result


async def summarize_release_notes(
    release_notes: str,
    language: str | None = None,
    session_id: str | None = None,
) -> ReleaseSummaryOutput:
    """릴리스 노트 요약 및 예비 영향도 추정"""
    logger.debug("릴리스 노트 요약 요청 length=%d", len(release_notes))

    result = await _invoke_structured(
        ReleaseSummaryOutput,
        RELEASE_SUMMARY_SYSTEM.format(
            language_instruction=format_language_instruction(language, "summary"),
        ),
        RELEASE_SUMMARY_HUMAN.format(release_notes=release_notes),
        tags=["summarize"],
        session_id=session_id,
    )

    logger.debug("릴리스 노트 요약 완료 preliminary=%s", result.impact_prediction)
    return result


async def predict_impact_level(
    release_notes_summary: str,
    project_description: str,
    language: str | None = None,
    session_id: str | None = None,
) -> ImpactPredictionOutput:
    """요약과 프로젝트 설명으로 영향도 예측"""
    logger.debug("영향도 예측 요청 summary_length=%d", len(release_notes_summary))

    result = await _invoke_structured(
        ImpactPredictionOutput,
        IMPACT_PREDICTION_SYSTEM.format(
            language_instruction=format_language_instruction(language, "reason"),
        ),
        IMPACT_PREDICTION_HUMAN.format(
            release_notes_summary=release_notes_summary,
            project_description=project_description,
        ),
        tags=["assess"],
        session_id=session_id,
    )

    logger.debug("영향도 예측 완료 impact=%s", result.impact_level)
    return result


async def consolidate_release_notes(
    releases: list[ReleaseNote],
    project_description: str,
    language: str | None = None,
    session_id: str | None = None,
) -> OverallImpactOutput:
    """여러 릴리스의 원본 노트를 한 번에 보고 통합 영향도 분석

    Args:
        releases: 오래된 순서부터 정렬된 릴리스 노트
        project_description: 사용자 프로젝트 설명
        language: 요약과 근거의 출력 언어
        session_id: Langfuse 세션 id

    Returns:
        통합 요약, 영향도, 근거
    """
    logger.debug("통합 영향도 분석 요청 releases=%d", len(releases))

    result = await _invoke_structured(
        OverallImpactOutput,
        OVERALL_IMPACT_SYSTEM.format(
            language_instruction=format_language_instruction(language, "summary and reason"),
        ),
        OVERALL_IMPACT_HUMAN.format(
            project_description=project_description,
            release_count=len(releases),
            release_notes=format_release_notes(releases),
        ),
        tags=["consolidate"],
        session_id=session_id,
    )

    logger.debug("통합 영향도 분석 완료 impact=%s", result.impact_level)
    return result
