from typing import Literal

from pydantic import BaseModel, Field

ImpactLevel = Literal["high", "medium", "low"]


class ReleaseNote(BaseModel):
    """전체 분석 입력용 릴리스 노트"""

    version: str
    raw_notes: str


class ReleaseSummaryOutput(BaseModel):
    """릴리스 노트 요약 LLM 출력"""

    summary: str | None = Field(
        default=None,
        description="Condensed summary of the release notes covering features, breaking changes and fixes.",
    )
    impact_prediction: ImpactLevel | None = Field(
        default=None,
        description="Preliminary impact level guess: high, medium or low.",
    )


class ImpactPredictionOutput(BaseModel):
    """영향도 예측 LLM 출력"""

    impact_level: ImpactLevel | None = Field(
        default=None,
        description="Predicted impact level of the release on the project: high, medium or low.",
    )
    reason: str | None = Field(
        default=None,
        description="Reasoning behind the predicted impact level.",
    )


class OverallImpactOutput(BaseModel):
    """다중 릴리스 통합 분석 LLM 출력"""

    summary: str | None = Field(
        default=None,
        description="Consolidated summary of the key changes across all releases.",
    )
    impact_level: ImpactLevel | None = Field(
        default=None,
        description="Overall impact level of upgrading across all releases: high, medium or low.",
    )
    reason: str | None = Field(
        default=None,
        description="Reasoning behind the overall impact level.",
    )


class ImpactAnalysis(BaseModel):
    """영향도 분석 결과"""

    summary: str
    impact: ImpactLevel
    reason: str
