from app.domain.release.prompts.assess import (
    IMPACT_PREDICTION_HUMAN,
    IMPACT_PREDICTION_SYSTEM,
    IMPACT_RUBRIC,
)
from app.domain.release.prompts.consolidate import (
    OVERALL_IMPACT_HUMAN,
    OVERALL_IMPACT_SYSTEM,
)
from app.domain.release.prompts.summarize import (
    RELEASE_SUMMARY_HUMAN,
    RELEASE_SUMMARY_SYSTEM,
)

__all__ = [
    "IMPACT_RUBRIC",
    "RELEASE_SUMMARY_SYSTEM",
    "RELEASE_SUMMARY_HUMAN",
    "IMPACT_PREDICTION_SYSTEM",
    "IMPACT_PREDICTION_HUMAN",
    "OVERALL_IMPACT_SYSTEM",
    "OVERALL_IMPACT_HUMAN",
]
