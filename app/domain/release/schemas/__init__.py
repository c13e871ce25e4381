from app.domain.release.schemas.analysis import (
    ImpactAnalysis,
    ImpactLevel,
    ImpactPredictionOutput,
    OverallImpactOutput,
    ReleaseNote,
    ReleaseSummaryOutput,
)
from app.domain.release.schemas.base import (
    ActionResult,
    ProjectSettingsView,
    RefreshSummary,
    ReleaseView,
    RepositoryView,
)
from app.domain.release.schemas.github import ReleaseData, RepositoryData

__all__ = [
    "ImpactLevel",
    "ImpactAnalysis",
    "ReleaseNote",
    "ReleaseSummaryOutput",
    "ImpactPredictionOutput",
    "OverallImpactOutput",
    "ReleaseData",
    "RepositoryData",
    "ProjectSettingsView",
    "ReleaseView",
    "RepositoryView",
    "RefreshSummary",
    "ActionResult",
]
