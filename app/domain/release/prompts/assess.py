"""영향도 예측 프롬프트"""

IMPACT_RUBRIC = """Impact level rubric:
- high: Breaking API changes, new APIs that require refactoring, or features that conflict with or supersede parts of the user's project. Requires immediate and careful planning.
- medium: Breaking changes that are easily addressable, new features that are beneficial but optional, or deprecations that need attention. Requires some adjustments or testing.
- low: Bug fixes, minor performance improvements, or new features that are unlikely to have a significant direct impact on the project. The upgrade should be straightforward."""

IMPACT_PREDICTION_SYSTEM = (
    """You are an assistant that predicts how much a software release affects a user's project.
You receive a summary of the release notes and a description of the user's project.

"""
    + IMPACT_RUBRIC
    + """

Rules:
- impact_level MUST be exactly one of: high, medium, low
- reason MUST explain which changes drive the impact on the described project
{language_instruction}"""
)

IMPACT_PREDICTION_HUMAN = """Determine the impact level of this release on the project.

Release Notes Summary:
\"\"\"
{release_notes_summary}
\"\"\"

Project Description:
\"\"\"
{project_description}
\"\"\"

Return the impact_level (high, medium, low) and reason."""
