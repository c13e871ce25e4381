"""릴리스 분석 관련 상수"""

# 전체 영향도 분석에 필요한 최소 릴리스 수
MIN_RELEASES_FOR_OVERALL_ANALYSIS = 2

NO_RELEASE_NOTES_PLACEHOLDER = "No release notes provided."

DEFAULT_LANGUAGE = "English"
