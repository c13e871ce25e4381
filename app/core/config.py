from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "openai", "vllm" 또는 "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM 설정 - 자체 호스팅 모델
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 120.0

    llm_temperature: float = 0.2

    # GitHub
    github_token: str = ""
    github_timeout: float = 30.0
    github_releases_per_page: int = 30

    # 새로고침 동시 요청 제한
    refresh_max_concurrent_requests: int = 5

    # 데이터베이스
    database_url: str = "sqlite:///./release_radar.db"
    database_echo: bool = False

    # 분석 API 요청 제한
    analysis_rate_limit: str = "20/minute"

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        provider = self.llm_provider.lower()
        if provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        if provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        if self.database_url.startswith("sqlite:///./"):
            errors.append("DATABASE_URL")
        return errors

    @model_validator(mode="after")
    def validate_llm_provider(self):
        """LLM 프로바이더 값 검증"""
        if self.llm_provider.lower() not in ("openai", "vllm", "gemini"):
            raise ValueError(f"지원하지 않는 LLM 프로바이더: {self.llm_provider}")
        return self


settings = Settings()
