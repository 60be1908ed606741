from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정"""

    environment: str = "development"

    # LLM 프로바이더 선택: "openai", "vllm" 또는 "gemini"
    llm_provider: str = "openai"

    # OpenAI 설정 - 개발/테스트용
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_timeout: float = 120.0

    # vLLM/RunPod 설정 - 운영용
    vllm_api_url: str = ""
    vllm_api_key: str = ""
    vllm_model: str = ""
    vllm_timeout: float = 180.0

    # Gemini 설정
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_timeout: float = 120.0

    llm_temperature: float = 0.2

    # Git 호스팅 프로바이더 - 토큰이 없으면 비인증 요청
    github_token: str = ""
    gitlab_token: str = ""
    github_api_base: str = "https://api.github.com"
    gitlab_api_base: str = "https://gitlab.com/api/v4"
    provider_timeout: float = 30.0
    provider_page_size: int = 10

    # 끝까지 처리 가능한 프로바이더 목록 (쉼표 구분)
    enabled_providers: str = "github,gitlab"

    # 응답 캐시 설정: "memory" 또는 "redis"
    cache_backend: str = "memory"
    cache_ttl_seconds: int = 3600
    redis_url: str = "redis://localhost:6379/0"

    # diff 설명 시 프롬프트에 넣을 최대 길이
    diff_max_chars: int = 60000

    # 로깅 설정
    log_level: str = "INFO"

    # CORS 설정
    cors_allowed_origins: str = ""

    # 인바운드 요청 제한
    rate_limit: str = "30/minute"

    # Langfuse 설정
    langfuse_public_key: str = ""
    langfuse_secret_key: str = ""
    langfuse_base_url: str = "https://cloud.langfuse.com"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def enabled_provider_set(self) -> frozenset[str]:
        return frozenset(
            p.strip().lower() for p in self.enabled_providers.split(",") if p.strip()
        )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    def validate_for_production(self) -> list[str]:
        """프로덕션 환경에서 필수 설정 검증 후 누락된 항목 반환"""
        errors = []
        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY")
        if self.llm_provider == "vllm" and not self.vllm_api_url:
            errors.append("VLLM_API_URL")
        if self.llm_provider == "gemini" and not self.gemini_api_key:
            errors.append("GEMINI_API_KEY")
        if self.cache_backend == "redis" and not self.redis_url:
            errors.append("REDIS_URL")
        return errors

    @model_validator(mode="after")
    def validate_production_settings(self):
        """프로덕션 환경에서 필수 설정 검증"""
        if self.is_production:
            missing = self.validate_for_production()
            if missing:
                raise ValueError(f"프로덕션 환경에서 필수 설정 누락: {', '.join(missing)}")
        return self


settings = Settings()
