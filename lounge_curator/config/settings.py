"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables.

    All required settings must be provided via environment variables or .env file.
    Optional settings have default values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Google Cloud Platform
    # -------------------------------------------------------------------------
    GCP_PROJECT_ID: str

    # Firestore Emulator (local development)
    FIRESTORE_EMULATOR_HOST: str | None = None

    # -------------------------------------------------------------------------
    # Google AI (Gemini)
    # -------------------------------------------------------------------------
    GOOGLE_API_KEY: str
    GEMINI_MODEL: str = "gemini-2.5-flash"  # 관련성 스코어링
    GEMINI_CURATION_MODEL: str = "gemini-2.5-pro"  # 다이제스트 큐레이션/생성

    # -------------------------------------------------------------------------
    # Feed Ingestion
    # -------------------------------------------------------------------------
    FEED_TIMEOUT_SECONDS: float = 10.0
    """피드별 HTTP 타임아웃 (초)"""

    FEED_USER_AGENT: str = "LoungeCurator/1.0 (News Aggregator)"

    FEED_PREFERRED_WINDOW_HOURS: int = 24
    """우선 적용할 최신성 윈도우 (시간)"""

    FEED_FALLBACK_WINDOW_HOURS: int = 48
    """기사 수 부족 시 확장 윈도우 (시간)"""

    FEED_MIN_RECENT_ARTICLES: int = 10
    """우선 윈도우에서 필요한 최소 기사 수"""

    FEED_SNIPPET_LENGTH: int = 200
    """스니펫 목표 길이 (자)"""

    # -------------------------------------------------------------------------
    # Digest Curation
    # -------------------------------------------------------------------------
    CURATION_USE_FEEDS: bool = True
    """피드 기반 큐레이션 사용 여부 (False면 순수 생성)"""

    CURATION_FALLBACK_TO_GENERATION: bool = True
    """실패/기사 부족 시 순수 생성으로 폴백"""

    CURATION_MIN_ARTICLES: int = 10
    CURATION_MAX_ARTICLES: int = 50  # 오라클에 전달할 최대 기사 수

    CURATION_DEDICATED_FUNDING_SEARCH: bool = True
    FUNDING_SEARCH_TIMEFRAME: str = "48h"
    FUNDING_SECTION_TITLE: str = "SaaS Funding & M&A"

    # -------------------------------------------------------------------------
    # Relevancy Scoring
    # -------------------------------------------------------------------------
    RELEVANCY_BATCH_SIZE: int = 5
    """동시에 실행할 오라클 호출 수 (서브 배치 크기)"""

    RELEVANCY_BATCH_LIMIT: int = 100
    """1회 실행당 최대 평가 항목 수"""

    RELEVANCY_DEFAULT_THRESHOLD: int = 60
    RELEVANCY_LOOKBACK_DAYS: int = 7
    RELEVANCY_NEUTRAL_SCORE: int = 50

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------
    LOG_JSON: bool = True

    @property
    def is_local(self) -> bool:
        """Check if running in local development mode."""
        return self.FIRESTORE_EMULATOR_HOST is not None


# Singleton instance (lazy initialization)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()  # type: ignore[call-arg]
    return _settings
