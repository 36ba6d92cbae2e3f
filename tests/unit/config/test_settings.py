"""Tests for application settings."""

import pytest

from lounge_curator.config.settings import Settings


class TestSettings:
    """Test Settings loading."""

    def test_required_settings_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """필수 값은 환경 변수에서 로드."""
        monkeypatch.setenv("GCP_PROJECT_ID", "my-project")
        monkeypatch.setenv("GOOGLE_API_KEY", "my-key")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.GCP_PROJECT_ID == "my-project"
        assert settings.GOOGLE_API_KEY == "my-key"

    def test_defaults(self) -> None:
        """기본값 확인."""
        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.RELEVANCY_BATCH_SIZE == 5
        assert settings.RELEVANCY_DEFAULT_THRESHOLD == 60
        assert settings.RELEVANCY_LOOKBACK_DAYS == 7
        assert settings.RELEVANCY_NEUTRAL_SCORE == 50
        assert settings.FEED_PREFERRED_WINDOW_HOURS == 24
        assert settings.FEED_FALLBACK_WINDOW_HOURS == 48
        assert settings.CURATION_MIN_ARTICLES == 10
        assert settings.CURATION_MAX_ARTICLES == 50
        assert settings.CURATION_USE_FEEDS is True
        assert settings.CURATION_FALLBACK_TO_GENERATION is True

    def test_missing_required_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """필수 값이 없으면 ValidationError."""
        from pydantic import ValidationError

        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_is_local_with_emulator(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """에뮬레이터 설정 시 로컬 모드."""
        monkeypatch.setenv("FIRESTORE_EMULATOR_HOST", "localhost:8086")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.is_local is True

    def test_is_not_local_without_emulator(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """에뮬레이터 미설정 시 운영 모드."""
        monkeypatch.delenv("FIRESTORE_EMULATOR_HOST", raising=False)

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.is_local is False

    def test_boolean_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """불리언 설정 오버라이드."""
        monkeypatch.setenv("CURATION_USE_FEEDS", "false")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.CURATION_USE_FEEDS is False
