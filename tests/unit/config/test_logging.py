"""Tests for logging configuration."""

import structlog

from lounge_curator.config.logging import bind_run_context, configure_logging, get_logger


class TestLoggingConfiguration:
    """Test logging configuration."""

    def test_configure_logging_json_output(self) -> None:
        """JSON 렌더러 설정."""
        configure_logging(json_logs=True)

        config = structlog.get_config()
        processor_names = [p.__class__.__name__ for p in config["processors"]]

        assert structlog.is_configured()
        assert "JSONRenderer" in processor_names

    def test_configure_logging_console_output(self) -> None:
        """로컬 개발용 콘솔 렌더러."""
        configure_logging(json_logs=False)

        config = structlog.get_config()
        processor_names = [p.__class__.__name__ for p in config["processors"]]

        assert "ConsoleRenderer" in processor_names

    def test_configure_logging_adds_timestamp(self) -> None:
        """Logs should include timestamp."""
        configure_logging(json_logs=True)

        config = structlog.get_config()
        processor_names = [p.__class__.__name__ for p in config["processors"]]

        assert "TimeStamper" in processor_names

    def test_get_logger_with_context(self) -> None:
        """초기 컨텍스트 바인딩."""
        configure_logging(json_logs=True)

        logger = get_logger("test", pipeline="relevancy")

        assert logger is not None


class TestBindRunContext:
    """Test run context binding."""

    def test_returns_run_id(self) -> None:
        """run_ 접두사 ID 반환."""
        run_id = bind_run_context("relevancy")

        assert run_id.startswith("run_")

    def test_binds_contextvars(self) -> None:
        """run_id/pipeline/추가 값 바인딩."""
        run_id = bind_run_context("digest", lounge_id="lng_saas")

        context = structlog.contextvars.get_contextvars()
        assert context["run_id"] == run_id
        assert context["pipeline"] == "digest"
        assert context["lounge_id"] == "lng_saas"

    def test_clears_previous_context(self) -> None:
        """이전 실행 컨텍스트는 제거."""
        bind_run_context("digest", lounge_id="lng_old")
        bind_run_context("relevancy")

        context = structlog.contextvars.get_contextvars()
        assert "lounge_id" not in context
        assert context["pipeline"] == "relevancy"

    def test_unique_run_ids(self) -> None:
        """매 실행마다 다른 ID."""
        assert bind_run_context("relevancy") != bind_run_context("relevancy")
