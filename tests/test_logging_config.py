import logging

import pytest

from cvmatch.utils.logging_config import (
    PerformanceMonitor,
    configure_for_environment,
    get_logger,
    log_function_call,
    setup_logging,
)


class TestLogging:
    """Test cases for logging configuration helpers"""

    def test_get_logger_namespacing(self):
        assert get_logger("ranking").name == "cvmatch.ranking"
        assert get_logger("cvmatch.services.matching").name == "cvmatch.services.matching"

    def test_setup_logging_file_handlers(self, tmp_path):
        setup_logging(level="DEBUG", enable_console=False, enable_file=True, log_dir=str(tmp_path))

        handlers = logging.getLogger("cvmatch").handlers
        assert len(handlers) == 2
        assert any(f.name.startswith("cvmatch_errors_") for f in tmp_path.iterdir())

    def test_testing_environment_has_no_files(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_for_environment("testing")

        assert logging.getLogger("cvmatch").level == logging.WARNING
        assert not (tmp_path / "logs").exists()

    def test_production_uses_configured_level(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        configure_for_environment("production", "error")

        assert logging.getLogger("cvmatch").level == logging.ERROR
        assert (tmp_path / "logs").is_dir()

    def test_log_function_call_reraises(self, caplog):
        @log_function_call
        def explode():
            raise ValueError("bad")

        with caplog.at_level(logging.ERROR, logger="cvmatch"):
            with pytest.raises(ValueError):
                explode()
        assert "explode after" in caplog.text

    def test_performance_monitor(self, caplog):
        logger = get_logger("perf-test")
        with caplog.at_level(logging.INFO, logger="cvmatch"):
            with PerformanceMonitor("Scoring", logger=logger) as monitor:
                pass

        assert monitor.elapsed_ms is not None
        assert "Scoring completed" in caplog.text
