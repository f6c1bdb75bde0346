"""Tests for project infrastructure.

These tests verify that the package imports, its dependencies are available,
and the exception and logging systems behave as expected.
"""

import importlib
import json
import logging

import pytest

import pamsched
from pamsched import exceptions, logging_config


class TestPackageInstallation:
    """Verify package can be installed and imported."""

    def test_version_accessible(self):
        """Test that pamsched.__version__ is accessible."""
        assert isinstance(pamsched.__version__, str)
        assert pamsched.__version__ == "0.1.0"

    def test_submodules_importable(self):
        """Test that all submodules are importable."""
        submodules = [
            "pamsched.core",
            "pamsched.utilities",
            "pamsched.contracts",
            "pamsched.observers",
            "pamsched.engine",
            "pamsched.exceptions",
            "pamsched.logging_config",
        ]
        for module_name in submodules:
            assert importlib.import_module(module_name) is not None

    def test_public_api_exported(self):
        """Every name in __all__ resolves."""
        for name in pamsched.__all__:
            assert hasattr(pamsched, name), name


class TestDependencyVerification:
    """Ensure the runtime dependencies are installed."""

    def test_jax_imports(self):
        """Test that JAX imports and basic operations work."""
        import jax.numpy as jnp

        assert jnp.sum(jnp.array([1, 2, 3])) == 6

    def test_pydantic_is_v2(self):
        """ContractTerms relies on the Pydantic v2 validator API."""
        import pydantic

        assert int(pydantic.VERSION.split(".")[0]) >= 2

    def test_pandas_imports(self):
        import pandas as pd

        assert pd.DataFrame is not None

    def test_dateutil_imports(self):
        from dateutil.relativedelta import relativedelta

        assert relativedelta(months=1).months == 1


class TestExceptionSystem:
    """Test exception hierarchy and error handling."""

    EXCEPTION_CLASSES = [
        exceptions.InvalidTermsError,
        exceptions.InvalidPeriodError,
        exceptions.UnsupportedConventionError,
        exceptions.DateTimeError,
        exceptions.ObserverError,
        exceptions.ConfigurationError,
        exceptions.EngineError,
    ]

    def test_all_exceptions_can_be_raised(self):
        """Test that all custom exceptions can be raised and caught."""
        for exc_class in self.EXCEPTION_CLASSES:
            with pytest.raises(exceptions.ActusException):
                raise exc_class("Test error")

    def test_exception_inheritance(self):
        """All exceptions inherit from ActusException."""
        for exc_class in self.EXCEPTION_CLASSES:
            assert issubclass(exc_class, exceptions.ActusException)
            assert issubclass(exc_class, Exception)

    def test_error_message_without_context(self):
        exc = exceptions.ActusException("Test error message")
        assert str(exc) == "Test error message"

    def test_context_information_preserved(self):
        """Context is kept and rendered in the message."""
        context = {"contract_id": "PAM-001", "cycle": "P0M"}
        exc = exceptions.InvalidPeriodError("Bad cycle", context=context)

        assert exc.message == "Bad cycle"
        assert exc.context == context
        assert "contract_id=PAM-001" in str(exc)
        assert "cycle=P0M" in str(exc)


class TestLoggingSystem:
    """Verify logging configuration works."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        yield
        logging_config.configure_logging()

    def test_logger_level_can_be_configured(self):
        logging_config.configure_logging(level="DEBUG")
        logging_config.configure_logging(level="WARNING")
        assert logging.getLogger("pamsched").level == logging.WARNING

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv(logging_config.ENV_LOG_LEVEL, "ERROR")
        logging_config.configure_logging()
        assert logging.getLogger("pamsched").level == logging.ERROR

    def test_module_loggers_live_under_package(self):
        logger = pamsched.get_logger("pamsched.contracts.pam")
        assert logger.name.startswith(logging_config.ROOT_LOGGER_NAME)

    def test_performance_logger(self):
        perf_logger = logging_config.get_performance_logger("engine.batch")
        assert perf_logger.name == "pamsched.performance.engine.batch"

    def test_log_file_is_written(self, tmp_path):
        log_file = tmp_path / "logs" / "pamsched.log"
        logging_config.configure_logging(level="INFO", log_file=str(log_file), console=False)

        logging.getLogger("pamsched.test").info("written to file")
        for handler in logging.getLogger("pamsched").handlers:
            handler.flush()

        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_structured_formatter_includes_extra_fields(self):
        formatter = logging_config.StructuredFormatter()
        record = logging.LogRecord("pamsched.test", logging.INFO, __file__, 1, "hello", None, None)
        record.contract_id = "PAM-001"

        payload = json.loads(formatter.format(record))

        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["contract_id"] == "PAM-001"

    def test_disable_logging(self):
        logging_config.disable_logging()
        handlers = logging.getLogger("pamsched").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)
