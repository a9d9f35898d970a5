"""Tests for config and logging."""

import json
import logging
import os
from unittest.mock import patch

import pytest

from parcel_router.config import GeneratorConfig, OutputConfig, ParcelRouterConfig, RoutingConfig
from parcel_router.exceptions import ConfigurationError
from parcel_router.logging import JsonFormatter, configure_logging, get_logger, setup_logging

ENV_VARS = [
    "STRICT_TRANSITIONS",
    "FAKER_LOCALE",
    "SEED",
    "PARCELS_PER_CONTAINER",
    "NUM_CONTAINERS",
    "PRETTY_OUTPUT",
    "MAX_RECORDS",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env():
    """Environment without any parcel-router variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestConfigDefaults:
    """Tests for config dataclass defaults."""

    def test_routing(self) -> None:
        assert RoutingConfig().strict_transitions is True

    def test_generator(self) -> None:
        config = GeneratorConfig()

        assert config.locale == "nl_NL"
        assert config.seed is None
        assert config.parcels_per_container == 10
        assert config.num_containers == 3

    @pytest.mark.parametrize("field", ["parcels_per_container", "num_containers"])
    def test_generator_rejects_zero_counts(self, field: str) -> None:
        with pytest.raises(ConfigurationError):
            GeneratorConfig(**{field: 0})

    def test_output(self) -> None:
        config = OutputConfig()

        assert config.pretty is True
        assert config.max_records is None

    def test_main_config(self) -> None:
        config = ParcelRouterConfig()

        assert config.routing.strict_transitions is True
        assert config.log_level == "INFO"
        assert config.log_format == "standard"


class TestFromEnv:
    """Tests for ParcelRouterConfig.from_env."""

    def test_defaults(self, clean_env: None) -> None:
        config = ParcelRouterConfig.from_env()

        assert config == ParcelRouterConfig()

    def test_custom(self, clean_env: None) -> None:
        env = {
            "STRICT_TRANSITIONS": "false",
            "FAKER_LOCALE": "en_US",
            "SEED": "12345",
            "PARCELS_PER_CONTAINER": "25",
            "NUM_CONTAINERS": "7",
            "PRETTY_OUTPUT": "false",
            "MAX_RECORDS": "5",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env):
            config = ParcelRouterConfig.from_env()

        assert config.routing.strict_transitions is False
        assert config.generator.locale == "en_US"
        assert config.generator.seed == 12345
        assert config.generator.parcels_per_container == 25
        assert config.generator.num_containers == 7
        assert config.output.pretty is False
        assert config.output.max_records == 5
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_non_integer(self, clean_env: None) -> None:
        with patch.dict(os.environ, {"SEED": "forty-two"}):
            with pytest.raises(ConfigurationError, match="SEED"):
                ParcelRouterConfig.from_env()

    def test_unknown_log_format(self, clean_env: None) -> None:
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}):
            with pytest.raises(ConfigurationError, match="LOG_FORMAT"):
                ParcelRouterConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging function."""

    @pytest.fixture(autouse=True)
    def restore_logging(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)
        logging.getLogger("parcel_router").setLevel(logging.NOTSET)

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger("parcel_router").level == logging.INFO
        assert logging.getLogger("faker").level == logging.WARNING

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(level="debug", format_type="json")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1

    def test_setup_logging_unknown_format(self) -> None:
        root = logging.getLogger()
        before = root.handlers[:]

        with pytest.raises(ConfigurationError, match="xml"):
            setup_logging(format_type="xml")

        assert root.handlers == before

    def test_configure_logging_uses_config(self) -> None:
        config = ParcelRouterConfig(log_level="WARNING", log_format="json")

        configure_logging(config)

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JsonFormatter)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        return logging.LogRecord(
            name="parcel_router.test",
            level=logging.WARNING,
            pathname="test.py",
            lineno=1,
            msg="Parcel %s refused",
            args=("p-001",),
            exc_info=kwargs.get("exc_info"),
        )

    def test_format(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "parcel_router.test"
        assert data["message"] == "Parcel p-001 refused"
        assert "thread" in data
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("bad weight")
        except ValueError:
            import sys

            record = self._record(exc_info=sys.exc_info())

        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: bad weight" in data["exception"]

    def test_format_lifts_routing_context(self) -> None:
        logger = logging.getLogger("parcel_router.test")
        record = logger.makeRecord(
            logger.name,
            logging.INFO,
            "test.py",
            1,
            "Imported container %s",
            ("CNT-1",),
            None,
            extra={"container_id": "CNT-1", "parcel_id": None, "unrelated": "x"},
        )

        data = json.loads(JsonFormatter().format(record))
        assert data["container_id"] == "CNT-1"
        assert "parcel_id" not in data
        assert "unrelated" not in data

    def test_timestamp_comes_from_record(self) -> None:
        record = self._record()
        record.created = 0.0

        data = json.loads(JsonFormatter().format(record))
        assert data["timestamp"] == "1970-01-01T00:00:00+00:00"


def test_get_logger() -> None:
    logger = get_logger("parcel_router.services")
    assert logger.name == "parcel_router.services"
