"""
Unit tests for MessageConfig.
"""

import logging

import pytest

from httpmessage.config import DEFAULT_CONFIG, MessageConfig


class TestMessageConfig:
    """Tests for configuration defaults, environment and validation."""

    def test_defaults(self):
        """Test the default values."""
        assert DEFAULT_CONFIG == MessageConfig()
        assert DEFAULT_CONFIG.default_protocol_version == "1.1"
        assert DEFAULT_CONFIG.allow_obs_fold is True
        assert DEFAULT_CONFIG.coerce_numeric_values is True
        assert DEFAULT_CONFIG.log_level == "WARNING"

    def test_from_env(self, monkeypatch):
        """Test reading configuration from the environment."""
        monkeypatch.setenv("HTTPMESSAGE_PROTOCOL_VERSION", "1.0")
        monkeypatch.setenv("HTTPMESSAGE_ALLOW_OBS_FOLD", "false")
        monkeypatch.setenv("HTTPMESSAGE_COERCE_NUMERIC", "YES")
        monkeypatch.setenv("HTTPMESSAGE_LOG_LEVEL", "DEBUG")

        config = MessageConfig.from_env()

        assert config.default_protocol_version == "1.0"
        assert config.allow_obs_fold is False
        assert config.coerce_numeric_values is True
        assert config.log_level == "DEBUG"

    def test_from_env_defaults(self, monkeypatch):
        """Test that missing variables fall back to defaults."""
        for name in (
            "HTTPMESSAGE_PROTOCOL_VERSION",
            "HTTPMESSAGE_ALLOW_OBS_FOLD",
            "HTTPMESSAGE_COERCE_NUMERIC",
            "HTTPMESSAGE_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        assert MessageConfig.from_env() == MessageConfig()

    def test_validate(self):
        """Test that bad values are rejected."""
        MessageConfig().validate()

        with pytest.raises(ValueError):
            MessageConfig(default_protocol_version="").validate()
        with pytest.raises(ValueError):
            MessageConfig(log_level="LOUD").validate()

    def test_configure_logging(self):
        """Test that the package logger level is applied."""
        package_logger = MessageConfig(log_level="debug").configure_logging()

        try:
            assert package_logger.name == "httpmessage"
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(logging.NOTSET)

    def test_rejections_logged(self, caplog):
        """Test that rejected headers are logged at DEBUG."""
        from httpmessage import HeaderBag, InvalidHeader

        with caplog.at_level(logging.DEBUG, logger="httpmessage"):
            with pytest.raises(InvalidHeader):
                HeaderBag().with_set("Bad Name", "v")

        assert any("Rejected header" in record.message for record in caplog.records)
