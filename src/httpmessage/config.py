"""
=============================================================================
MESSAGE CONFIGURATION
=============================================================================

Centralized settings for the message model.

The model itself has almost no knobs: header legality and the default
protocol version are the only behaviours that differ between deployments.
They live in one frozen dataclass that every HeaderBag and Message carries.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Explicit MessageConfig passed to HeaderBag / Message           │
    │      └── Message(config=MessageConfig(allow_obs_fold=False))       │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPMESSAGE_ALLOW_OBS_FOLD=0                               │
    │          (only when MessageConfig.from_env() is used)              │
    │                                                                      │
    │   3. Default values (DEFAULT_CONFIG)                                │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

import logging
import os
from dataclasses import dataclass


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_STRINGS = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_STRINGS


@dataclass(frozen=True)
class MessageConfig:
    """
    Configuration for header validation and message defaults.

    =========================================================================
    EXAMPLES
    =========================================================================

    Lenient (default):
        MessageConfig()
        # "1.1" messages, folded header values accepted, 42 → "42"

    Strict:
        MessageConfig(
            allow_obs_fold=False,         # any CR/LF in a value is rejected
            coerce_numeric_values=False,  # only str values accepted
        )

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # MESSAGE DEFAULTS
    # ─────────────────────────────────────────────────────────────────────

    default_protocol_version: str = "1.1"
    """
    Protocol version given to a Message built without one.
    Only the version number, e.g. "1.1" or "1.0", not "HTTP/1.1".
    """

    # ─────────────────────────────────────────────────────────────────────
    # HEADER LEGALITY
    # ─────────────────────────────────────────────────────────────────────

    allow_obs_fold: bool = True
    """
    Accept folded header values (a line break followed by SP or HTAB).
    When False, any CR or LF inside a value raises InvalidHeader.
    """

    coerce_numeric_values: bool = True
    """
    Accept int and float header values and store them as str.
    bool is never accepted.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Level for the "httpmessage" logger (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows every rejected header and body.
    """

    @classmethod
    def from_env(cls) -> "MessageConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTPMESSAGE_PROTOCOL_VERSION  Default version (default: 1.1)
        HTTPMESSAGE_ALLOW_OBS_FOLD    Accept folded values (default: 1)
        HTTPMESSAGE_COERCE_NUMERIC    Accept numeric values (default: 1)
        HTTPMESSAGE_LOG_LEVEL         Logging level (default: WARNING)

        =====================================================================
        """
        return cls(
            default_protocol_version=os.getenv("HTTPMESSAGE_PROTOCOL_VERSION", "1.1"),
            allow_obs_fold=_env_flag("HTTPMESSAGE_ALLOW_OBS_FOLD", True),
            coerce_numeric_values=_env_flag("HTTPMESSAGE_COERCE_NUMERIC", True),
            log_level=os.getenv("HTTPMESSAGE_LOG_LEVEL", "WARNING"),
        )

    def validate(self) -> None:
        """Validate configuration values, raising ValueError on the first bad one."""
        if not isinstance(self.default_protocol_version, str) or not self.default_protocol_version:
            raise ValueError("default_protocol_version must be a non-empty string")

        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(_LOG_LEVELS)}."
            )

    def configure_logging(self) -> logging.Logger:
        """
        Apply log_level to the package logger and return it.

        No handler is installed; output goes wherever the application's
        root logger sends it.
        """
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        package_logger = logging.getLogger("httpmessage")
        package_logger.setLevel(level)
        return package_logger


DEFAULT_CONFIG = MessageConfig()
