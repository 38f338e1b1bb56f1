"""
SDK configuration models.

``SquidConfig`` is read-mostly: operations read it but never mutate it.
Replacing it goes through :meth:`squid_sdk.sdk.Squid.set_config`.
"""

import os
from enum import Enum
from typing import Optional

import dotenv
from pydantic import Field, field_validator

from .bases import CanonicalModel

dotenv.load_dotenv()

#: Squid API host used when neither the config nor the environment provides one.
DEFAULT_BASE_URL: str = "https://api.0xsquid.com"


def get_base_url_from_env() -> str:
    """
    Load the Squid API host from the environment.

    Environment Variable:
        - SQUID_BASE_URL: API host override (e.g. a testnet deployment)

    Returns:
        str: Configured host, or :data:`DEFAULT_BASE_URL` if unset
    """
    return os.getenv("SQUID_BASE_URL") or DEFAULT_BASE_URL


def get_log_level_from_env() -> str:
    return os.getenv("SQUID_LOG_LEVEL") or "INFO"


class ExecutionStrategy(str, Enum):
    """
    How the value of the execution transaction is derived.

    ROUTE_VALUE: value copied from the route, omitted for ``SEND`` routes.
    FEE_ESTIMATING: value is the oracle gas fee (plus the source amount for
        native assets), with a fixed fallback when the oracle fails.
    """
    ROUTE_VALUE = "route_value"
    FEE_ESTIMATING = "fee_estimating"


class ExecutionSettings(CanonicalModel):
    """Per-call or per-instance execution settings."""

    infinite_approval: Optional[bool] = Field(None, alias="infiniteApproval")


class SquidConfig(CanonicalModel):
    """
    SDK configuration.

    Attributes:
        base_url: Squid API host
        execution_settings: Instance-level execution settings
        environment: ``mainnet`` or ``testnet``; selects the gas-fee oracle host
        execution_strategy: See :class:`ExecutionStrategy`
        logging: Attach a stream handler to the ``squid_sdk`` logger
        log_level: Logging level name
        request_timeout: HTTP and RPC timeout in seconds
        approval_timeout: Seconds to wait for an approval confirmation
    """

    base_url: str = Field(default_factory=get_base_url_from_env, alias="baseUrl")
    execution_settings: ExecutionSettings = Field(default_factory=ExecutionSettings, alias="executionSettings")
    environment: str = Field("mainnet")
    execution_strategy: ExecutionStrategy = Field(ExecutionStrategy.ROUTE_VALUE, alias="executionStrategy")
    logging: bool = False
    log_level: str = Field(default_factory=get_log_level_from_env, alias="logLevel")
    request_timeout: float = Field(60, gt=0, alias="requestTimeout")
    approval_timeout: float = Field(120, gt=0, alias="approvalTimeout")

    @field_validator("environment")
    @classmethod
    def _check_environment(cls, value: str) -> str:
        value = value.lower()
        if value not in ("mainnet", "testnet"):
            raise ValueError(f"Unsupported environment: {value!r} (expected 'mainnet' or 'testnet')")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unsupported log level: {value!r}")
        return value
