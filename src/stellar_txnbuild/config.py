"""
Builder configuration.

Holds the defaults a Transaction falls back to when the caller does not
name a network or fee: the network passphrase and the per-operation base
fee. Values can be loaded from the environment:

    STELLAR_NETWORK_PASSPHRASE  passphrase or "public" / "testnet"
    STELLAR_BASE_FEE            base fee in stroops per operation
"""

from __future__ import annotations
import logging
import os
from typing import Optional, Mapping

from pydantic import BaseModel, Field, field_validator, ValidationError as PydanticValidationError

from .network import TEST_NETWORK_PASSPHRASE, resolve_passphrase
from .runtime.errors import ConfigError

logger = logging.getLogger(__name__)

ENV_NETWORK_PASSPHRASE = "STELLAR_NETWORK_PASSPHRASE"
ENV_BASE_FEE = "STELLAR_BASE_FEE"

DEFAULT_BASE_FEE = 100


class TxnBuildConfig(BaseModel):
    """Process-wide defaults for building transactions."""

    network_passphrase: str = Field(
        default=TEST_NETWORK_PASSPHRASE,
        min_length=1,
        description="Passphrase of the network transactions are signed for",
    )
    base_fee: int = Field(
        default=DEFAULT_BASE_FEE,
        ge=1,
        le=0xFFFFFFFF,
        description="Fee per operation in stroops",
    )

    model_config = {"frozen": True}

    @field_validator("network_passphrase", mode="before")
    @classmethod
    def validate_passphrase(cls, v):
        if isinstance(v, str):
            return resolve_passphrase(v.strip())
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TxnBuildConfig:
        """
        Load configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Config with unset variables left at their defaults

        Raises:
            ConfigError: If a variable is present but invalid
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get(ENV_NETWORK_PASSPHRASE):
            values["network_passphrase"] = env[ENV_NETWORK_PASSPHRASE]
        if env.get(ENV_BASE_FEE):
            values["base_fee"] = env[ENV_BASE_FEE]
        try:
            config = cls(**values)
        except PydanticValidationError as e:
            raise ConfigError(f"invalid environment configuration: {e}", cause=e) from e
        logger.debug("Loaded config from environment: base_fee=%d", config.base_fee)
        return config


_active_config: Optional[TxnBuildConfig] = None


def get_config() -> TxnBuildConfig:
    """Return the active config, loading it from the environment on first use."""
    global _active_config
    if _active_config is None:
        _active_config = TxnBuildConfig.from_env()
    return _active_config


def set_config(config: Optional[TxnBuildConfig]) -> None:
    """Replace the active config; ``None`` reloads from the environment on next use."""
    global _active_config
    _active_config = config


__all__ = [
    "TxnBuildConfig",
    "DEFAULT_BASE_FEE",
    "ENV_NETWORK_PASSPHRASE",
    "ENV_BASE_FEE",
    "get_config",
    "set_config",
]
