"""Library configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnsSettings(BaseSettings):
    """Resolution engine configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="ENSLOOKUP_",
    )

    # Node
    rpc_url: str | None = Field(
        default=None,
        description="Ethereum JSON-RPC endpoint URL",
    )
    chain_id: int | None = Field(
        default=None,
        description="Chain id of the selected network (read from the node if unset)",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="JSON-RPC request timeout in seconds",
    )

    # Registry
    registry_address: str | None = Field(
        default=None,
        description="ENS registry override (defaults to the network's deployment)",
    )

    # Off-chain lookups
    maximum_redirections: int = Field(
        default=5,
        ge=0,
        description="Maximum off-chain lookup hops per record call",
    )
    gateway_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Off-chain gateway request timeout in seconds",
    )

    # App settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


@lru_cache
def get_settings() -> EnsSettings:
    """Get cached settings instance."""
    return EnsSettings()
