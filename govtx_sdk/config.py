"""
Configuration for the govtx SDK.

Configuration objects are frozen: build them once at start-up (usually with
``GovernanceConfig.from_env()``) and pass them into the clients. Nothing in
the SDK reads the environment while serving a call.
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MisconfiguredError
from .utils import normalize_tx_hash

DEFAULT_NETWORK_ID = "8453"  # Base mainnet
DEFAULT_GAS_LIMIT = 648318
DEFAULT_TIMEOUT = 30


class SimulationConfig(BaseModel):
    """Credentials and endpoints for the transaction simulation provider."""
    model_config = ConfigDict(frozen=True)

    account_slug: Optional[str] = None
    project_slug: Optional[str] = None
    access_key: Optional[str] = Field(default=None, repr=False)
    network_id: str = DEFAULT_NETWORK_ID
    api_base: str = "https://api.tenderly.co/api/v1"
    dashboard_base: str = "https://dashboard.tenderly.co"
    gas_limit: int = DEFAULT_GAS_LIMIT
    timeout: int = DEFAULT_TIMEOUT
    allow_insecure_http: bool = False

    def require_credentials(self) -> None:
        """
        Ensure account, project and access key are all present.

        Raises:
            MisconfiguredError: Listing every missing setting
        """
        missing = [
            name for name, value in (
                ("account_slug", self.account_slug),
                ("project_slug", self.project_slug),
                ("access_key", self.access_key),
            ) if not value
        ]
        if missing:
            raise MisconfiguredError(f"Simulation provider is missing: {', '.join(missing)}")

    @property
    def endpoint(self) -> str:
        base = self.api_base.rstrip("/")
        return f"{base}/account/{self.account_slug}/project/{self.project_slug}/simulate"


class ChainConfig(BaseModel):
    """Node RPC and block-explorer settings."""
    model_config = ConfigDict(frozen=True)

    rpc_url: Optional[str] = None
    explorer_api_url: str = "https://api.basescan.org/api"
    explorer_api_key: Optional[str] = Field(default=None, repr=False)
    explorer_tx_url: str = "https://basescan.org/tx"
    timeout: int = DEFAULT_TIMEOUT
    allow_insecure_http: bool = False

    def tx_url(self, tx_hash) -> str:
        """Return the block-explorer page for a transaction."""
        return f"{self.explorer_tx_url.rstrip('/')}/{normalize_tx_hash(tx_hash)}"


class GovernanceConfig(BaseModel):
    """Top-level configuration handed to ``GovernanceClient``."""
    model_config = ConfigDict(frozen=True)

    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
    chain: ChainConfig = Field(default_factory=ChainConfig)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GovernanceConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (useful in tests)

        Returns:
            Frozen GovernanceConfig

        Raises:
            MisconfiguredError: If a numeric setting cannot be parsed
        """
        env = os.environ if environ is None else environ
        insecure = env.get("GOVTX_INSECURE_HTTP") == "1"

        try:
            timeout = int(env.get("GOVTX_HTTP_TIMEOUT", str(DEFAULT_TIMEOUT)))
            gas_limit = int(env.get("TENDERLY_GAS_LIMIT", str(DEFAULT_GAS_LIMIT)))
        except ValueError as e:
            raise MisconfiguredError(f"Invalid numeric setting in environment: {e}") from e

        simulation_kwargs = {
            "account_slug": env.get("TENDERLY_ACCOUNT_SLUG"),
            "project_slug": env.get("TENDERLY_PROJECT_SLUG"),
            "access_key": env.get("TENDERLY_ACCESS_KEY"),
            "network_id": env.get("TENDERLY_NETWORK_ID", DEFAULT_NETWORK_ID),
            "gas_limit": gas_limit,
            "timeout": timeout,
            "allow_insecure_http": insecure,
        }
        if env.get("TENDERLY_API_URL"):
            simulation_kwargs["api_base"] = env["TENDERLY_API_URL"]

        chain_kwargs = {
            "rpc_url": env.get("GOVTX_RPC_URL"),
            "explorer_api_key": env.get("GOVTX_EXPLORER_API_KEY"),
            "timeout": timeout,
            "allow_insecure_http": insecure,
        }
        if env.get("GOVTX_EXPLORER_API_URL"):
            chain_kwargs["explorer_api_url"] = env["GOVTX_EXPLORER_API_URL"]
        if env.get("GOVTX_EXPLORER_TX_URL"):
            chain_kwargs["explorer_tx_url"] = env["GOVTX_EXPLORER_TX_URL"]

        return cls(
            simulation=SimulationConfig(**simulation_kwargs),
            chain=ChainConfig(**chain_kwargs),
        )
