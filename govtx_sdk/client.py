"""
GovernanceClient - main entry point of the govtx SDK.
"""
import logging
from typing import Optional, Union

import requests
from web3 import Web3

from .config import GovernanceConfig
from .exceptions import TransportError
from .models import ExecutionResolution, MatchQuery, PriceQuote, SaleConfig, SimulationOutcome, TransactionIntent
from .onchain import ExecutionResolver, ExplorerClient, NodeClient, wait_for_execution
from .pricing import ZORA_PROTOCOL_FEE_WEI, compute_total
from .simulation import SimulationClient


class GovernanceClient:
    """
    Client for simulating governance transactions and verifying executions.

    This client handles:
    1. Simulating a proposed transaction before the vote
    2. Finding the transaction that executed a proposal, and its receipt
    3. Pricing a collect of the token contract created by the execution

    Sub-clients are created on first use, so a client configured only for
    chain access never needs simulation credentials (and vice versa).
    """

    def __init__(
        self,
        config: GovernanceConfig,
        session: Optional[requests.Session] = None,
        w3: Optional[Web3] = None,
        created_contract_log_index: int = 0,
        fee_per_unit: int = ZORA_PROTOCOL_FEE_WEI,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the GovernanceClient

        Args:
            config: Frozen SDK configuration, built once at start-up
            session: Optional requests session shared by the HTTP sub-clients
            w3: Optional Web3 instance for node access
            created_contract_log_index: Receipt log treated as the created contract
            fee_per_unit: Protocol fee per collected token, in wei
            logger: Optional logger instance to use for debug/info logging
        """
        self.config = config
        self.created_contract_log_index = created_contract_log_index
        self.fee_per_unit = fee_per_unit
        self.logger = logger or logging.getLogger(__name__)
        self._session = session
        self._w3 = w3
        self._simulation_client: Optional[SimulationClient] = None
        self._resolver: Optional[ExecutionResolver] = None

    @property
    def simulation_client(self) -> SimulationClient:
        """
        Raises:
            MisconfiguredError: If simulation credentials are missing
        """
        if self._simulation_client is None:
            self._simulation_client = SimulationClient(
                self.config.simulation, session=self._session, logger=self.logger
            )
        return self._simulation_client

    @property
    def resolver(self) -> ExecutionResolver:
        """
        Raises:
            MisconfiguredError: If the explorer or RPC endpoint is missing
        """
        if self._resolver is None:
            self._resolver = ExecutionResolver(
                ExplorerClient(self.config.chain, session=self._session, logger=self.logger),
                NodeClient(self.config.chain, w3=self._w3, logger=self.logger),
                created_contract_log_index=self.created_contract_log_index,
                logger=self.logger,
            )
        return self._resolver

    def simulate(self, intent: TransactionIntent) -> SimulationOutcome:
        """Simulate a transaction intent. See ``SimulationClient.simulate``."""
        return self.simulation_client.simulate(intent)

    def resolve_execution(self, query: MatchQuery) -> ExecutionResolution:
        """Run one resolution attempt. See ``ExecutionResolver.resolve``."""
        return self.resolver.resolve(query)

    def wait_for_execution(
        self,
        query: MatchQuery,
        attempts: int = 10,
        interval: float = 5.0,
        backoff: float = 1.0
    ) -> ExecutionResolution:
        """Poll for the execution with bounded attempts. See ``wait_for_execution``."""
        return wait_for_execution(self.resolver, query, attempts=attempts, interval=interval, backoff=backoff)

    def read_sale_config(self, token_address: str) -> Optional[SaleConfig]:
        """Read the live sales config of a drop contract."""
        return self.resolver.node.read_sale_config(token_address)

    def compute_total(
        self,
        live: Optional[SaleConfig],
        static: Optional[SaleConfig],
        quantity: int
    ) -> PriceQuote:
        """Price ``quantity`` tokens with this client's protocol fee."""
        return compute_total(live, static, quantity, fee_per_unit=self.fee_per_unit)

    def quote_for_token(
        self,
        token_address: Optional[str],
        static: Optional[SaleConfig],
        quantity: int
    ) -> PriceQuote:
        """
        Price a collect, preferring the live sales config of ``token_address``.

        If the live read fails the static config is used and the failure is
        reported on ``PriceQuote.live_error``.
        """
        live = None
        live_error = None
        if token_address:
            try:
                live = self.read_sale_config(token_address)
            except TransportError as e:
                live_error = str(e)
                self.logger.warning(f"Contract price data unavailable, using static price: {e}")

        return compute_total(
            live, static, quantity, fee_per_unit=self.fee_per_unit, live_error=live_error
        )

    def tx_url(self, tx_hash: Union[str, bytes]) -> str:
        """Return the block-explorer URL of a transaction."""
        return self.config.chain.tx_url(tx_hash)
