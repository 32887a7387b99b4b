"""
govtx SDK - governance transaction simulation and on-chain execution verification.
"""
from .client import GovernanceClient
from .config import ChainConfig, GovernanceConfig, SimulationConfig
from .exceptions import (
    GovTxError, InvalidInputError, InvalidAmount, InvalidAddress, MissingField,
    MisconfiguredError, ProviderError, TransportError, MatchResolutionError
)
from .models import (
    ExecutionResolution, IntentKind, LogEntry, MatchedTransaction, MatchQuery, PriceQuote,
    ResolutionState, SaleConfig, SimulationOutcome, TransactionIntent, TxReceipt
)
from .pricing import ZORA_PROTOCOL_FEE_WEI, compute_total
from .units import Unit, convert_sparks_to_eth, to_base_units, to_display_units
from .utils import PROPOSAL_EXECUTED_TOPIC, event_topic
from .version import __version__

__all__ = [
    "GovernanceClient",
    "GovernanceConfig",
    "SimulationConfig",
    "ChainConfig",
    "GovTxError",
    "InvalidInputError",
    "InvalidAmount",
    "InvalidAddress",
    "MissingField",
    "MisconfiguredError",
    "ProviderError",
    "TransportError",
    "MatchResolutionError",
    "TransactionIntent",
    "IntentKind",
    "SimulationOutcome",
    "MatchQuery",
    "MatchedTransaction",
    "LogEntry",
    "TxReceipt",
    "ResolutionState",
    "ExecutionResolution",
    "SaleConfig",
    "PriceQuote",
    "ZORA_PROTOCOL_FEE_WEI",
    "compute_total",
    "Unit",
    "to_base_units",
    "to_display_units",
    "convert_sparks_to_eth",
    "PROPOSAL_EXECUTED_TOPIC",
    "event_topic",
    "__version__",
]
