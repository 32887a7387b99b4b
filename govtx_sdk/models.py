"""
Data models for the govtx SDK.
"""
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import InvalidInputError
from .units import Unit, to_base_units, to_display_units
from .utils import PROPOSAL_EXECUTED_TOPIC, normalize_hash32, require_address


def _parse_quantity(value: Any) -> Any:
    """Accept JSON-RPC style hex quantities ("0x1a", "0x") as integers."""
    if isinstance(value, str):
        text = value.strip()
        if text.lower().startswith("0x"):
            return int(text, 16) if len(text) > 2 else 0
        if text.isdecimal():
            return int(text)
    return value


class IntentKind(str, Enum):
    """Kinds of governance transactions that can be simulated."""
    SEND_VALUE = "send-value"
    SEND_TOKENS = "send-tokens"
    MINT = "mint"
    GENERIC_CALL = "generic-call"


class TransactionIntent(BaseModel):
    """
    Abstract description of a transaction to simulate or execute.

    The denomination of ``value`` is carried explicitly by ``unit``; it is
    never inferred from ``kind``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: IntentKind = IntentKind.GENERIC_CALL
    from_address: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    calldata: Optional[str] = None
    value: Union[str, int] = "0"
    unit: Unit = Unit.WEI
    contract_abi: Optional[Any] = None

    @classmethod
    def send_value(
        cls,
        from_address: str,
        to: str,
        value: Union[str, int],
        calldata: str = "0x",
    ) -> "TransactionIntent":
        """Plain value transfer, with value given in ether."""
        return cls(
            kind=IntentKind.SEND_VALUE,
            from_address=from_address,
            to=to,
            calldata=calldata,
            value=value,
            unit=Unit.ETHER,
        )

    @classmethod
    def contract_call(
        cls,
        from_address: str,
        to: str,
        calldata: str,
        value: Union[str, int] = "0",
        kind: IntentKind = IntentKind.GENERIC_CALL,
        contract_abi: Optional[Any] = None,
    ) -> "TransactionIntent":
        """Contract call, with value given in wei."""
        return cls(
            kind=kind,
            from_address=from_address,
            to=to,
            calldata=calldata,
            value=value,
            unit=Unit.WEI,
            contract_abi=contract_abi,
        )


class SimulationOutcome(BaseModel):
    """Result of one simulation call. Not persisted."""
    succeeded: bool
    simulation_id: Optional[str] = None
    account_slug: str
    project_slug: str
    dashboard_base: str = "https://dashboard.tenderly.co"
    raw: Dict[str, Any] = Field(default_factory=dict, repr=False)

    @property
    def dashboard_url(self) -> str:
        base = self.dashboard_base.rstrip("/")
        return f"{base}/{self.account_slug}/{self.project_slug}/simulator/{self.simulation_id}"

    @property
    def message(self) -> str:
        return "Simulation succeeded" if self.succeeded else "Simulation failed"


class LogEntry(BaseModel):
    """A single event log, from a receipt or from the explorer log API."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    address: str
    topics: List[str] = Field(default_factory=list)
    data: str = "0x"
    log_index: Optional[int] = Field(None, alias="logIndex")
    block_number: Optional[int] = Field(None, alias="blockNumber")
    transaction_hash: Optional[str] = Field(None, alias="transactionHash")

    @field_validator("log_index", "block_number", mode="before")
    @classmethod
    def parse_hex_quantities(cls, value: Any) -> Any:
        return _parse_quantity(value)


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: Optional[str] = Field(None, alias="blockHash")
    status: int
    gas_used: Optional[int] = Field(None, alias="gasUsed")
    from_address: Optional[str] = Field(None, alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    logs: List[LogEntry] = Field(default_factory=list)

    @field_validator("block_number", "status", "gas_used", mode="before")
    @classmethod
    def parse_hex_quantities(cls, value: Any) -> Any:
        return _parse_quantity(value)

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class MatchQuery(BaseModel):
    """Which committed transaction to look for."""
    model_config = ConfigDict(frozen=True)

    contract_address: str
    from_block: int = 0
    event_topic: str = PROPOSAL_EXECUTED_TOPIC
    content_hash: Optional[str] = None

    def normalized(self) -> "MatchQuery":
        """
        Return a copy with address and hashes in canonical form.

        Raises:
            InvalidAddress: If contract_address is malformed
            InvalidInputError: If from_block is negative or a hash is malformed
        """
        if self.from_block < 0:
            raise InvalidInputError(f"from_block must be non-negative, got {self.from_block}")
        return MatchQuery(
            contract_address=require_address(self.contract_address, "contract address"),
            from_block=self.from_block,
            event_topic=normalize_hash32(self.event_topic, "event topic"),
            content_hash=(
                normalize_hash32(self.content_hash, "content hash")
                if self.content_hash else None
            ),
        )


class MatchedTransaction(BaseModel):
    """The transaction whose log matched a MatchQuery."""
    hash: str
    block_number: int
    log_index: Optional[int] = None


class ResolutionState(str, Enum):
    SEARCHING = "searching"
    FOUND = "found"
    RECEIPT_FETCHED = "receipt_fetched"
    FAILED = "failed"


class ExecutionResolution(BaseModel):
    """Outcome of one resolver invocation."""
    query: MatchQuery
    state: ResolutionState = ResolutionState.SEARCHING
    matched: Optional[MatchedTransaction] = None
    receipt: Optional[TxReceipt] = None
    created_contract: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.matched is not None


class SaleConfig(BaseModel):
    """
    Token sale parameters.

    ``price_per_unit`` is always in wei. ``source`` records whether the
    values were read from a deployed contract or taken from proposal
    metadata.
    """
    price_per_unit: int = 0
    max_per_address: Optional[int] = None
    public_sale_start: Optional[int] = None
    public_sale_end: Optional[int] = None
    presale_start: Optional[int] = None
    presale_end: Optional[int] = None
    presale_merkle_root: Optional[str] = None
    source: Literal["live", "static"] = "static"

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "SaleConfig":
        """
        Parse the sales config attached to a proposal.

        ``publicSalePrice`` given as a number (or a decimal string) is in
        ether; given as an integer string it is already in wei.

        Raises:
            InvalidAmount: If the price cannot be parsed
        """
        raw_price = metadata.get("publicSalePrice")
        if raw_price is None or raw_price == "":
            price = 0
        elif isinstance(raw_price, str) and raw_price.strip().isdecimal():
            price = int(raw_price.strip())
        else:
            price = int(to_base_units(raw_price, Unit.ETHER))

        return cls(
            price_per_unit=price,
            max_per_address=metadata.get("maxSalePurchasePerAddress"),
            public_sale_start=metadata.get("publicSaleStart"),
            public_sale_end=metadata.get("publicSaleEnd"),
            presale_start=metadata.get("presaleStart"),
            presale_end=metadata.get("presaleEnd"),
            presale_merkle_root=metadata.get("presaleMerkleRoot"),
            source="static",
        )

    @classmethod
    def from_contract_tuple(cls, values: Sequence[Any]) -> Optional["SaleConfig"]:
        """
        Parse the tuple returned by a drop contract's ``salesConfig()``.

        Returns None for an empty result.
        """
        if not values:
            return None
        fields = list(values) + [None] * (7 - len(values))
        merkle_root = fields[6]
        if isinstance(merkle_root, (bytes, bytearray)):
            merkle_root = "0x" + bytes(merkle_root).hex()
        return cls(
            price_per_unit=int(fields[0]),
            max_per_address=fields[1],
            public_sale_start=fields[2],
            public_sale_end=fields[3],
            presale_start=fields[4],
            presale_end=fields[5],
            presale_merkle_root=merkle_root,
            source="live",
        )


class PriceQuote(BaseModel):
    """Total cost of collecting ``quantity`` tokens. All amounts are in wei."""
    quantity: int
    price_per_unit: int
    fee_per_unit: int
    mint_total: int
    fee_total: int
    total: int
    price_source: Literal["live", "static", "none"]
    invalid_quantity: bool = False
    live_error: Optional[str] = None

    @property
    def price_per_unit_ether(self) -> Decimal:
        return Decimal(to_display_units(self.price_per_unit))

    @property
    def mint_total_ether(self) -> Decimal:
        return Decimal(to_display_units(self.mint_total))

    @property
    def fee_total_ether(self) -> Decimal:
        return Decimal(to_display_units(self.fee_total))

    @property
    def total_ether(self) -> Decimal:
        return Decimal(to_display_units(self.total))
