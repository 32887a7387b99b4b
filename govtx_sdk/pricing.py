"""
Price reconciliation for collecting tokens from an executed drop proposal.
"""
import logging
from typing import Optional

from .models import PriceQuote, SaleConfig
from .units import Unit, to_base_units

logger = logging.getLogger(__name__)

# Zora protocol fee, charged per minted token
ZORA_PROTOCOL_FEE_WEI = int(to_base_units("0.000777", Unit.ETHER))

# A live price must exceed this to be trusted; an unconfigured drop reads as 0
EMPTY_PRICE_SENTINEL = 0


def compute_total(
    live: Optional[SaleConfig],
    static: Optional[SaleConfig],
    quantity: int,
    fee_per_unit: int = ZORA_PROTOCOL_FEE_WEI,
    empty_sentinel: int = EMPTY_PRICE_SENTINEL,
    live_error: Optional[str] = None
) -> PriceQuote:
    """
    Compute the total cost of ``quantity`` tokens, in wei.

    The live contract price wins when present and above ``empty_sentinel``;
    otherwise the static proposal price is used, otherwise zero.

    A non-positive quantity does not raise: the quote has zero totals and
    ``invalid_quantity`` set.

    Args:
        live: Sales config read from the deployed contract
        static: Sales config from proposal metadata
        quantity: Number of tokens to collect
        fee_per_unit: Protocol fee per token, in wei
        empty_sentinel: Live prices at or below this are treated as absent
        live_error: Reason the live read failed, carried onto the quote

    Returns:
        PriceQuote
    """
    if live is not None and live.price_per_unit > empty_sentinel:
        price, source = live.price_per_unit, "live"
    elif static is not None:
        price, source = static.price_per_unit, "static"
    else:
        price, source = 0, "none"

    invalid_quantity = not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0
    count = 0 if invalid_quantity else quantity
    if invalid_quantity:
        logger.debug(f"Invalid quantity {quantity!r}, quoting zero")

    mint_total = count * price
    fee_total = count * fee_per_unit
    return PriceQuote(
        quantity=count,
        price_per_unit=price,
        fee_per_unit=fee_per_unit,
        mint_total=mint_total,
        fee_total=fee_total,
        total=mint_total + fee_total,
        price_source=source,
        invalid_quantity=invalid_quantity,
        live_error=live_error,
    )
