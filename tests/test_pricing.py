"""
Tests for price reconciliation.
"""
from decimal import Decimal

import pytest

from govtx_sdk.exceptions import InvalidAmount
from govtx_sdk.models import SaleConfig
from govtx_sdk.pricing import EMPTY_PRICE_SENTINEL, ZORA_PROTOCOL_FEE_WEI, compute_total

CENT = 10000000000000000  # 0.01 ether in wei


def live(price):
    return SaleConfig(price_per_unit=price, source="live")


def static(price):
    return SaleConfig(price_per_unit=price, source="static")


def test_protocol_fee():
    assert ZORA_PROTOCOL_FEE_WEI == 777000000000000
    assert EMPTY_PRICE_SENTINEL == 0


def test_live_price_wins():
    """3 tokens at a live 0.01 ether price, plus the protocol fee per token"""
    quote = compute_total(live(CENT), static(2 * CENT), 3)

    assert quote.price_source == "live"
    assert quote.price_per_unit == CENT
    assert quote.mint_total == 3 * CENT
    assert quote.fee_total == 3 * ZORA_PROTOCOL_FEE_WEI
    assert quote.total == 3 * CENT + 3 * ZORA_PROTOCOL_FEE_WEI
    assert quote.total_ether == Decimal("0.032331")
    assert not quote.invalid_quantity


def test_static_price_when_live_missing():
    quote = compute_total(None, static(2 * CENT), 2)

    assert quote.price_source == "static"
    assert quote.total == 2 * (2 * CENT) + 2 * ZORA_PROTOCOL_FEE_WEI


def test_static_price_when_live_is_empty():
    """An unconfigured drop reports a zero price; that is not a free mint"""
    quote = compute_total(live(0), static(CENT), 1)

    assert quote.price_source == "static"
    assert quote.price_per_unit == CENT


def test_no_price_at_all():
    quote = compute_total(None, None, 4)

    assert quote.price_source == "none"
    assert quote.mint_total == 0
    assert quote.total == 4 * ZORA_PROTOCOL_FEE_WEI


def test_live_zero_without_static_falls_back_to_none():
    assert compute_total(live(0), None, 1).price_source == "none"


def test_custom_sentinel():
    quote = compute_total(live(1), static(CENT), 1, empty_sentinel=1)

    assert quote.price_source == "static"


def test_custom_fee():
    quote = compute_total(live(CENT), None, 2, fee_per_unit=0)

    assert quote.total == 2 * CENT
    assert quote.fee_total == 0


@pytest.mark.parametrize("quantity", [0, -1, 1.5, "3", True, None])
def test_invalid_quantity_quotes_zero(quantity):
    quote = compute_total(live(CENT), static(CENT), quantity)

    assert quote.invalid_quantity
    assert quote.quantity == 0
    assert quote.mint_total == 0
    assert quote.fee_total == 0
    assert quote.total == 0
    # The price is still reported
    assert quote.price_per_unit == CENT


def test_live_error_is_carried():
    quote = compute_total(None, static(CENT), 1, live_error="rpc down")

    assert quote.live_error == "rpc down"
    assert quote.price_source == "static"


def test_ether_views():
    quote = compute_total(live(CENT), None, 1)

    assert quote.price_per_unit_ether == Decimal("0.01")
    assert quote.mint_total_ether == Decimal("0.01")
    assert quote.fee_total_ether == Decimal("0.000777")
    assert quote.total_ether == Decimal("0.010777")


@pytest.mark.parametrize("raw, expected", [
    (0.01, CENT),
    ("0.01", CENT),
    ("10000000000000000", CENT),
    (0, 0),
    ("", 0),
    (None, 0),
])
def test_sale_config_from_metadata_price(raw, expected):
    assert SaleConfig.from_metadata({"publicSalePrice": raw}).price_per_unit == expected


def test_sale_config_from_metadata_fields():
    config = SaleConfig.from_metadata({
        "publicSalePrice": "0.02",
        "maxSalePurchasePerAddress": 10,
        "publicSaleStart": 1700000000,
        "publicSaleEnd": 1800000000,
        "presaleStart": 0,
        "presaleEnd": 0,
        "presaleMerkleRoot": "0x" + "00" * 32,
    })

    assert config.source == "static"
    assert config.price_per_unit == 2 * CENT
    assert config.max_per_address == 10
    assert config.public_sale_end == 1800000000
    assert config.presale_merkle_root == "0x" + "00" * 32


def test_sale_config_from_metadata_invalid_price():
    with pytest.raises(InvalidAmount):
        SaleConfig.from_metadata({"publicSalePrice": "cheap"})


def test_sale_config_from_contract_tuple_partial():
    config = SaleConfig.from_contract_tuple([CENT, 3])

    assert config.price_per_unit == CENT
    assert config.max_per_address == 3
    assert config.presale_merkle_root is None
    assert config.source == "live"


def test_sale_config_from_empty_contract_tuple():
    assert SaleConfig.from_contract_tuple(()) is None
