"""
Property-based tests for the govtx SDK.

These tests verify that properties hold true across many random inputs.
"""
import re
from decimal import Decimal

from hypothesis import given, settings, strategies as st

from govtx_sdk.exceptions import InvalidAddress
from govtx_sdk.units import Unit, to_base_units, to_display_units
from govtx_sdk.utils import is_address, require_address


def decimal_strings(max_places):
    """Non-negative decimal strings with at most max_places fractional digits"""
    whole = st.integers(min_value=0, max_value=10**24).map(str)
    fraction = st.text(alphabet="0123456789", min_size=0, max_size=max_places)
    return st.tuples(whole, fraction).map(lambda parts: f"{parts[0]}.{parts[1]}" if parts[1] else parts[0])


@settings(max_examples=200)
@given(amount=decimal_strings(18))
def test_ether_round_trip(amount):
    """Converting to wei and back yields the same number in canonical form"""
    result = to_display_units(to_base_units(amount, Unit.ETHER), Unit.ETHER)
    assert Decimal(result) == Decimal(amount)
    # Canonical: no trailing fractional zeros, no exponent
    assert "e" not in result.lower()
    assert not ("." in result and result.endswith("0"))


@settings(max_examples=200)
@given(amount=decimal_strings(12))
def test_spark_round_trip(amount):
    result = to_display_units(to_base_units(amount, Unit.SPARK), Unit.SPARK)
    assert Decimal(result) == Decimal(amount)


@given(base=st.integers(min_value=0, max_value=10**40))
def test_base_round_trip(base):
    assert to_base_units(to_display_units(base, Unit.ETHER), Unit.ETHER) == str(base)


@given(body=st.from_regex(r"[0-9a-fA-F]{40}", fullmatch=True), prefixed=st.booleans())
def test_well_formed_addresses_accepted(body, prefixed):
    address = f"0x{body}" if prefixed else body
    assert is_address(address)
    assert require_address(address) == f"0x{body}"


@given(text=st.text(max_size=60))
def test_malformed_addresses_rejected(text):
    """InvalidAddress is raised exactly when the text is not 40 hex chars after an optional 0x"""
    well_formed = re.fullmatch(r"(0x)?[0-9a-fA-F]{40}", text) is not None
    if well_formed:
        assert require_address(text)
    else:
        try:
            require_address(text)
        except InvalidAddress:
            pass
        else:
            raise AssertionError(f"{text!r} should have been rejected")
