"""
Utility functions for the govtx SDK.
"""
import re
import urllib.parse
from typing import Any, Optional, Union

from web3 import Web3

from .exceptions import InvalidAddress, InvalidInputError, MisconfiguredError

ADDRESS_PATTERN = re.compile(r"(0x)?[0-9a-fA-F]{40}")
HASH32_PATTERN = re.compile(r"[0-9a-f]{64}")

# topic0 of the ProposalExecuted event emitted by the DAO governor
PROPOSAL_EXECUTED_TOPIC = "0x7b1bcf1ccf901a11589afff5504d59fd0a53780eed2a952adade0348985139e0"

LOCAL_HOSTS = ("localhost", "127.0.0.1", "::1")


def is_address(value: Any) -> bool:
    """Return True if value is 40 hex characters after an optional 0x prefix."""
    return isinstance(value, str) and bool(ADDRESS_PATTERN.fullmatch(value))


def require_address(value: Any, field: str = "address") -> str:
    """
    Validate a chain address and return it in 0x-prefixed form.

    Checksum casing is preserved; it is not verified.

    Raises:
        InvalidAddress: If value is not a well-formed address
    """
    if not is_address(value):
        raise InvalidAddress(f"Invalid {field}: {value!r}")
    return value if value.startswith("0x") else f"0x{value}"


def normalize_hash32(value: Union[str, bytes], field: str = "hash") -> str:
    """
    Normalize a 32-byte hash to lowercase 0x-prefixed hex.

    Accepts raw bytes, or hex strings with or without the 0x prefix.

    Raises:
        InvalidInputError: If value is not 32 bytes of hex
    """
    if isinstance(value, (bytes, bytearray)):
        candidate = bytes(value).hex()
    elif isinstance(value, str):
        candidate = value.strip().lower()
        if candidate.startswith("0x"):
            candidate = candidate[2:]
    else:
        raise InvalidInputError(f"{field} must be a hex string, got {type(value).__name__}")

    if not HASH32_PATTERN.fullmatch(candidate):
        raise InvalidInputError(f"{field} must be 32 bytes of hex, got {value!r}")
    return f"0x{candidate}"


def normalize_tx_hash(tx_hash: Union[str, bytes]) -> str:
    """Return the canonical 0x-prefixed form of a transaction hash."""
    return normalize_hash32(tx_hash, "transaction hash")


def event_topic(signature: str) -> str:
    """Compute the topic0 hash of an event signature, e.g. ``Transfer(address,address,uint256)``."""
    return Web3.to_hex(Web3.keccak(text=signature))


def hex_words(data: Optional[str]) -> list:
    """Split ABI-encoded hex data into lowercase 32-byte words (without 0x)."""
    if not data:
        return []
    body = data[2:] if data.startswith("0x") else data
    body = body.lower()
    return [body[i:i + 64] for i in range(0, len(body) - len(body) % 64, 64)]


def to_jsonable(value: Any) -> Any:
    """
    Recursively convert web3 return values into plain JSON-friendly types.

    Bytes (including HexBytes) become 0x-prefixed hex strings and
    AttributeDicts become dicts.
    """
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if hasattr(value, "items"):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def validate_endpoint_url(name: str, url: Optional[str], allow_insecure: bool = False) -> str:
    """
    Validate that a service endpoint is present and uses https.

    Plain http is only accepted for local hosts, or when allow_insecure is set.

    Raises:
        MisconfiguredError: If the URL is missing, unparsable or insecure
    """
    if not url:
        raise MisconfiguredError(f"{name} is not configured")
    try:
        parsed = urllib.parse.urlparse(url)
        host = parsed.hostname or ""
    except ValueError as e:
        raise MisconfiguredError(f"Invalid {name} '{url}': {e}") from e

    if parsed.scheme not in ("http", "https") or not host:
        raise MisconfiguredError(f"Invalid {name} '{url}'")
    if parsed.scheme != "https" and host not in LOCAL_HOSTS and not allow_insecure:
        raise MisconfiguredError(
            f"{name} must use https:// for security (got: {parsed.scheme}://)"
        )
    return url.rstrip("/")
