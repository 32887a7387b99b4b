"""
Builds simulation provider payloads from transaction intents.
"""
import json
import logging
from typing import Any, Dict

from ..config import SimulationConfig
from ..exceptions import InvalidInputError, MissingField
from ..models import TransactionIntent
from ..units import to_base_units
from ..utils import require_address

logger = logging.getLogger(__name__)

SIMULATION_TYPE = "full"


def build_simulation_request(intent: TransactionIntent, config: SimulationConfig) -> Dict[str, Any]:
    """
    Validate an intent and build the provider payload for it.

    Args:
        intent: Transaction to simulate
        config: Simulation settings (network id and gas ceiling)

    Returns:
        JSON-serializable payload for the simulate endpoint

    Raises:
        MissingField: If to, from or calldata is absent
        InvalidAddress: If to or from is not a well-formed address
        InvalidAmount: If value is not a non-negative decimal in intent.unit
    """
    if not isinstance(intent, TransactionIntent):
        raise InvalidInputError(f"Intent must be a TransactionIntent, got {type(intent).__name__}")

    # Checked in a fixed order: to, from, calldata
    for field, value in (("to", intent.to), ("from", intent.from_address), ("calldata", intent.calldata)):
        if value is None or value == "":
            raise MissingField(field)

    to_address = require_address(intent.to, "to address")
    from_address = require_address(intent.from_address, "from address")
    value = to_base_units(intent.value, intent.unit)

    payload: Dict[str, Any] = {
        "network_id": config.network_id,
        "from": from_address,
        "to": to_address,
        "input": intent.calldata,
        "value": value,
        "gas": config.gas_limit,
        "save": True,
        "save_if_fails": True,
        "simulation_type": SIMULATION_TYPE,
    }
    if intent.contract_abi is not None:
        # The provider expects the ABI as a JSON string, not a nested object
        abi = intent.contract_abi
        payload["contract_abi"] = abi if isinstance(abi, str) else json.dumps(abi)

    logger.debug(f"Built {intent.kind.value} simulation request: {sanitize_for_logging(payload)}")
    return payload


def sanitize_for_logging(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of the payload that is safe and small enough to log.

    The contract ABI can be arbitrarily large, so it is replaced by its size.
    """
    if not isinstance(payload, dict):
        return {"type": str(type(payload))}

    result = payload.copy()
    if "contract_abi" in result:
        result.pop("contract_abi")
        result["contract_abi_chars"] = len(str(payload["contract_abi"]))
    return result
