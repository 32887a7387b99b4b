"""
Node RPC access: transaction receipts and live contract reads.
"""
import logging
from typing import Optional, Union

import requests
from pydantic import ValidationError
from web3 import Web3
from web3.exceptions import Web3Exception

from ..config import ChainConfig
from ..exceptions import TransportError
from ..models import SaleConfig, TxReceipt
from ..utils import normalize_tx_hash, require_address, to_jsonable, validate_endpoint_url

# salesConfig() of a Zora ERC721 drop
SALES_CONFIG_ABI = [
    {
        "inputs": [],
        "name": "salesConfig",
        "outputs": [
            {"internalType": "uint104", "name": "publicSalePrice", "type": "uint104"},
            {"internalType": "uint32", "name": "maxSalePurchasePerAddress", "type": "uint32"},
            {"internalType": "uint64", "name": "publicSaleStart", "type": "uint64"},
            {"internalType": "uint64", "name": "publicSaleEnd", "type": "uint64"},
            {"internalType": "uint64", "name": "presaleStart", "type": "uint64"},
            {"internalType": "uint64", "name": "presaleEnd", "type": "uint64"},
            {"internalType": "bytes32", "name": "presaleMerkleRoot", "type": "bytes32"}
        ],
        "stateMutability": "view",
        "type": "function"
    }
]

_NODE_ERRORS = (Web3Exception, requests.RequestException, ValueError)


class NodeClient:
    """Thin wrapper around a web3 HTTP provider."""

    def __init__(
        self,
        config: ChainConfig,
        w3: Optional[Web3] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the NodeClient

        Args:
            config: Chain settings holding the RPC URL
            w3: Optional pre-built Web3 instance (the RPC URL is then not required)
            logger: Optional logger instance

        Raises:
            MisconfiguredError: If no Web3 is given and the RPC URL is missing or insecure
        """
        self.logger = logger or logging.getLogger(__name__)
        if w3 is None:
            rpc_url = validate_endpoint_url("RPC URL", config.rpc_url, config.allow_insecure_http)
            w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": config.timeout}))
        self.w3 = w3

    def get_transaction_receipt(self, tx_hash: Union[str, bytes]) -> TxReceipt:
        """
        Fetch and convert the receipt of a mined transaction.

        Args:
            tx_hash: Transaction hash, with or without the 0x prefix

        Returns:
            TxReceipt model

        Raises:
            InvalidInputError: If tx_hash is not a 32-byte hash
            TransportError: If the node call fails or the receipt cannot be decoded
        """
        tx_hash = normalize_tx_hash(tx_hash)
        self.logger.debug(f"Fetching receipt for {tx_hash}")
        try:
            receipt = self.w3.eth.get_transaction_receipt(tx_hash)
        except _NODE_ERRORS as e:
            self.logger.error(f"Failed to fetch receipt for {tx_hash}: {e}")
            raise TransportError(f"Failed to fetch receipt for {tx_hash}: {e}") from e

        return self._convert_receipt(receipt)

    def _convert_receipt(self, web3_receipt) -> TxReceipt:
        """
        Convert a Web3 receipt to our TxReceipt model

        Raises:
            TransportError: If the receipt does not have the expected shape
        """
        try:
            return TxReceipt.model_validate(to_jsonable(web3_receipt))
        except ValidationError as e:
            raise TransportError(f"Malformed transaction receipt: {e}") from e

    def read_sale_config(self, address: str) -> Optional[SaleConfig]:
        """
        Read the live sales configuration of a deployed drop contract.

        Args:
            address: Drop contract address

        Returns:
            SaleConfig with source "live", or None if the call returned nothing

        Raises:
            InvalidAddress: If address is malformed
            TransportError: If the contract call fails
        """
        address = require_address(address, "token address")
        try:
            contract = self.w3.eth.contract(
                address=Web3.to_checksum_address(address),
                abi=SALES_CONFIG_ABI
            )
            values = contract.functions.salesConfig().call()
        except _NODE_ERRORS as e:
            self.logger.warning(f"salesConfig() call failed for {address}: {e}")
            raise TransportError(f"salesConfig() call failed for {address}: {e}") from e

        return SaleConfig.from_contract_tuple(values)
