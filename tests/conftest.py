"""
Pytest fixtures for the govtx SDK tests.
"""
import time
from unittest.mock import MagicMock

import pytest

from govtx_sdk._rate_limited_log import reset_rate_limits
from govtx_sdk.config import ChainConfig, GovernanceConfig, SimulationConfig

# Constants for testing
TEST_ACCOUNT = "gnars"
TEST_PROJECT = "governance"
TEST_ACCESS_KEY = "test-access-key"
TEST_SIMULATE_URL = "https://api.tenderly.co/api/v1/account/gnars/project/governance/simulate"
TEST_EXPLORER_URL = "https://api.basescan.org/api"
TEST_RPC_URL = "https://rpc.example.com"
TEST_GOVERNOR = "0x3dd4e53a232b7b715c9ae455f4e732465ed71b4c"
TEST_FROM = "0x72ad986ebac0246d2b3c565ab2a1ce3a14ce6f88"
TEST_TO = "0x1234567890123456789012345678901234567890"
TEST_TOKEN = "0xCAFE000000000000000000000000000000000001"
TEST_TX_HASH = "0x" + "ab" * 32
TEST_DESCRIPTION_HASH = "0x" + "5e" * 32


@pytest.fixture(autouse=True)
def _fast_sleep(monkeypatch):
    """Make time.sleep instantaneous so polling tests don't slow the suite down"""
    monkeypatch.setattr(time, "sleep", lambda *_a, **_kw: None)


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def simulation_config():
    return SimulationConfig(
        account_slug=TEST_ACCOUNT,
        project_slug=TEST_PROJECT,
        access_key=TEST_ACCESS_KEY,
    )


@pytest.fixture
def chain_config():
    return ChainConfig(
        rpc_url=TEST_RPC_URL,
        explorer_api_url=TEST_EXPLORER_URL,
        explorer_api_key="explorer-key",
    )


@pytest.fixture
def governance_config(simulation_config, chain_config):
    return GovernanceConfig(simulation=simulation_config, chain=chain_config)


def make_log(
    tx_hash=TEST_TX_HASH,
    block_number=100,
    log_index=0,
    data="0x",
    topics=None,
    address=TEST_GOVERNOR,
):
    """Build an explorer-style log entry (hex quantities, as the API returns them)"""
    return {
        "address": address,
        "topics": topics or ["0x7b1bcf1ccf901a11589afff5504d59fd0a53780eed2a952adade0348985139e0"],
        "data": data,
        "blockNumber": hex(block_number),
        "logIndex": hex(log_index),
        "transactionHash": tx_hash,
        "timeStamp": "0x65f1a2b3",
    }


def make_receipt(tx_hash=TEST_TX_HASH, log_addresses=(TEST_TOKEN,), status=1):
    """Build a web3-style receipt dict with HexBytes-like byte values"""
    return {
        "transactionHash": bytes.fromhex(tx_hash[2:]),
        "blockNumber": 12345,
        "blockHash": bytes.fromhex("abcdef1234567890" * 4),
        "status": status,
        "gasUsed": 850000,
        "from": TEST_FROM,
        "to": TEST_GOVERNOR,
        "contractAddress": None,
        "logs": [
            {
                "address": address,
                "topics": [bytes.fromhex("11" * 32)],
                "data": bytes.fromhex("00" * 32),
                "logIndex": index,
                "blockNumber": 12345,
                "transactionHash": bytes.fromhex(tx_hash[2:]),
            }
            for index, address in enumerate(log_addresses)
        ],
    }


@pytest.fixture
def mock_w3():
    """Mock Web3 instance whose eth namespace returns a receipt with one token log"""
    w3 = MagicMock()
    w3.eth.get_transaction_receipt = MagicMock(return_value=make_receipt())
    return w3
