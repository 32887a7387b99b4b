"""
On-chain module for the govtx SDK.

Locates the transaction that executed a proposal, fetches its receipt and
reads live contract state.
"""
from .explorer import ExplorerClient
from .node import NodeClient, SALES_CONFIG_ABI
from .resolver import ExecutionResolver, log_contains_hash, wait_for_execution

__all__ = [
    'ExecutionResolver',
    'ExplorerClient',
    'NodeClient',
    'SALES_CONFIG_ABI',
    'log_contains_hash',
    'wait_for_execution',
]
