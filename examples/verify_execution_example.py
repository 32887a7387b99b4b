#!/usr/bin/env python3
"""
Find the transaction that executed a drop proposal and price a collect.
"""
import logging
import os

from govtx_sdk import GovernanceClient, GovernanceConfig, GovTxError, MatchQuery, SaleConfig


def main():
    """
    Demonstrate verifying a proposal execution on-chain.

    This example shows how to:
    1. Poll the explorer for the governor's execution log
    2. Read the created drop contract from the receipt
    3. Quote the cost of collecting tokens from it
    """
    logging.basicConfig(level=logging.INFO)

    GOVERNOR = os.environ.get("GOVERNOR_ADDRESS", "0x3dd4e53a232b7b715c9ae455f4e732465ed71b4c")
    FROM_BLOCK = int(os.environ.get("FROM_BLOCK", "0"))
    DESCRIPTION_HASH = os.environ.get("PROPOSAL_DESCRIPTION_HASH")
    QUANTITY = int(os.environ.get("QUANTITY", "1"))

    config = GovernanceConfig.from_env()
    if not config.chain.rpc_url:
        print("ERROR: GOVTX_RPC_URL environment variable is required")
        return

    client = GovernanceClient(config)
    query = MatchQuery(contract_address=GOVERNOR, from_block=FROM_BLOCK, content_hash=DESCRIPTION_HASH)

    try:
        resolution = client.wait_for_execution(query, attempts=5, interval=10)
    except GovTxError as e:
        print(f"Error resolving execution: {e}")
        return

    if not resolution.found:
        print("Proposal has not been executed yet")
        return

    print(f"Executed in transaction {resolution.matched.hash}")
    print(f"  Explorer: {client.tx_url(resolution.matched.hash)}")
    print(f"  Block number: {resolution.receipt.block_number}")
    print(f"  Status: {'Success' if resolution.receipt.succeeded else 'Failed'}")
    print(f"  Created contract: {resolution.created_contract}")

    # Price from the proposal's own metadata, used if the contract can't be read
    static = SaleConfig.from_metadata({"publicSalePrice": os.environ.get("PUBLIC_SALE_PRICE", "0")})
    quote = client.quote_for_token(resolution.created_contract, static, QUANTITY)
    if quote.live_error:
        print(f"  Live price unavailable: {quote.live_error}")
    print(f"Collecting {quote.quantity} token(s) costs {quote.total_ether} ETH ({quote.price_source} price)")


if __name__ == "__main__":
    main()
