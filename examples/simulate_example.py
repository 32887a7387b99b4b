#!/usr/bin/env python3
"""
Simulate a governance proposal transaction before it goes to a vote.
"""
import logging
import os

from govtx_sdk import GovernanceClient, GovernanceConfig, GovTxError, TransactionIntent


def main():
    """
    Demonstrate simulating proposal transactions.

    This example shows how to:
    1. Load configuration from the environment
    2. Simulate a treasury transfer
    3. Simulate a contract call with explicit calldata
    """
    logging.basicConfig(level=logging.INFO)

    # Treasury and recipient of the proposal
    TREASURY = os.environ.get("DAO_TREASURY_ADDRESS", "0x72ad986ebac0246d2b3c565ab2a1ce3a14ce6f88")
    RECIPIENT = os.environ.get("RECIPIENT_ADDRESS")

    if not RECIPIENT:
        print("ERROR: RECIPIENT_ADDRESS environment variable is required")
        return

    config = GovernanceConfig.from_env()
    client = GovernanceClient(config)

    intents = [
        # 0.5 ETH from the treasury
        TransactionIntent.send_value(TREASURY, RECIPIENT, "0.5"),
        # Contract call; value is given in wei
        TransactionIntent.contract_call(TREASURY, RECIPIENT, calldata="0x", value="0"),
    ]

    for intent in intents:
        try:
            outcome = client.simulate(intent)
        except GovTxError as e:
            print(f"Error simulating {intent.kind.value}: {e}")
            continue

        print(f"{intent.kind.value}: {outcome.message}")
        print(f"  Simulation id: {outcome.simulation_id}")
        print(f"  Dashboard: {outcome.dashboard_url}")


if __name__ == "__main__":
    main()
