"""Example: Build a bridge deposit and read the MoneyFi adapter state."""

from __future__ import annotations

import json
import logging
import os

from dotenv import load_dotenv

from aptree_api import AptreeClient

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("bridge_deposit")

DEFAULT_AMOUNT = 100_000_000


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


def main() -> None:
    sender = _require_env("APTOS_ACCOUNT")
    node_url = os.getenv("APTOS_NODE_URL")
    testnet = os.getenv("APTREE_TESTNET", "true").lower() != "false"
    amount = int(os.getenv("DEPOSIT_AMOUNT", str(DEFAULT_AMOUNT)))

    client = AptreeClient(node_url=node_url, testnet=testnet)
    client.connect()
    try:
        logger.info("Supported token: %s", client.bridge.get_supported_token())
        logger.info("LP price: %s", client.bridge.get_lp_price())
        logger.info("Pool estimated value: %s", client.bridge.get_pool_estimated_value())

        txn = client.bridge.transaction("deposit", sender, amount=amount, provider=0)
        logger.info("Unsigned deposit transaction for %s", sender)
        print(json.dumps(txn.as_dict(), indent=2))
    finally:
        client.disconnect()
        logger.info("Disconnected")


if __name__ == "__main__":
    main()
