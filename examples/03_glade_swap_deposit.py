"""Example: Swap a fungible asset and deposit the proceeds in one transaction."""

from __future__ import annotations

import json
import logging
import os

from dotenv import load_dotenv

from aptree_api import AptreeClient, SwapParams, fa_swap_type_arguments

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("glade_swap_deposit")

DEFAULT_SWAP_AMOUNT = 100_000_000


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


def main() -> None:
    sender = _require_env("APTOS_ACCOUNT")
    from_token = _require_env("FROM_TOKEN_METADATA")
    amount = int(os.getenv("SWAP_AMOUNT", str(DEFAULT_SWAP_AMOUNT)))

    swap = SwapParams(
        to_wallet_address=sender,
        withdraw_case=[[1]],
        fa_addresses=[[from_token]],
        from_token_amounts=[amount],
    )

    client = AptreeClient(node_url=os.getenv("APTOS_NODE_URL"))
    client.connect()
    try:
        txn = client.glade.transaction(
            "deposit",
            sender,
            swap=swap,
            deposit_amount=amount,
            provider=0,
            type_arguments=fa_swap_type_arguments(),
        )
        logger.info("Glade deposit with %d arguments", len(txn.payload.arguments))
        print(json.dumps(txn.as_dict(), indent=2))
    finally:
        client.disconnect()
        logger.info("Disconnected")


if __name__ == "__main__":
    main()
