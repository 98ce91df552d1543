"""Example: Walk a guaranteed-yield position through the two-phase unlock."""

from __future__ import annotations

import json
import logging
import os

from dotenv import load_dotenv

from aptree_api import AptreeClient, SettlementConfirmation, UnlockPath

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger("guaranteed_unlock")


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} not found in environment variables")
    return value


def main() -> None:
    owner = _require_env("APTOS_ACCOUNT")
    position_id = int(_require_env("POSITION_ID"))
    emergency = os.getenv("EMERGENCY_UNLOCK", "false").lower() == "true"
    path = UnlockPath.EMERGENCY if emergency else UnlockPath.MATURED

    client = AptreeClient(node_url=os.getenv("APTOS_NODE_URL"))
    client.connect()
    try:
        position = client.guaranteed_yield.get_guaranteed_position(owner, position_id)
        logger.info("Position %s: %s", position_id, position)

        if path is UnlockPath.MATURED and not client.unlocks.check_unlockable(owner, position_id):
            logger.error("Position %s has not matured yet", position_id)
            return

        if path is UnlockPath.EMERGENCY:
            preview = client.guaranteed_yield.get_emergency_unlock_preview(owner, position_id)
            logger.info("Emergency unlock preview: %s", preview)

        pending, request_txn = client.unlocks.request_transaction(owner, position_id, path)
        logger.info("Sign and submit the unlock request:")
        print(json.dumps(request_txn.as_dict(), indent=2))

        reference = input("Settlement reference once the release has settled: ").strip()
        confirmation = SettlementConfirmation(position_id, path, reference or None)

        completed, withdraw_txn = client.unlocks.complete_transaction(
            owner, pending, confirmation
        )
        logger.info("Unlock %s; sign and submit the withdrawal:", completed.phase.value)
        print(json.dumps(withdraw_txn.as_dict(), indent=2))
    finally:
        client.disconnect()
        logger.info("Disconnected")


if __name__ == "__main__":
    main()
