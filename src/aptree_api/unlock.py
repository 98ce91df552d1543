"""Two-phase unlock of guaranteed-yield positions.

Unlocking is split into a request call, which asks the yield source to start
releasing funds, and a completion call, which moves the released funds to the
owner. Settlement happens off-ledger between the two. This module never
merges the two calls and only builds a completion once the caller presents a
:class:`SettlementConfirmation` for the pending request.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

from .exceptions import UnlockSequenceError
from .modules.glade import GladeModule
from .modules.guaranteed_yield import GuaranteedYieldModule
from .modules.swap import SwapParams
from .types import EntryFunctionPayload, TransactionRequest
from .utils import parse_u64

logger = logging.getLogger(__name__)


class UnlockPath(Enum):
    MATURED = "matured"
    EMERGENCY = "emergency"


class UnlockPhase(Enum):
    REQUESTED = "requested"
    COMPLETED = "completed"


@dataclass(frozen=True)
class PendingUnlock:
    """Ticket tracking one position through the unlock sequence."""

    position_id: int
    path: UnlockPath
    phase: UnlockPhase = UnlockPhase.REQUESTED


@dataclass(frozen=True)
class SettlementConfirmation:
    """Caller-supplied evidence that a requested release has settled."""

    position_id: int
    path: UnlockPath
    reference: str | None = None


_REQUEST_OPERATIONS = {
    UnlockPath.MATURED: "request_unlock_guaranteed",
    UnlockPath.EMERGENCY: "request_emergency_unlock_guaranteed",
}
_WITHDRAW_OPERATIONS = {
    UnlockPath.MATURED: "withdraw_guaranteed",
    UnlockPath.EMERGENCY: "withdraw_emergency_guaranteed",
}
_SWAP_OPERATIONS = {
    UnlockPath.MATURED: "unlock_guaranteed",
    UnlockPath.EMERGENCY: "emergency_unlock_guaranteed",
}


class UnlockProtocol:
    """Builds the request and completion calls of a guaranteed-yield unlock."""

    def __init__(self, guaranteed_yield: GuaranteedYieldModule, glade: GladeModule):
        self._guaranteed_yield = guaranteed_yield
        self._glade = glade

    def check_unlockable(self, owner: str, position_id: int) -> bool:
        """Whether the position has matured, as reported by the ledger."""
        return self._guaranteed_yield.is_position_unlockable(owner, position_id)

    # ------------------------------------------------------------------
    # Request phase
    # ------------------------------------------------------------------
    def request(
        self, position_id: int, path: UnlockPath = UnlockPath.MATURED
    ) -> tuple[PendingUnlock, EntryFunctionPayload]:
        pending = self._new_ticket(position_id, path)
        payload = self._guaranteed_yield.payload(
            _REQUEST_OPERATIONS[pending.path], position_id=pending.position_id
        )
        return pending, payload

    def request_transaction(
        self, sender: str, position_id: int, path: UnlockPath = UnlockPath.MATURED
    ) -> tuple[PendingUnlock, TransactionRequest]:
        pending = self._new_ticket(position_id, path)
        transaction = self._guaranteed_yield.transaction(
            _REQUEST_OPERATIONS[pending.path], sender, position_id=pending.position_id
        )
        return pending, transaction

    # ------------------------------------------------------------------
    # Completion phase
    # ------------------------------------------------------------------
    def complete(
        self,
        pending: PendingUnlock,
        confirmation: SettlementConfirmation,
        swap: SwapParams | None = None,
        type_arguments: Sequence[str] | None = None,
    ) -> tuple[PendingUnlock, EntryFunctionPayload]:
        """Build the completion payload for a settled request.

        Without ``swap`` this is the direct ``withdraw_*`` call. With ``swap``
        it is the Glade composite that unlocks and swaps the proceeds.
        """

        self._check_completion(pending, confirmation)
        if swap is None:
            payload = self._guaranteed_yield.payload(
                _WITHDRAW_OPERATIONS[pending.path], position_id=pending.position_id
            )
        else:
            payload = self._glade.payload(
                _SWAP_OPERATIONS[pending.path],
                swap=swap,
                position_id=pending.position_id,
                type_arguments=type_arguments,
            )
        return replace(pending, phase=UnlockPhase.COMPLETED), payload

    def complete_transaction(
        self,
        sender: str,
        pending: PendingUnlock,
        confirmation: SettlementConfirmation,
        swap: SwapParams | None = None,
        type_arguments: Sequence[str] | None = None,
    ) -> tuple[PendingUnlock, TransactionRequest]:
        self._check_completion(pending, confirmation)
        if swap is None:
            transaction = self._guaranteed_yield.transaction(
                _WITHDRAW_OPERATIONS[pending.path], sender, position_id=pending.position_id
            )
        else:
            transaction = self._glade.transaction(
                _SWAP_OPERATIONS[pending.path],
                sender,
                swap=swap,
                position_id=pending.position_id,
                type_arguments=type_arguments,
            )
        return replace(pending, phase=UnlockPhase.COMPLETED), transaction

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _new_ticket(position_id: int, path: UnlockPath) -> PendingUnlock:
        if not isinstance(path, UnlockPath):
            raise UnlockSequenceError("Unknown unlock path", field="path", value=path)

        pending = PendingUnlock(position_id=parse_u64(position_id, "position_id"), path=path)
        logger.debug("Unlock requested for position %s (%s)", pending.position_id, path.value)
        return pending

    @staticmethod
    def _check_completion(pending: PendingUnlock, confirmation: SettlementConfirmation) -> None:
        if pending.phase is not UnlockPhase.REQUESTED:
            raise UnlockSequenceError(
                "Unlock is not awaiting completion",
                field="phase",
                value=pending.phase.value,
                details={"position_id": pending.position_id},
            )

        if not isinstance(confirmation, SettlementConfirmation):
            raise UnlockSequenceError(
                "Completing an unlock requires a settlement confirmation",
                field="confirmation",
                value=confirmation,
            )

        if confirmation.position_id != pending.position_id or confirmation.path is not pending.path:
            raise UnlockSequenceError(
                "Settlement confirmation does not match the pending unlock",
                field="confirmation",
                value=confirmation,
                details={"position_id": pending.position_id, "path": pending.path.value},
            )

        logger.debug(
            "Completing %s unlock for position %s", pending.path.value, pending.position_id
        )
