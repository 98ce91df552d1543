"""Glade composite transactions: a Panora swap fused with a protocol action."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..exceptions import ValidationError
from ..types import EntryFunctionPayload, TransactionRequest
from .base import ContractModule, EntryFunction
from .swap import (
    SWAP_ARGUMENT_TYPES,
    SwapParams,
    fa_swap_type_arguments,
    marshal_swap_arguments,
    validate_swap_type_arguments,
)

logger = logging.getLogger(__name__)


class GladeModule(ContractModule):
    """Builders for ``glade_flexible``, ``glade_guaranteed`` and ``swap_helpers``.

    Every operation takes a ``swap`` keyword holding :class:`SwapParams`. Its
    19 marshaled arguments come first, followed by the operation's own
    trailing arguments. Type arguments default to the fungible-asset
    placeholders when omitted.
    """

    ENTRY_FUNCTIONS = {
        "deposit": EntryFunction(
            "glade_flexible", "deposit", (("deposit_amount", "u64"), ("provider", "u64"))
        ),
        "withdraw": EntryFunction(
            "glade_flexible", "withdraw", (("withdrawal_amount", "u64"), ("provider", "u64"))
        ),
        "deposit_guaranteed": EntryFunction(
            "glade_guaranteed",
            "deposit_guaranteed",
            (("deposit_amount", "u64"), ("tier", "u8"), ("min_aet_received", "u64")),
        ),
        "unlock_guaranteed": EntryFunction(
            "glade_guaranteed", "unlock_guaranteed", (("position_id", "u64"),)
        ),
        "emergency_unlock_guaranteed": EntryFunction(
            "glade_guaranteed", "emergency_unlock_guaranteed", (("position_id", "u64"),)
        ),
        "swap": EntryFunction("swap_helpers", "swap"),
    }

    def arguments(self, name: str, *, swap: SwapParams | None = None, **kwargs: Any) -> list[Any]:
        if not isinstance(swap, SwapParams):
            raise ValidationError(
                f"{name} requires swap parameters", field="swap", value=swap
            )
        trailing = super().arguments(name, **kwargs)
        return [*marshal_swap_arguments(swap), *trailing]

    def argument_types(self, name: str) -> list[str]:
        return [*SWAP_ARGUMENT_TYPES, *super().argument_types(name)]

    def payload(
        self, name: str, *, type_arguments: Sequence[str] | None = None, **kwargs: Any
    ) -> EntryFunctionPayload:
        return super().payload(name, type_arguments=self._type_arguments(type_arguments), **kwargs)

    def transaction(
        self,
        name: str,
        sender: str,
        *,
        type_arguments: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> TransactionRequest:
        return super().transaction(
            name, sender, type_arguments=self._type_arguments(type_arguments), **kwargs
        )

    @staticmethod
    def _type_arguments(type_arguments: Sequence[str] | None) -> list[str]:
        if type_arguments is None:
            logger.debug("No swap type arguments given; using fungible asset placeholders")
            return fa_swap_type_arguments()
        return validate_swap_type_arguments(type_arguments)
