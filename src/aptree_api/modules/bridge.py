"""Bridge and MoneyFi adapter operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..types import parse_address_result
from ..utils import parse_u64
from .base import ContractModule, EntryFunction, ResourceSpec, ViewFunction


class BridgeModule(ContractModule):
    """Deposits into and withdrawals from the AET bridge."""

    ENTRY_FUNCTIONS = {
        "deposit": EntryFunction("bridge", "deposit", (("amount", "u64"), ("provider", "u64"))),
        "request": EntryFunction("bridge", "request", (("amount", "u64"), ("min_amount", "u64"))),
        "withdraw": EntryFunction("bridge", "withdraw", (("amount", "u64"), ("provider", "u64"))),
        "adapter_deposit": EntryFunction("moneyfi_adapter", "deposit", (("amount", "u64"),)),
        "adapter_request": EntryFunction(
            "moneyfi_adapter", "request", (("amount", "u64"), ("min_share_price", "u64"))
        ),
        "adapter_withdraw": EntryFunction("moneyfi_adapter", "withdraw", (("amount", "u64"),)),
    }

    VIEW_FUNCTIONS = {
        "get_supported_token": ViewFunction(
            "moneyfi_adapter", "get_supported_token", parser=parse_address_result
        ),
        "get_lp_price": ViewFunction("moneyfi_adapter", "get_lp_price", parser=parse_u64),
        "get_pool_estimated_value": ViewFunction(
            "moneyfi_adapter", "get_pool_estimated_value", parser=parse_u64
        ),
    }

    RESOURCES = {
        "bridge_state": ResourceSpec("bridge", "State"),
        "moneyfi_bridge_state": ResourceSpec("moneyfi_adapter", "BridgeState"),
        "reserve_state": ResourceSpec("moneyfi_adapter", "ReserveState"),
        "withdrawal_token_state": ResourceSpec("moneyfi_adapter", "BridgeWithdrawalTokenState"),
    }

    def get_supported_token(self) -> str:
        return self._query("get_supported_token")

    def get_lp_price(self) -> int:
        return self._query("get_lp_price")

    def get_pool_estimated_value(self) -> int:
        return self._query("get_pool_estimated_value")

    def get_bridge_state(self, address: str) -> Mapping[str, Any]:
        return self.resource("bridge_state", address)

    def get_moneyfi_bridge_state(self, address: str) -> Mapping[str, Any]:
        return self.resource("moneyfi_bridge_state", address)

    def get_reserve_state(self, address: str) -> Mapping[str, Any]:
        return self.resource("reserve_state", address)

    def get_withdrawal_token_state(self, address: str) -> Mapping[str, Any]:
        return self.resource("withdrawal_token_state", address)
