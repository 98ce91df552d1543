"""Test vault standing in for the MoneyFi provider (``vault`` module)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..types import DepositorStateView, parse_address_result
from ..utils import parse_u64
from .base import ContractModule, EntryFunction, ResourceSpec, ViewFunction


def _entry(function: str, *params: tuple[str, str]) -> EntryFunction:
    return EntryFunction("vault", function, params, address="moneyfi")


class MockVaultModule(ContractModule):
    ENTRY_FUNCTIONS = {
        "deposit": _entry("deposit", ("token", "address"), ("amount", "u64")),
        "request_withdraw": _entry("request_withdraw", ("token", "address"), ("amount", "u64")),
        "withdraw_requested_amount": _entry("withdraw_requested_amount", ("token", "address")),
        # admin and simulation
        "set_yield_multiplier": _entry("set_yield_multiplier", ("multiplier_bps", "u64")),
        "simulate_yield": _entry("simulate_yield", ("yield_bps", "u64")),
        "simulate_loss": _entry("simulate_loss", ("loss_bps", "u64")),
        "reset_vault": _entry("reset_vault"),
        "set_total_deposits": _entry("set_total_deposits", ("amount", "u64")),
    }

    VIEW_FUNCTIONS = {
        "estimate_total_fund_value": ViewFunction(
            "vault",
            "estimate_total_fund_value",
            (("depositor", "address"), ("token", "address")),
            parser=parse_u64,
            address="moneyfi",
        ),
        "get_vault_address": ViewFunction(
            "vault", "get_vault_address", parser=parse_address_result, address="moneyfi"
        ),
        "get_yield_multiplier": ViewFunction(
            "vault", "get_yield_multiplier", parser=parse_u64, address="moneyfi"
        ),
        "get_total_deposits": ViewFunction(
            "vault", "get_total_deposits", parser=parse_u64, address="moneyfi"
        ),
        "get_pending_withdrawals": ViewFunction(
            "vault", "get_pending_withdrawals", parser=parse_u64, address="moneyfi"
        ),
        "get_depositor_state": ViewFunction(
            "vault",
            "get_depositor_state",
            (("depositor", "address"),),
            parser=DepositorStateView.from_result,
            arity=2,
            address="moneyfi",
        ),
    }

    RESOURCES = {
        "mock_vault_state": ResourceSpec("vault", "MockVaultState", address="moneyfi"),
        "depositor_state": ResourceSpec("vault", "DepositorState", address="moneyfi"),
    }

    def estimate_total_fund_value(self, depositor: str, token: str) -> int:
        return self._query("estimate_total_fund_value", depositor=depositor, token=token)

    def get_vault_address(self) -> str:
        return self._query("get_vault_address")

    def get_yield_multiplier(self) -> int:
        return self._query("get_yield_multiplier")

    def get_total_deposits(self) -> int:
        return self._query("get_total_deposits")

    def get_pending_withdrawals(self) -> int:
        return self._query("get_pending_withdrawals")

    def get_depositor_state(self, depositor: str) -> DepositorStateView:
        return self._query("get_depositor_state", depositor=depositor)

    def get_mock_vault_state(self, address: str) -> Mapping[str, Any]:
        return self.resource("mock_vault_state", address)

    def get_depositor_state_resource(self, depositor: str) -> Mapping[str, Any]:
        return self.resource("depositor_state", depositor)
