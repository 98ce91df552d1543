"""Guaranteed-yield positions (``GuaranteedYieldLocking`` module)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..types import (
    GuaranteedEmergencyUnlockPreview,
    GuaranteedLockPosition,
    GuaranteedTierConfig,
    ProtocolStats,
    parse_address_result,
    parse_guaranteed_positions,
)
from ..utils import parse_bool, parse_u64
from .base import ContractModule, EntryFunction, ResourceSpec, ViewFunction

MODULE = "GuaranteedYieldLocking"

_POSITION_ID = (("position_id", "u64"),)
_POSITION = (("user", "address"), ("position_id", "u64"))
_TIER = (("tier", "u8"),)


def _entry(function: str, *params: tuple[str, str]) -> EntryFunction:
    return EntryFunction(MODULE, function, params)


def _view(
    function: str, *params: tuple[str, str], parser: Any = None, arity: int = 1
) -> ViewFunction:
    return ViewFunction(MODULE, function, params, parser=parser, arity=arity)


class GuaranteedYieldModule(ContractModule):
    """Fixed-yield locks paid as upfront cashback.

    Unlocking is two-phase: ``request_unlock_guaranteed`` asks the vault to
    release funds and ``withdraw_guaranteed`` collects them once the release
    has settled. The emergency path mirrors this with its own pair of calls.
    See :mod:`aptree_api.unlock` for the enforced sequencing.
    """

    ENTRY_FUNCTIONS = {
        "deposit_guaranteed": _entry(
            "deposit_guaranteed", ("amount", "u64"), ("tier", "u8"), ("min_aet_received", "u64")
        ),
        "request_unlock_guaranteed": _entry("request_unlock_guaranteed", *_POSITION_ID),
        "withdraw_guaranteed": _entry("withdraw_guaranteed", *_POSITION_ID),
        "request_emergency_unlock_guaranteed": _entry(
            "request_emergency_unlock_guaranteed", *_POSITION_ID
        ),
        "withdraw_emergency_guaranteed": _entry("withdraw_emergency_guaranteed", *_POSITION_ID),
        "fund_cashback_vault": _entry("fund_cashback_vault", ("amount", "u64")),
        # admin
        "set_tier_yield": _entry("set_tier_yield", ("tier", "u8"), ("new_yield_bps", "u64")),
        "set_treasury": _entry("set_treasury", ("new_treasury", "address")),
        "set_deposits_enabled": _entry("set_deposits_enabled", ("enabled", "bool")),
        "admin_withdraw_cashback_vault": _entry("admin_withdraw_cashback_vault", ("amount", "u64")),
        "propose_admin": _entry("propose_admin", ("new_admin", "address")),
        "accept_admin": _entry("accept_admin"),
        "set_max_total_locked": _entry("set_max_total_locked", ("new_max", "u64")),
        "set_min_deposit": _entry("set_min_deposit", ("new_min", "u64")),
    }

    VIEW_FUNCTIONS = {
        "get_user_guaranteed_positions": _view(
            "get_user_guaranteed_positions", ("user", "address"), parser=parse_guaranteed_positions
        ),
        "get_guaranteed_position": _view(
            "get_guaranteed_position", *_POSITION, parser=GuaranteedLockPosition.from_raw
        ),
        "get_tier_guaranteed_yield": _view("get_tier_guaranteed_yield", *_TIER, parser=parse_u64),
        "get_tier_duration": _view("get_tier_duration", *_TIER, parser=parse_u64),
        "calculate_cashback": _view(
            "calculate_cashback", ("amount", "u64"), ("tier", "u8"), parser=parse_u64
        ),
        "get_cashback_vault_balance": _view("get_cashback_vault_balance", parser=parse_u64),
        "get_protocol_stats": _view(
            "get_protocol_stats", parser=ProtocolStats.from_result, arity=4
        ),
        "is_position_unlockable": _view("is_position_unlockable", *_POSITION, parser=parse_bool),
        "get_tier_config": _view(
            "get_tier_config", *_TIER, parser=GuaranteedTierConfig.from_result, arity=2
        ),
        "get_treasury": _view("get_treasury", parser=parse_address_result),
        "are_deposits_enabled": _view("are_deposits_enabled", parser=parse_bool),
        "get_emergency_unlock_preview": _view(
            "get_emergency_unlock_preview",
            *_POSITION,
            parser=GuaranteedEmergencyUnlockPreview.from_result,
            arity=3,
        ),
        "get_max_total_locked": _view("get_max_total_locked", parser=parse_u64),
        "get_min_deposit": _view("get_min_deposit", parser=parse_u64),
    }

    RESOURCES = {
        "user_guaranteed_positions": ResourceSpec(MODULE, "UserGuaranteedPositions"),
    }

    def get_user_guaranteed_positions(self, user: str) -> list[GuaranteedLockPosition]:
        return self._query("get_user_guaranteed_positions", user=user)

    def get_guaranteed_position(self, user: str, position_id: int) -> GuaranteedLockPosition:
        return self._query("get_guaranteed_position", user=user, position_id=position_id)

    def get_tier_guaranteed_yield(self, tier: int) -> int:
        """Guaranteed yield of a tier in basis points."""
        return self._query("get_tier_guaranteed_yield", tier=tier)

    def get_tier_duration(self, tier: int) -> int:
        return self._query("get_tier_duration", tier=tier)

    def calculate_cashback(self, amount: int, tier: int) -> int:
        return self._query("calculate_cashback", amount=amount, tier=tier)

    def get_cashback_vault_balance(self) -> int:
        return self._query("get_cashback_vault_balance")

    def get_protocol_stats(self) -> ProtocolStats:
        return self._query("get_protocol_stats")

    def is_position_unlockable(self, user: str, position_id: int) -> bool:
        return self._query("is_position_unlockable", user=user, position_id=position_id)

    def get_tier_config(self, tier: int) -> GuaranteedTierConfig:
        return self._query("get_tier_config", tier=tier)

    def get_treasury(self) -> str:
        return self._query("get_treasury")

    def are_deposits_enabled(self) -> bool:
        return self._query("are_deposits_enabled")

    def get_emergency_unlock_preview(
        self, user: str, position_id: int
    ) -> GuaranteedEmergencyUnlockPreview:
        """Preview ``(payout, yield_forfeited, cashback_clawback)`` of an emergency unlock."""
        return self._query("get_emergency_unlock_preview", user=user, position_id=position_id)

    def get_max_total_locked(self) -> int:
        return self._query("get_max_total_locked")

    def get_min_deposit(self) -> int:
        return self._query("get_min_deposit")

    def get_user_guaranteed_positions_resource(self, user: str) -> Mapping[str, Any]:
        return self.resource("user_guaranteed_positions", user)
