"""Time-locked AET positions (``locking`` module)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..types import (
    EmergencyUnlockPreview,
    LockPosition,
    TierConfig,
    parse_lock_positions,
)
from ..utils import parse_bool, parse_u64
from .base import ContractModule, EntryFunction, ResourceSpec, ViewFunction

_POSITION = (("user", "address"), ("position_id", "u64"))


class LockingModule(ContractModule):
    """Tiered locks with limited early withdrawal.

    ``withdraw_unlocked`` and ``emergency_unlock`` complete in a single call;
    the locking contract has no separate request step.
    """

    ENTRY_FUNCTIONS = {
        "deposit_locked": EntryFunction(
            "locking", "deposit_locked", (("amount", "u64"), ("tier", "u8"))
        ),
        "add_to_position": EntryFunction(
            "locking", "add_to_position", (("position_id", "u64"), ("amount", "u64"))
        ),
        "withdraw_early": EntryFunction(
            "locking", "withdraw_early", (("position_id", "u64"), ("amount", "u64"))
        ),
        "withdraw_unlocked": EntryFunction(
            "locking", "withdraw_unlocked", (("position_id", "u64"),)
        ),
        "emergency_unlock": EntryFunction("locking", "emergency_unlock", (("position_id", "u64"),)),
        # admin
        "set_tier_limit": EntryFunction(
            "locking", "set_tier_limit", (("tier", "u8"), ("new_limit_bps", "u64"))
        ),
        "set_locks_enabled": EntryFunction(
            "locking", "set_locks_enabled", (("enabled", "bool"),)
        ),
    }

    VIEW_FUNCTIONS = {
        "get_user_positions": ViewFunction(
            "locking", "get_user_positions", (("user", "address"),), parser=parse_lock_positions
        ),
        "get_position": ViewFunction(
            "locking", "get_position", _POSITION, parser=LockPosition.from_raw
        ),
        "get_early_withdrawal_available": ViewFunction(
            "locking", "get_early_withdrawal_available", _POSITION, parser=parse_u64
        ),
        "is_position_unlocked": ViewFunction(
            "locking", "is_position_unlocked", _POSITION, parser=parse_bool
        ),
        "get_user_total_locked_value": ViewFunction(
            "locking", "get_user_total_locked_value", (("user", "address"),), parser=parse_u64
        ),
        "get_tier_config": ViewFunction(
            "locking", "get_tier_config", (("tier", "u8"),), parser=TierConfig.from_result, arity=2
        ),
        "get_emergency_unlock_preview": ViewFunction(
            "locking",
            "get_emergency_unlock_preview",
            _POSITION,
            parser=EmergencyUnlockPreview.from_result,
            arity=2,
        ),
    }

    RESOURCES = {
        "user_lock_positions": ResourceSpec("locking", "UserLockPositions"),
        "lock_config": ResourceSpec("locking", "LockConfig"),
    }

    def get_user_positions(self, user: str) -> list[LockPosition]:
        return self._query("get_user_positions", user=user)

    def get_position(self, user: str, position_id: int) -> LockPosition:
        return self._query("get_position", user=user, position_id=position_id)

    def get_early_withdrawal_available(self, user: str, position_id: int) -> int:
        return self._query("get_early_withdrawal_available", user=user, position_id=position_id)

    def is_position_unlocked(self, user: str, position_id: int) -> bool:
        return self._query("is_position_unlocked", user=user, position_id=position_id)

    def get_user_total_locked_value(self, user: str) -> int:
        return self._query("get_user_total_locked_value", user=user)

    def get_tier_config(self, tier: int) -> TierConfig:
        """Return ``(duration_seconds, early_limit_bps)`` for a locking tier."""
        return self._query("get_tier_config", tier=tier)

    def get_emergency_unlock_preview(self, user: str, position_id: int) -> EmergencyUnlockPreview:
        return self._query("get_emergency_unlock_preview", user=user, position_id=position_id)

    def get_user_lock_positions(self, user: str) -> Mapping[str, Any]:
        return self.resource("user_lock_positions", user)

    def get_lock_config(self, config_address: str) -> Mapping[str, Any]:
        return self.resource("lock_config", config_address)
