"""Type definitions and data models for the Aptree API."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .exceptions import ValidationError
from .utils import encode_move_arguments, parse_address, parse_u64, parse_u128, parse_uint

Address = str  # 0x-prefixed Aptos account address
TypeTag = str  # Move type tag, e.g. "0x1::string::String"


@dataclass(frozen=True)
class EntryFunctionPayload:
    """Network-independent description of one entry-function call.

    ``argument_types`` holds the declared Move type of each argument and
    selects its wire shape. When it is ``None`` the arguments are encoded
    without type information.
    """

    function: str
    arguments: list[Any] = field(default_factory=list)
    type_arguments: list[TypeTag] = field(default_factory=list)
    argument_types: list[TypeTag] | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the payload in the fullnode JSON representation."""

        return {
            "type": "entry_function_payload",
            "function": self.function,
            "type_arguments": list(self.type_arguments),
            "arguments": encode_move_arguments(self.arguments, self.argument_types),
        }


@dataclass(frozen=True)
class TransactionRequest:
    """Unsigned transaction assembled against the ledger state at build time."""

    sender: Address
    sequence_number: int
    max_gas_amount: int
    gas_unit_price: int
    expiration_timestamp_secs: int
    chain_id: int
    payload: EntryFunctionPayload

    def as_dict(self) -> dict[str, Any]:
        """Return the unsigned ``SubmitTransactionRequest`` body."""

        return {
            "sender": self.sender,
            "sequence_number": str(self.sequence_number),
            "max_gas_amount": str(self.max_gas_amount),
            "gas_unit_price": str(self.gas_unit_price),
            "expiration_timestamp_secs": str(self.expiration_timestamp_secs),
            "payload": self.payload.as_dict(),
        }


@dataclass(frozen=True)
class PositionRef:
    """Identifies one lock position held by an owner."""

    owner: Address
    position_id: int


# ----------------------------------------------------------------------
# View function results
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class TierConfig:
    """Result of ``locking::get_tier_config``."""

    duration_seconds: int
    early_limit_bps: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "TierConfig":
        duration, limit = result
        return cls(
            duration_seconds=parse_u64(duration, "duration_seconds"),
            early_limit_bps=parse_u64(limit, "early_limit_bps"),
        )


@dataclass(frozen=True)
class GuaranteedTierConfig:
    """Result of ``GuaranteedYieldLocking::get_tier_config``."""

    duration_seconds: int
    yield_bps: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "GuaranteedTierConfig":
        duration, yield_bps = result
        return cls(
            duration_seconds=parse_u64(duration, "duration_seconds"),
            yield_bps=parse_u64(yield_bps, "yield_bps"),
        )


@dataclass(frozen=True)
class EmergencyUnlockPreview:
    payout: int
    forfeited: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "EmergencyUnlockPreview":
        payout, forfeited = result
        return cls(payout=parse_u64(payout, "payout"), forfeited=parse_u64(forfeited, "forfeited"))


@dataclass(frozen=True)
class GuaranteedEmergencyUnlockPreview:
    payout: int
    yield_forfeited: int
    cashback_clawback: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "GuaranteedEmergencyUnlockPreview":
        payout, yield_forfeited, cashback_clawback = result
        return cls(
            payout=parse_u64(payout, "payout"),
            yield_forfeited=parse_u64(yield_forfeited, "yield_forfeited"),
            cashback_clawback=parse_u64(cashback_clawback, "cashback_clawback"),
        )


@dataclass(frozen=True)
class ProtocolStats:
    """Protocol-wide totals reported by ``get_protocol_stats``."""

    total_locked_principal: int
    total_aet_held: int
    total_cashback_paid: int
    total_yield_to_treasury: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "ProtocolStats":
        locked, aet, cashback, treasury = result
        return cls(
            total_locked_principal=parse_u64(locked, "total_locked_principal"),
            total_aet_held=parse_u64(aet, "total_aet_held"),
            total_cashback_paid=parse_u64(cashback, "total_cashback_paid"),
            total_yield_to_treasury=parse_u64(treasury, "total_yield_to_treasury"),
        )


@dataclass(frozen=True)
class DepositorStateView:
    deposited: int
    pending_withdrawal: int

    @classmethod
    def from_result(cls, result: Sequence[Any]) -> "DepositorStateView":
        deposited, pending = result
        return cls(
            deposited=parse_u64(deposited, "deposited"),
            pending_withdrawal=parse_u64(pending, "pending_withdrawal"),
        )


# ----------------------------------------------------------------------
# On-chain structs
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class LockPosition:
    """On-chain struct ``locking::LockPosition``."""

    position_id: int
    tier: int
    principal: int
    aet_amount: int
    entry_share_price: int
    created_at: int
    unlock_at: int
    early_withdrawal_used: int

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "LockPosition":
        _require_mapping(data, "LockPosition")
        return cls(
            position_id=parse_u64(data.get("position_id"), "position_id"),
            tier=parse_uint(data.get("tier"), 8, "tier"),
            principal=parse_u64(data.get("principal"), "principal"),
            aet_amount=parse_u64(data.get("aet_amount"), "aet_amount"),
            entry_share_price=parse_u128(data.get("entry_share_price"), "entry_share_price"),
            created_at=parse_u64(data.get("created_at"), "created_at"),
            unlock_at=parse_u64(data.get("unlock_at"), "unlock_at"),
            early_withdrawal_used=parse_u64(
                data.get("early_withdrawal_used"), "early_withdrawal_used"
            ),
        )


@dataclass(frozen=True)
class GuaranteedLockPosition:
    """On-chain struct ``GuaranteedYieldLocking::GuaranteedLockPosition``."""

    position_id: int
    tier: int
    principal: int
    aet_amount: int
    cashback_paid: int
    guaranteed_yield_bps: int
    created_at: int
    unlock_at: int

    @classmethod
    def from_raw(cls, data: Mapping[str, Any]) -> "GuaranteedLockPosition":
        _require_mapping(data, "GuaranteedLockPosition")
        return cls(
            position_id=parse_u64(data.get("position_id"), "position_id"),
            tier=parse_uint(data.get("tier"), 8, "tier"),
            principal=parse_u64(data.get("principal"), "principal"),
            aet_amount=parse_u64(data.get("aet_amount"), "aet_amount"),
            cashback_paid=parse_u64(data.get("cashback_paid"), "cashback_paid"),
            guaranteed_yield_bps=parse_u64(
                data.get("guaranteed_yield_bps"), "guaranteed_yield_bps"
            ),
            created_at=parse_u64(data.get("created_at"), "created_at"),
            unlock_at=parse_u64(data.get("unlock_at"), "unlock_at"),
        )


def parse_lock_positions(raw: Any) -> list[LockPosition]:
    return [LockPosition.from_raw(item) for item in _require_list(raw, "positions")]


def parse_guaranteed_positions(raw: Any) -> list[GuaranteedLockPosition]:
    return [GuaranteedLockPosition.from_raw(item) for item in _require_list(raw, "positions")]


def parse_address_result(raw: Any) -> str:
    return parse_address(raw, "result")


def _require_mapping(data: Any, name: str) -> None:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{name} must be a JSON object", field=name, value=data)


def _require_list(data: Any, name: str) -> list[Any]:
    if not isinstance(data, list):
        raise ValidationError(f"{name} must be a JSON array", field=name, value=data)
    return data
