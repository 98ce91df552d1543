"""Golden-value tests for every entry function in the protocol tables."""

from __future__ import annotations

from typing import Any

import pytest
from conftest import APTREE, MONEYFI, SENDER, DummySession

from aptree_api import AptreeClient
from aptree_api.exceptions import ValidationError
from aptree_api.modules import BridgeModule, GuaranteedYieldModule, LockingModule, MockVaultModule

GY = "GuaranteedYieldLocking"
TREASURY = "0x7ea5"

GOLDEN: list[tuple[str, str, dict[str, Any], str, list[Any]]] = [
    # bridge
    ("bridge", "deposit", {"amount": 100, "provider": 0}, f"{APTREE}::bridge::deposit", [100, 0]),
    (
        "bridge",
        "request",
        {"amount": 100, "min_amount": 95},
        f"{APTREE}::bridge::request",
        [100, 95],
    ),
    ("bridge", "withdraw", {"amount": 100, "provider": 1}, f"{APTREE}::bridge::withdraw", [100, 1]),
    ("bridge", "adapter_deposit", {"amount": 7}, f"{APTREE}::moneyfi_adapter::deposit", [7]),
    (
        "bridge",
        "adapter_request",
        {"amount": 50_000_000, "min_share_price": 900_000_000},
        f"{APTREE}::moneyfi_adapter::request",
        [50000000, 900000000],
    ),
    ("bridge", "adapter_withdraw", {"amount": 7}, f"{APTREE}::moneyfi_adapter::withdraw", [7]),
    # locking
    (
        "locking",
        "deposit_locked",
        {"amount": 1_000, "tier": 3},
        f"{APTREE}::locking::deposit_locked",
        [1_000, 3],
    ),
    (
        "locking",
        "add_to_position",
        {"position_id": 4, "amount": 10},
        f"{APTREE}::locking::add_to_position",
        [4, 10],
    ),
    (
        "locking",
        "withdraw_early",
        {"position_id": 4, "amount": 10},
        f"{APTREE}::locking::withdraw_early",
        [4, 10],
    ),
    (
        "locking",
        "withdraw_unlocked",
        {"position_id": 4},
        f"{APTREE}::locking::withdraw_unlocked",
        [4],
    ),
    (
        "locking",
        "emergency_unlock",
        {"position_id": 4},
        f"{APTREE}::locking::emergency_unlock",
        [4],
    ),
    (
        "locking",
        "set_tier_limit",
        {"tier": 2, "new_limit_bps": 300},
        f"{APTREE}::locking::set_tier_limit",
        [2, 300],
    ),
    (
        "locking",
        "set_locks_enabled",
        {"enabled": False},
        f"{APTREE}::locking::set_locks_enabled",
        [False],
    ),
    # guaranteed yield
    (
        "guaranteed_yield",
        "deposit_guaranteed",
        {"amount": 500, "tier": 4, "min_aet_received": 490},
        f"{APTREE}::{GY}::deposit_guaranteed",
        [500, 4, 490],
    ),
    (
        "guaranteed_yield",
        "request_unlock_guaranteed",
        {"position_id": 9},
        f"{APTREE}::{GY}::request_unlock_guaranteed",
        [9],
    ),
    (
        "guaranteed_yield",
        "withdraw_guaranteed",
        {"position_id": 9},
        f"{APTREE}::{GY}::withdraw_guaranteed",
        [9],
    ),
    (
        "guaranteed_yield",
        "request_emergency_unlock_guaranteed",
        {"position_id": 9},
        f"{APTREE}::{GY}::request_emergency_unlock_guaranteed",
        [9],
    ),
    (
        "guaranteed_yield",
        "withdraw_emergency_guaranteed",
        {"position_id": 9},
        f"{APTREE}::{GY}::withdraw_emergency_guaranteed",
        [9],
    ),
    (
        "guaranteed_yield",
        "fund_cashback_vault",
        {"amount": 1},
        f"{APTREE}::{GY}::fund_cashback_vault",
        [1],
    ),
    (
        "guaranteed_yield",
        "set_tier_yield",
        {"tier": 1, "new_yield_bps": 40},
        f"{APTREE}::{GY}::set_tier_yield",
        [1, 40],
    ),
    (
        "guaranteed_yield",
        "set_treasury",
        {"new_treasury": TREASURY},
        f"{APTREE}::{GY}::set_treasury",
        [TREASURY],
    ),
    (
        "guaranteed_yield",
        "set_deposits_enabled",
        {"enabled": True},
        f"{APTREE}::{GY}::set_deposits_enabled",
        [True],
    ),
    (
        "guaranteed_yield",
        "admin_withdraw_cashback_vault",
        {"amount": 2},
        f"{APTREE}::{GY}::admin_withdraw_cashback_vault",
        [2],
    ),
    (
        "guaranteed_yield",
        "propose_admin",
        {"new_admin": TREASURY},
        f"{APTREE}::{GY}::propose_admin",
        [TREASURY],
    ),
    ("guaranteed_yield", "accept_admin", {}, f"{APTREE}::{GY}::accept_admin", []),
    (
        "guaranteed_yield",
        "set_max_total_locked",
        {"new_max": 10**12},
        f"{APTREE}::{GY}::set_max_total_locked",
        [10**12],
    ),
    (
        "guaranteed_yield",
        "set_min_deposit",
        {"new_min": 1_000_000},
        f"{APTREE}::{GY}::set_min_deposit",
        [1_000_000],
    ),
    # mock vault
    (
        "mock_vault",
        "deposit",
        {"token": "0x70c", "amount": 3},
        f"{MONEYFI}::vault::deposit",
        ["0x70c", 3],
    ),
    (
        "mock_vault",
        "request_withdraw",
        {"token": "0x70c", "amount": 3},
        f"{MONEYFI}::vault::request_withdraw",
        ["0x70c", 3],
    ),
    (
        "mock_vault",
        "withdraw_requested_amount",
        {"token": "0x70c"},
        f"{MONEYFI}::vault::withdraw_requested_amount",
        ["0x70c"],
    ),
    (
        "mock_vault",
        "set_yield_multiplier",
        {"multiplier_bps": 10_500},
        f"{MONEYFI}::vault::set_yield_multiplier",
        [10_500],
    ),
    (
        "mock_vault",
        "simulate_yield",
        {"yield_bps": 100},
        f"{MONEYFI}::vault::simulate_yield",
        [100],
    ),
    (
        "mock_vault",
        "simulate_loss",
        {"loss_bps": 50},
        f"{MONEYFI}::vault::simulate_loss",
        [50],
    ),
    ("mock_vault", "reset_vault", {}, f"{MONEYFI}::vault::reset_vault", []),
    (
        "mock_vault",
        "set_total_deposits",
        {"amount": 0},
        f"{MONEYFI}::vault::set_total_deposits",
        [0],
    ),
]

MODULES = {
    "bridge": BridgeModule,
    "locking": LockingModule,
    "guaranteed_yield": GuaranteedYieldModule,
    "mock_vault": MockVaultModule,
}


@pytest.mark.parametrize(
    ("module", "operation", "kwargs", "function", "arguments"),
    GOLDEN,
    ids=[f"{row[0]}.{row[1]}" for row in GOLDEN],
)
def test_payload_matches_declared_signature(
    client: AptreeClient,
    module: str,
    operation: str,
    kwargs: dict[str, Any],
    function: str,
    arguments: list[Any],
) -> None:
    payload = getattr(client, module).payload(operation, **kwargs)

    assert payload.function == function
    assert payload.arguments == arguments
    assert payload.type_arguments == []


@pytest.mark.parametrize(
    ("module", "operation", "kwargs", "function", "arguments"),
    GOLDEN,
    ids=[f"{row[0]}.{row[1]}" for row in GOLDEN],
)
def test_transaction_matches_payload(
    connected_client: AptreeClient,
    session: DummySession,
    module: str,
    operation: str,
    kwargs: dict[str, Any],
    function: str,
    arguments: list[Any],
) -> None:
    builder = getattr(connected_client, module)
    txn = builder.transaction(operation, SENDER, **kwargs)

    assert txn.payload == builder.payload(operation, **kwargs)
    assert len(session.calls) == 1


def test_every_operation_has_a_golden_row() -> None:
    covered = {(module, operation) for module, operation, *_ in GOLDEN}
    declared = {
        (name, operation) for name, cls in MODULES.items() for operation in cls.operations()
    }
    assert covered == declared


def test_request_withdrawal_scenario(client: AptreeClient) -> None:
    payload = client.bridge.payload("adapter_request", amount=50_000_000, min_share_price=900_000_000)

    assert payload.as_dict() == {
        "type": "entry_function_payload",
        "function": f"{APTREE}::moneyfi_adapter::request",
        "type_arguments": [],
        "arguments": ["50000000", "900000000"],
    }


def test_deposit_locked_sends_tier_as_number(client: AptreeClient) -> None:
    payload = client.locking.payload("deposit_locked", amount=100_000_000, tier=3)

    assert payload.as_dict() == {
        "type": "entry_function_payload",
        "function": f"{APTREE}::locking::deposit_locked",
        "type_arguments": [],
        "arguments": ["100000000", 3],
    }


def test_deposit_guaranteed_sends_tier_as_number(client: AptreeClient) -> None:
    payload = client.guaranteed_yield.payload(
        "deposit_guaranteed", amount=500, tier=3, min_aet_received=490
    )

    assert payload.argument_types == ["u64", "u8", "u64"]
    assert payload.as_dict()["arguments"] == ["500", 3, "490"]


def test_transaction_body_keeps_tier_as_number(connected_client: AptreeClient) -> None:
    txn = connected_client.locking.transaction("set_tier_limit", SENDER, tier=2, new_limit_bps=150)

    assert txn.as_dict()["payload"]["arguments"] == [2, "150"]


def test_decimal_strings_are_parsed(client: AptreeClient) -> None:
    payload = client.locking.payload("deposit_locked", amount="18446744073709551615", tier="1")
    assert payload.arguments == [18446744073709551615, 1]


def test_keyword_order_does_not_matter(client: AptreeClient) -> None:
    first = client.bridge.payload("request", amount=1, min_amount=2)
    second = client.bridge.payload("request", min_amount=2, amount=1)
    assert first == second


def test_non_numeric_amount_raises(client: AptreeClient) -> None:
    with pytest.raises(ValidationError) as exc_info:
        client.bridge.payload("deposit", amount="ten", provider=0)
    assert exc_info.value.field == "amount"


def test_tier_out_of_u8_range_raises(client: AptreeClient) -> None:
    with pytest.raises(ValidationError):
        client.locking.payload("deposit_locked", amount=1, tier=256)


def test_bool_parameter_rejects_int(client: AptreeClient) -> None:
    with pytest.raises(ValidationError):
        client.locking.payload("set_locks_enabled", enabled=1)


def test_address_parameter_validated(client: AptreeClient) -> None:
    with pytest.raises(ValidationError):
        client.guaranteed_yield.payload("set_treasury", new_treasury="treasury")


def test_missing_keyword_raises(client: AptreeClient) -> None:
    with pytest.raises(ValidationError) as exc_info:
        client.bridge.payload("deposit", amount=1)
    assert exc_info.value.details["missing"] == ["provider"]


def test_unexpected_keyword_raises(client: AptreeClient) -> None:
    with pytest.raises(ValidationError) as exc_info:
        client.bridge.payload("deposit", amount=1, provider=0, slippage=5)
    assert exc_info.value.details["unexpected"] == ["slippage"]


def test_unknown_operation_raises(client: AptreeClient) -> None:
    with pytest.raises(ValidationError, match="Unknown operation"):
        client.bridge.payload("stake", amount=1)


def test_identifiers_follow_address_table(session: DummySession) -> None:
    client = AptreeClient({"aptree": "0x1", "moneyfi": "0x2"}, session=session)

    assert client.bridge.function_id("deposit") == "0x1::bridge::deposit"
    assert client.mock_vault.function_id("deposit") == "0x2::vault::deposit"
