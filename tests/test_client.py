from __future__ import annotations

import pytest
from conftest import NODE_URL, DummySession

from aptree_api import (
    TESTNET_ADDRESSES,
    AptreeAddresses,
    AptreeClient,
    AptreeClientConfig,
    get_guaranteed_yield_duration,
    get_locking_duration,
)
from aptree_api.config import APTOS_TESTNET_NODE_URL
from aptree_api.constants import GuaranteedYieldTier, LockingTier
from aptree_api.exceptions import ValidationError


def test_defaults_to_testnet_deployment() -> None:
    client = AptreeClient(session=DummySession())

    assert client.addresses == TESTNET_ADDRESSES
    assert client.node_url == APTOS_TESTNET_NODE_URL
    assert not client.is_connected()


def test_addresses_from_mapping() -> None:
    client = AptreeClient({"aptree": "0x1", "moneyfi": "0x2"}, session=DummySession())
    assert client.addresses == AptreeAddresses(aptree="0x1", moneyfi="0x2")


def test_invalid_address_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        AptreeAddresses(aptree="aptree", moneyfi="0x2")
    assert exc_info.value.field == "aptree"


def test_from_config(session: DummySession) -> None:
    config = AptreeClientConfig(node_url=NODE_URL, gas_unit_price=150)
    client = AptreeClient.from_config(config, session=session)

    assert client.config.gas_unit_price == 150
    assert client.node_url == NODE_URL


def test_modules_share_address_table(client: AptreeClient) -> None:
    modules = [
        client.bridge,
        client.locking,
        client.guaranteed_yield,
        client.mock_vault,
        client.glade,
    ]
    assert all(module.addresses is client.addresses for module in modules)


def test_connect_and_disconnect(client: AptreeClient, session: DummySession) -> None:
    session.add("GET", "/", {"chain_id": 2})

    client.connect()
    assert client.is_connected()

    client.disconnect()
    assert not client.is_connected()


def test_tier_durations() -> None:
    assert get_locking_duration(LockingTier.GOLD) == 31_536_000
    assert get_guaranteed_yield_duration(1) == 2_592_000

    with pytest.raises(ValueError):
        get_locking_duration(4)
    with pytest.raises(ValueError):
        get_guaranteed_yield_duration(GuaranteedYieldTier.GOLD + 1)


def test_unknown_address_role_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        TESTNET_ADDRESSES.resolve("treasury")
    assert exc_info.value.field == "address_role"
    assert exc_info.value.value == "treasury"
