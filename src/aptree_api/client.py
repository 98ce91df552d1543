"""Client facade wiring the Aptree protocol modules to one fullnode."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import requests

from .config import (
    DEFAULT_EXPIRATION_TTL,
    DEFAULT_GAS_UNIT_PRICE,
    DEFAULT_MAX_GAS_AMOUNT,
    DEFAULT_REQUEST_TIMEOUT,
    TESTNET_ADDRESSES,
    AptreeAddresses,
    AptreeClientConfig,
)
from .ledger import CallBuilder, LedgerConnections
from .modules import (
    BridgeModule,
    GladeModule,
    GuaranteedYieldModule,
    LockingModule,
    MockVaultModule,
)
from .types import EntryFunctionPayload, TransactionRequest
from .unlock import UnlockProtocol

logger = logging.getLogger(__name__)


class AptreeClient:
    """Entry point for building Aptree transactions and reading protocol state.

    Example:
        client = AptreeClient(testnet=True)
        client.connect()
        txn = client.bridge.transaction("deposit", sender, amount=100_000_000, provider=0)
    """

    def __init__(
        self,
        addresses: AptreeAddresses | Mapping[str, str] | None = None,
        *,
        node_url: str | None = None,
        testnet: bool = True,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT,
        gas_unit_price: int = DEFAULT_GAS_UNIT_PRICE,
        expiration_ttl: int = DEFAULT_EXPIRATION_TTL,
        chain_id: int | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if addresses is None:
            addresses = TESTNET_ADDRESSES
        elif not isinstance(addresses, AptreeAddresses):
            addresses = AptreeAddresses(aptree=addresses["aptree"], moneyfi=addresses["moneyfi"])

        config = AptreeClientConfig(
            addresses=addresses,
            node_url=node_url,
            testnet=testnet,
            request_timeout=request_timeout,
            max_gas_amount=max_gas_amount,
            gas_unit_price=gas_unit_price,
            expiration_ttl=expiration_ttl,
            chain_id=chain_id,
        )
        self._setup(config, session)

    @classmethod
    def from_config(
        cls, config: AptreeClientConfig, session: requests.Session | None = None
    ) -> AptreeClient:
        client = cls.__new__(cls)
        client._setup(config, session)
        return client

    def _setup(self, config: AptreeClientConfig, session: requests.Session | None) -> None:
        self._connections = LedgerConnections(config, session)
        self._config = self._connections.config
        self._calls = CallBuilder(self._connections)

        addresses = self._config.addresses
        self.bridge = BridgeModule(self._calls, addresses)
        self.locking = LockingModule(self._calls, addresses)
        self.guaranteed_yield = GuaranteedYieldModule(self._calls, addresses)
        self.mock_vault = MockVaultModule(self._calls, addresses)
        self.glade = GladeModule(self._calls, addresses)
        self.unlocks = UnlockProtocol(self.guaranteed_yield, self.glade)
        logger.debug(
            "Aptree client configured for %s (aptree=%s, moneyfi=%s)",
            self._connections.node_url,
            addresses.aptree,
            addresses.moneyfi,
        )

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    def connect(self) -> None:
        self._connections.connect()

    def disconnect(self) -> None:
        self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    @property
    def config(self) -> AptreeClientConfig:
        return self._config

    @property
    def addresses(self) -> AptreeAddresses:
        return self._config.addresses

    @property
    def node_url(self) -> str:
        return self._connections.node_url

    # ------------------------------------------------------------------
    # Raw ledger access
    # ------------------------------------------------------------------
    def build_transaction(
        self,
        sender: str,
        function_id: str,
        args: Sequence[Any],
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> TransactionRequest:
        return self._calls.build_transaction(sender, function_id, args, type_args, arg_types)

    def build_payload(
        self,
        function_id: str,
        args: Sequence[Any],
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> EntryFunctionPayload:
        return self._calls.build_payload(function_id, args, type_args, arg_types)

    def view(
        self,
        function_id: str,
        args: Sequence[Any] | None = None,
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> tuple[Any, ...]:
        return self._calls.view(function_id, args, type_args, arg_types)

    def get_resource(self, owner: str, resource_type: str) -> Mapping[str, Any]:
        return self._calls.get_resource(owner, resource_type)
