"""Configuration containers for the Aptree client."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .exceptions import ValidationError
from .utils import validate_address

APTOS_TESTNET_NODE_URL = "https://fullnode.testnet.aptoslabs.com/v1"
APTOS_MAINNET_NODE_URL = "https://fullnode.mainnet.aptoslabs.com/v1"

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_MAX_GAS_AMOUNT = 200_000
DEFAULT_GAS_UNIT_PRICE = 100
DEFAULT_EXPIRATION_TTL = 600


@dataclass(frozen=True)
class AptreeAddresses:
    """Account addresses under which the Aptree modules are published."""

    aptree: str
    moneyfi: str

    def __post_init__(self) -> None:
        validate_address(self.aptree, field="aptree")
        validate_address(self.moneyfi, field="moneyfi")

    def resolve(self, role: str) -> str:
        """Return the address for an address role (``aptree`` or ``moneyfi``)."""

        if role == "aptree":
            return self.aptree
        if role == "moneyfi":
            return self.moneyfi
        raise ValidationError(
            f"Unknown address role: {role}",
            field="address_role",
            value=role,
            details={"known": ["aptree", "moneyfi"]},
        )


TESTNET_ADDRESSES = AptreeAddresses(
    aptree="0x7609a1f4fffae8048bf48d7ba740fab64d7b30ec463512bb9b2fd45645b1326b",
    moneyfi="0xd4b0e499b766905e4da6633aa10cef52e0ffb98054ef76a9a97ea80b486782ca",
)


@dataclass(frozen=True)
class AptreeClientConfig:
    """Aggregated configuration used to construct the Aptree client."""

    addresses: AptreeAddresses = TESTNET_ADDRESSES
    node_url: str | None = None
    testnet: bool = True
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_gas_amount: int = DEFAULT_MAX_GAS_AMOUNT
    gas_unit_price: int = DEFAULT_GAS_UNIT_PRICE
    expiration_ttl: int = DEFAULT_EXPIRATION_TTL
    chain_id: int | None = None

    def with_defaulted_urls(self) -> AptreeClientConfig:
        """Return a copy with the fullnode URL defaulted from the network selection."""

        if self.node_url is None:
            node_url = APTOS_TESTNET_NODE_URL if self.testnet else APTOS_MAINNET_NODE_URL
        else:
            node_url = self.node_url.rstrip("/")

        return replace(self, node_url=node_url)
