"""Panora router swap parameters and their positional encoding."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, fields
from typing import Any

from hexbytes import HexBytes

from ..constants import FA_PLACEHOLDER_TYPE, SWAP_TYPE_ARGUMENT_COUNT
from ..exceptions import ValidationError
from ..utils import validate_type_tag

# Quote keys that differ from the field name once lower-cased
_QUOTE_ALIASES = {
    "towalletaddress": "to_wallet_address",
    "withdrawcase": "withdraw_case",
    "faaddresses": "fa_addresses",
    "fromtokenamounts": "from_token_amounts",
}

# Move type of each of the 19 marshaled slots, slot i = router arg{i+1}
SWAP_ARGUMENT_TYPES: tuple[str, ...] = (
    "0x1::option::Option<signer>",
    "address",
    "u64",
    "u8",
    "vector<u8>",
    "vector<vector<vector<u8>>>",
    "vector<vector<vector<u64>>>",
    "vector<vector<vector<bool>>>",
    "vector<vector<u8>>",
    "vector<vector<vector<address>>>",
    "vector<vector<address>>",
    "vector<vector<address>>",
    "0x1::option::Option<vector<vector<vector<vector<vector<u8>>>>>>",
    "vector<vector<vector<u64>>>",
    "0x1::option::Option<vector<vector<vector<u8>>>>",
    "address",
    "vector<u64>",
    "u64",
    "u64",
)


@dataclass(frozen=True, kw_only=True)
class SwapParams:
    """Named routing parameters for one Panora swap.

    Field ``argN`` feeds router parameter ``argN``. ``arg13`` and ``arg15``
    are Move options; ``None`` encodes ``Option::none``.
    """

    to_wallet_address: str
    arg3: int = 0
    arg4: int = 0
    arg5: bytes = b""
    arg6: Sequence[Any] = field(default_factory=list)
    arg7: Sequence[Any] = field(default_factory=list)
    arg8: Sequence[Any] = field(default_factory=list)
    withdraw_case: Sequence[Any] = field(default_factory=list)
    arg10: Sequence[Any] = field(default_factory=list)
    fa_addresses: Sequence[Any] = field(default_factory=list)
    arg12: Sequence[Any] = field(default_factory=list)
    arg13: Sequence[Any] | None = None
    arg14: Sequence[Any] = field(default_factory=list)
    arg15: Sequence[Any] | None = None
    arg16: str = "0x0"
    from_token_amounts: Sequence[Any] = field(default_factory=list)
    arg18: int = 0
    arg19: int = 0

    @classmethod
    def from_quote(cls, data: Mapping[str, Any]) -> SwapParams:
        """Build parameters from a quote mapping with camelCase or snake_case keys.

        Unknown keys such as ``optionalSigner`` are ignored.
        """

        known = {item.name for item in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            if not isinstance(key, str):
                raise ValidationError("Swap quote keys must be strings", field="quote", value=key)
            name = _QUOTE_ALIASES.get(key.replace("_", "").lower(), key)
            if name in known:
                values[name] = value

        if "to_wallet_address" not in values:
            raise ValidationError(
                "Swap quote is missing the destination wallet",
                field="to_wallet_address",
                value=dict(data),
            )

        if "arg5" in values:
            values["arg5"] = _coerce_bytes(values["arg5"])

        return cls(**values)


def marshal_swap_arguments(params: SwapParams) -> list[Any]:
    """Flatten swap parameters into the router's 19 positional arguments.

    Slot ``i`` carries router parameter ``arg{i+1}`` and has Move type
    ``SWAP_ARGUMENT_TYPES[i]``. Slot 0 is the optional signer and is always
    ``[]``.
    """

    return [
        [],
        params.to_wallet_address,
        params.arg3,
        params.arg4,
        params.arg5,
        params.arg6,
        params.arg7,
        params.arg8,
        params.withdraw_case,
        params.arg10,
        params.fa_addresses,
        params.arg12,
        [] if params.arg13 is None else params.arg13,
        params.arg14,
        [] if params.arg15 is None else params.arg15,
        params.arg16,
        params.from_token_amounts,
        params.arg18,
        params.arg19,
    ]


def validate_swap_type_arguments(type_arguments: Sequence[str]) -> list[str]:
    """Check the ``[from, T1..T30, to]`` type-argument vector."""

    if isinstance(type_arguments, str) or len(type_arguments) != SWAP_TYPE_ARGUMENT_COUNT:
        raise ValidationError(
            f"Swap requires exactly {SWAP_TYPE_ARGUMENT_COUNT} type arguments",
            field="type_arguments",
            value=type_arguments,
        )

    return [
        validate_type_tag(tag, field=f"type_arguments[{index}]")
        for index, tag in enumerate(type_arguments)
    ]


def fa_swap_type_arguments(
    from_token: str = FA_PLACEHOLDER_TYPE, to_token: str = FA_PLACEHOLDER_TYPE
) -> list[str]:
    """Type arguments for a swap between fungible assets."""

    return [from_token, *[FA_PLACEHOLDER_TYPE] * (SWAP_TYPE_ARGUMENT_COUNT - 2), to_token]


def _coerce_bytes(value: Any) -> bytes:
    if isinstance(value, list | tuple):
        try:
            return bytes(value)
        except (TypeError, ValueError) as exc:
            raise ValidationError(
                "arg5 must be a byte vector", field="arg5", value=value
            ) from exc
    try:
        return bytes(HexBytes(value))
    except (TypeError, ValueError) as exc:
        raise ValidationError("arg5 must be a byte vector", field="arg5", value=value) from exc
