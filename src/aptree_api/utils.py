"""Utility functions for the Aptree API."""

import re
from collections.abc import Sequence
from typing import Any

from hexbytes import HexBytes

from .constants import U64_MAX, U128_MAX
from .exceptions import ResultArityError, ValidationError

_ADDRESS_RE = re.compile(r"0x[0-9a-fA-F]{1,64}")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_FUNCTION_ID_RE = re.compile(r"0x[0-9a-fA-F]{1,64}::[A-Za-z_][A-Za-z0-9_]*::[A-Za-z_][A-Za-z0-9_]*")
_STRUCT_HEAD_RE = _FUNCTION_ID_RE
_DECIMAL_RE = re.compile(r"[0-9]+")

_PRIMITIVE_TYPES = frozenset(
    {"bool", "u8", "u16", "u32", "u64", "u128", "u256", "address", "signer"}
)

# The fullnode reads u8/u16/u32 as JSON numbers and wider integers as strings
_NUMBER_UINT_BITS = {"u8": 8, "u16": 16, "u32": 32}
_STRING_UINT_BITS = {"u64": 64, "u128": 128, "u256": 256}
_OPTION_RE = re.compile(r"0x0*1::option::Option<(.+)>")


# ----------------------------------------------------------------------
# Integers
# ----------------------------------------------------------------------
def parse_uint(value: Any, bits: int = 64, field: str = "value") -> int:
    """Parse a ledger unsigned integer from its decimal-string or int form."""
    if isinstance(value, bool):
        raise ValidationError("Expected an unsigned integer, got bool", field=field, value=value)

    if isinstance(value, int):
        result = value
    elif isinstance(value, str) and _DECIMAL_RE.fullmatch(value):
        result = int(value)
    else:
        raise ValidationError(
            "Expected a decimal-encoded unsigned integer", field=field, value=value
        )

    if result < 0 or result > 2**bits - 1:
        raise ValidationError(f"Value out of range for u{bits}", field=field, value=value)

    return result


def parse_u64(value: Any, field: str = "value") -> int:
    return parse_uint(value, 64, field)


def parse_u128(value: Any, field: str = "value") -> int:
    return parse_uint(value, 128, field)


def format_uint(value: int, bits: int = 128) -> str:
    """Render an unsigned integer as the decimal string the ledger uses."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Expected an integer", field="value", value=value)
    if value < 0 or value > 2**bits - 1:
        raise ValidationError(f"Value out of range for u{bits}", field="value", value=value)
    return str(int(value))


def parse_bool(value: Any, field: str = "value") -> bool:
    if not isinstance(value, bool):
        raise ValidationError("Expected a boolean", field=field, value=value)
    return value


def parse_address(value: Any, field: str = "address") -> str:
    if not isinstance(value, str) or not _ADDRESS_RE.fullmatch(value):
        raise ValidationError("Expected a 0x-prefixed account address", field=field, value=value)
    return value


# ----------------------------------------------------------------------
# Identifiers
# ----------------------------------------------------------------------
def validate_address(address: str, field: str = "address") -> str:
    """Return the address unchanged if it is a hex account address."""
    return parse_address(address, field)


def make_function_id(address: str, module: str, function: str) -> str:
    """Join an account address, module and function into a Move function id."""
    return validate_function_id(f"{address}::{module}::{function}")


def validate_function_id(function_id: str) -> str:
    if not isinstance(function_id, str) or not _FUNCTION_ID_RE.fullmatch(function_id):
        raise ValidationError(
            "Function identifier must look like <address>::<module>::<function>",
            field="function",
            value=function_id,
        )
    return function_id


def validate_type_tag(tag: str, field: str = "type_argument") -> str:
    """Check a Move type tag such as ``vector<0x1::string::String>``."""
    if not isinstance(tag, str):
        raise ValidationError("Type tag must be a string", field=field, value=tag)

    try:
        end = _parse_type_tag(tag, 0)
    except ValueError as exc:
        raise ValidationError(
            "Malformed Move type tag", field=field, value=tag, details={"position": exc.args[0]}
        ) from None

    if end != len(tag):
        raise ValidationError(
            "Malformed Move type tag", field=field, value=tag, details={"position": end}
        )
    return tag


def validate_resource_type(resource_type: str) -> str:
    """Check a fully qualified resource type, generic parameters included."""
    if not isinstance(resource_type, str) or not _STRUCT_HEAD_RE.match(resource_type):
        raise ValidationError(
            "Resource type must look like <address>::<module>::<Struct>",
            field="resource_type",
            value=resource_type,
        )
    return validate_type_tag(resource_type, field="resource_type")


def _parse_type_tag(text: str, pos: int) -> int:
    if text.startswith("vector<", pos):
        pos = _parse_type_tag(text, pos + len("vector<"))
        return _expect(text, pos, ">")

    head = _STRUCT_HEAD_RE.match(text, pos)
    if head:
        pos = head.end()
        if pos < len(text) and text[pos] == "<":
            pos = _parse_type_tag(text, pos + 1)
            while pos < len(text) and text[pos] == ",":
                pos = _skip_spaces(text, pos + 1)
                pos = _parse_type_tag(text, pos)
            pos = _expect(text, pos, ">")
        return pos

    ident = _IDENTIFIER_RE.match(text, pos)
    if ident and ident.group() in _PRIMITIVE_TYPES:
        return ident.end()

    raise ValueError(pos)


def _expect(text: str, pos: int, char: str) -> int:
    if pos >= len(text) or text[pos] != char:
        raise ValueError(pos)
    return pos + 1


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] == " ":
        pos += 1
    return pos


# ----------------------------------------------------------------------
# Wire encoding
# ----------------------------------------------------------------------
def encode_move_argument(
    value: Any, move_type: str | None = None, field: str = "argument"
) -> Any:
    """Encode a Python argument into the fullnode JSON representation.

    With a declared ``move_type`` the value takes the shape the fullnode
    decodes for that type: ``u8``/``u16``/``u32`` as JSON numbers, wider
    integers as decimal strings and ``vector<u8>`` as ``0x`` hex at any
    nesting depth. Without one, integers become decimal strings, byte
    strings become hex and sequences are encoded element by element.
    """
    if value is None:
        raise ValidationError(
            "None cannot be encoded as a Move argument; use [] for Option::none",
            field=field,
            value=value,
        )

    if move_type is not None:
        return _encode_typed(value, move_type.strip(), field)

    if isinstance(value, bool):
        return value

    if isinstance(value, int):
        if value < 0:
            raise ValidationError("Move integers are unsigned", field=field, value=value)
        return str(int(value))

    if isinstance(value, bytes | bytearray | memoryview):
        return HexBytes(value).to_0x_hex()

    if isinstance(value, str):
        return value

    if isinstance(value, Sequence):
        return [encode_move_argument(item, field=field) for item in value]

    raise ValidationError(
        f"Unsupported Move argument type: {type(value)!r}", field=field, value=value
    )


def encode_move_arguments(
    values: Sequence[Any], move_types: Sequence[str] | None = None
) -> list[Any]:
    """Encode positional arguments, by declared type when ``move_types`` is given."""
    values = list(values)
    if move_types is None:
        return [
            encode_move_argument(value, field=f"arguments[{index}]")
            for index, value in enumerate(values)
        ]

    move_types = list(move_types)
    if len(move_types) != len(values):
        raise ValidationError(
            f"Expected {len(move_types)} argument(s), got {len(values)}",
            field="arguments",
            value=values,
            details={"argument_types": move_types},
        )
    return [
        encode_move_argument(value, move_type, field=f"arguments[{index}]")
        for index, (value, move_type) in enumerate(zip(values, move_types))
    ]


def check_move_arguments(values: Sequence[Any], move_types: Sequence[str] | None = None) -> None:
    """Raise :class:`ValidationError` if any argument cannot be encoded."""
    encode_move_arguments(values, move_types)


def encode_byte_vector(value: Any, field: str = "argument") -> str:
    """Encode a ``vector<u8>`` value (bytes, hex string or list of ints) as ``0x`` hex."""
    if isinstance(value, bytes | bytearray | memoryview):
        return HexBytes(value).to_0x_hex()

    try:
        if isinstance(value, str):
            return HexBytes(value).to_0x_hex()
        if isinstance(value, list | tuple) and not any(isinstance(item, bool) for item in value):
            return HexBytes(bytes(value)).to_0x_hex()
    except (TypeError, ValueError) as exc:
        raise ValidationError("Expected a byte vector", field=field, value=value) from exc

    raise ValidationError("Expected a byte vector", field=field, value=value)


def _encode_typed(value: Any, move_type: str, field: str) -> Any:
    if value is None:
        raise ValidationError(
            f"None cannot be encoded as {move_type}", field=field, value=value
        )

    if move_type in _NUMBER_UINT_BITS:
        return parse_uint(value, _NUMBER_UINT_BITS[move_type], field)
    if move_type in _STRING_UINT_BITS:
        return str(parse_uint(value, _STRING_UINT_BITS[move_type], field))
    if move_type == "bool":
        return parse_bool(value, field)
    if move_type == "address":
        return parse_address(value, field)
    if move_type == "vector<u8>":
        return encode_byte_vector(value, field)

    if move_type.startswith("vector<") and move_type.endswith(">"):
        if isinstance(value, str | bytes) or not isinstance(value, Sequence):
            raise ValidationError(f"Expected a sequence for {move_type}", field=field, value=value)
        inner = move_type[len("vector<") : -1].strip()
        return [
            _encode_typed(item, inner, f"{field}[{index}]") for index, item in enumerate(value)
        ]

    option = _OPTION_RE.fullmatch(move_type)
    if option:
        if isinstance(value, list | tuple) and not value:
            return []
        return _encode_typed(value, option.group(1).strip(), field)

    if move_type == "signer":
        raise ValidationError("Signers cannot be passed as arguments", field=field, value=value)

    # 0x1::string::String, Object<T> and other struct arguments travel as strings
    if isinstance(value, str):
        return value

    raise ValidationError(f"Cannot encode value as {move_type}", field=field, value=value)


def expect_arity(result: Sequence[Any], expected: int, function_id: str) -> tuple[Any, ...]:
    """Return the view result as a tuple, failing if its length is unexpected."""
    values = tuple(result)
    if len(values) != expected:
        raise ResultArityError(function_id, expected, len(values), result=list(values))
    return values


__all__ = [
    "U64_MAX",
    "U128_MAX",
    "check_move_arguments",
    "encode_byte_vector",
    "encode_move_argument",
    "encode_move_arguments",
    "expect_arity",
    "format_uint",
    "make_function_id",
    "parse_address",
    "parse_bool",
    "parse_u64",
    "parse_u128",
    "parse_uint",
    "validate_address",
    "validate_function_id",
    "validate_resource_type",
    "validate_type_tag",
]
