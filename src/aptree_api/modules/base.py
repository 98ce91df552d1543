"""Table-driven building blocks shared by the protocol modules."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from ..config import AptreeAddresses
from ..exceptions import ValidationError
from ..ledger.calls import CallBuilder
from ..types import EntryFunctionPayload, TransactionRequest
from ..utils import expect_arity, make_function_id, parse_address, parse_bool, parse_uint

logger = logging.getLogger(__name__)

Param = tuple[str, str]  # (keyword name, Move type)

_UINT_BITS = {"u8": 8, "u16": 16, "u32": 32, "u64": 64, "u128": 128, "u256": 256}


@dataclass(frozen=True)
class EntryFunction:
    """One entry function: where it lives and the order of its parameters."""

    module: str
    function: str
    params: tuple[Param, ...] = ()
    address: str = "aptree"


@dataclass(frozen=True)
class ViewFunction:
    """One view function plus the parser applied to its result tuple.

    With ``arity == 1`` the parser receives the single returned value,
    otherwise it receives the whole tuple.
    """

    module: str
    function: str
    params: tuple[Param, ...] = ()
    parser: Callable[[Any], Any] | None = None
    arity: int = 1
    address: str = "aptree"


@dataclass(frozen=True)
class ResourceSpec:
    module: str
    struct: str
    address: str = "aptree"


def coerce_argument(value: Any, move_type: str, field: str) -> Any:
    """Normalise a keyword argument to the Python value for its Move type."""

    if move_type in _UINT_BITS:
        return parse_uint(value, _UINT_BITS[move_type], field)
    if move_type == "bool":
        return parse_bool(value, field)
    if move_type == "address":
        return parse_address(value, field)
    return value


def order_arguments(name: str, params: Sequence[Param], kwargs: Mapping[str, Any]) -> list[Any]:
    """Map keyword arguments onto the declared positional order."""

    declared = [param for param, _ in params]
    missing = [param for param in declared if param not in kwargs]
    unexpected = sorted(set(kwargs) - set(declared))
    if missing or unexpected:
        raise ValidationError(
            f"Invalid arguments for {name}",
            field=name,
            value=dict(kwargs),
            details={"missing": missing, "unexpected": unexpected, "expected": declared},
        )

    return [coerce_argument(kwargs[param], move_type, param) for param, move_type in params]


class ContractModule:
    """Generic builder for one protocol, driven by its declarative tables."""

    ENTRY_FUNCTIONS: ClassVar[Mapping[str, EntryFunction]] = {}
    VIEW_FUNCTIONS: ClassVar[Mapping[str, ViewFunction]] = {}
    RESOURCES: ClassVar[Mapping[str, ResourceSpec]] = {}

    def __init__(self, calls: CallBuilder, addresses: AptreeAddresses):
        self._calls = calls
        self._addresses = addresses

    @property
    def addresses(self) -> AptreeAddresses:
        return self._addresses

    @classmethod
    def operations(cls) -> list[str]:
        return list(cls.ENTRY_FUNCTIONS)

    # ------------------------------------------------------------------
    # Entry functions
    # ------------------------------------------------------------------
    def function_id(self, name: str) -> str:
        entry = self._lookup(self.ENTRY_FUNCTIONS, name, "operation")
        return make_function_id(
            self._addresses.resolve(entry.address), entry.module, entry.function
        )

    def arguments(self, name: str, **kwargs: Any) -> list[Any]:
        entry = self._lookup(self.ENTRY_FUNCTIONS, name, "operation")
        return order_arguments(name, entry.params, kwargs)

    def argument_types(self, name: str) -> list[str]:
        """Declared Move types of the arguments of operation ``name``, in order."""

        entry = self._lookup(self.ENTRY_FUNCTIONS, name, "operation")
        return [move_type for _, move_type in entry.params]

    def payload(
        self, name: str, *, type_arguments: Sequence[str] | None = None, **kwargs: Any
    ) -> EntryFunctionPayload:
        """Build the local payload for operation ``name``."""

        return self._calls.build_payload(
            self.function_id(name),
            self.arguments(name, **kwargs),
            type_arguments,
            self.argument_types(name),
        )

    def transaction(
        self,
        name: str,
        sender: str,
        *,
        type_arguments: Sequence[str] | None = None,
        **kwargs: Any,
    ) -> TransactionRequest:
        """Build an unsigned transaction for operation ``name`` sent by ``sender``."""

        return self._calls.build_transaction(
            sender,
            self.function_id(name),
            self.arguments(name, **kwargs),
            type_arguments,
            self.argument_types(name),
        )

    # ------------------------------------------------------------------
    # Views and resources
    # ------------------------------------------------------------------
    def view_id(self, name: str) -> str:
        view = self._lookup(self.VIEW_FUNCTIONS, name, "view")
        return make_function_id(self._addresses.resolve(view.address), view.module, view.function)

    def resource_type(self, name: str) -> str:
        spec = self._lookup(self.RESOURCES, name, "resource")
        return f"{self._addresses.resolve(spec.address)}::{spec.module}::{spec.struct}"

    def resource(self, name: str, owner: str) -> Mapping[str, Any]:
        """Read resource ``name`` stored at ``owner``."""

        return self._calls.get_resource(owner, self.resource_type(name))

    def _query(self, name: str, **kwargs: Any) -> Any:
        view = self._lookup(self.VIEW_FUNCTIONS, name, "view")
        function_id = self.view_id(name)
        arguments = order_arguments(name, view.params, kwargs)
        arg_types = [move_type for _, move_type in view.params]

        result = self._calls.view(function_id, arguments, arg_types=arg_types)
        values = expect_arity(result, view.arity, function_id)
        if view.parser is None:
            return values[0] if view.arity == 1 else values
        return view.parser(values[0] if view.arity == 1 else values)

    @staticmethod
    def _lookup(table: Mapping[str, Any], name: str, kind: str) -> Any:
        try:
            return table[name]
        except KeyError:
            raise ValidationError(
                f"Unknown {kind}: {name}", field=kind, value=name, details={"known": list(table)}
            ) from None
