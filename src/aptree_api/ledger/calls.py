"""Call descriptors, view invocation and resource reads against the ledger."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any

from ..types import EntryFunctionPayload, TransactionRequest
from ..utils import (
    check_move_arguments,
    encode_move_arguments,
    validate_address,
    validate_function_id,
    validate_resource_type,
    validate_type_tag,
)
from .connections import LedgerConnections

logger = logging.getLogger(__name__)


class CallBuilder:
    """Turn function identifiers and positional arguments into ledger calls."""

    def __init__(self, connections: LedgerConnections):
        self._connections = connections

    @property
    def connections(self) -> LedgerConnections:
        return self._connections

    def build_payload(
        self,
        function_id: str,
        args: Sequence[Any],
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> EntryFunctionPayload:
        """Assemble an entry-function payload locally, without a network call.

        ``arg_types`` gives the declared Move type of each argument. The
        arguments are checked against it here so a malformed value fails
        before anything is sent.
        """

        validate_function_id(function_id)
        type_arguments = _validate_type_tags(type_args, "type_arguments")
        argument_types = None if arg_types is None else _validate_type_tags(arg_types, "arg_types")
        arguments = list(args)
        check_move_arguments(arguments, argument_types)

        logger.debug(
            "Built payload %s with %d argument(s), %d type argument(s)",
            function_id,
            len(arguments),
            len(type_arguments),
        )
        return EntryFunctionPayload(
            function=function_id,
            arguments=arguments,
            type_arguments=type_arguments,
            argument_types=argument_types,
        )

    def build_transaction(
        self,
        sender: str,
        function_id: str,
        args: Sequence[Any],
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> TransactionRequest:
        """Assemble an unsigned transaction for ``sender``.

        Performs exactly one network call to read the sender's sequence number.
        The chain id comes from ``connect()`` or from the configuration.
        """

        payload = self.build_payload(function_id, args, type_args, arg_types)
        validate_address(sender, field="sender")

        config = self._connections.config
        chain_id = self._connections.chain_id
        sequence_number = self._connections.get_account_sequence_number(sender)

        return TransactionRequest(
            sender=sender,
            sequence_number=sequence_number,
            max_gas_amount=config.max_gas_amount,
            gas_unit_price=config.gas_unit_price,
            expiration_timestamp_secs=int(time.time()) + config.expiration_ttl,
            chain_id=chain_id,
            payload=payload,
        )

    def view(
        self,
        function_id: str,
        args: Sequence[Any] | None = None,
        type_args: Sequence[str] | None = None,
        arg_types: Sequence[str] | None = None,
    ) -> tuple[Any, ...]:
        """Invoke a view function and return the raw ordered result tuple."""

        validate_function_id(function_id)
        body = {
            "function": function_id,
            "type_arguments": _validate_type_tags(type_args, "type_arguments"),
            "arguments": encode_move_arguments(
                args or [],
                None if arg_types is None else _validate_type_tags(arg_types, "arg_types"),
            ),
        }

        logger.debug("Calling view %s", function_id)
        return tuple(self._connections.view(body))

    def get_resource(self, owner: str, resource_type: str) -> Mapping[str, Any]:
        validate_address(owner, field="owner")
        validate_resource_type(resource_type)

        logger.debug("Reading resource %s at %s", resource_type, owner)
        return self._connections.get_resource(owner, resource_type)


def _validate_type_tags(tags: Sequence[str] | None, field: str) -> list[str]:
    return [
        validate_type_tag(tag, field=f"{field}[{index}]") for index, tag in enumerate(tags or [])
    ]
