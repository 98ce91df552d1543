"""Aptos ledger transport and call building."""

from .calls import CallBuilder
from .connections import LedgerConnections

__all__ = ["CallBuilder", "LedgerConnections"]
