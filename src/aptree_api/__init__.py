"""Aptree API - Typed client for the Aptree protocol on Aptos.

This library builds entry-function transactions, invokes view functions
and reads resources for the Aptree bridge, locking, guaranteed-yield and
Glade swap contracts.
"""

from .client import AptreeClient
from .config import TESTNET_ADDRESSES, AptreeAddresses, AptreeClientConfig
from .constants import (
    AET_SCALE,
    BPS_DENOMINATOR,
    GUARANTEED_YIELD_DURATIONS,
    LOCKING_DURATIONS,
    PRECISION,
    SEEDS,
    GuaranteedYieldTier,
    LockingTier,
    get_guaranteed_yield_duration,
    get_locking_duration,
)
from .exceptions import (
    AptreeError,
    NetworkError,
    ResourceNotFoundError,
    ResultArityError,
    UnlockSequenceError,
    ValidationError,
)
from .modules import SwapParams, fa_swap_type_arguments, marshal_swap_arguments
from .types import (
    DepositorStateView,
    EmergencyUnlockPreview,
    EntryFunctionPayload,
    GuaranteedEmergencyUnlockPreview,
    GuaranteedLockPosition,
    GuaranteedTierConfig,
    LockPosition,
    PositionRef,
    ProtocolStats,
    TierConfig,
    TransactionRequest,
)
from .unlock import PendingUnlock, SettlementConfirmation, UnlockPath, UnlockPhase, UnlockProtocol
from .utils import format_uint, parse_u64, parse_u128

__version__ = "0.1.0"

__all__ = [
    # Client
    "AptreeClient",
    "AptreeAddresses",
    "AptreeClientConfig",
    "TESTNET_ADDRESSES",
    # Types
    "EntryFunctionPayload",
    "TransactionRequest",
    "PositionRef",
    "LockPosition",
    "GuaranteedLockPosition",
    "TierConfig",
    "GuaranteedTierConfig",
    "EmergencyUnlockPreview",
    "GuaranteedEmergencyUnlockPreview",
    "ProtocolStats",
    "DepositorStateView",
    # Swaps
    "SwapParams",
    "marshal_swap_arguments",
    "fa_swap_type_arguments",
    # Unlocks
    "UnlockProtocol",
    "UnlockPath",
    "UnlockPhase",
    "PendingUnlock",
    "SettlementConfirmation",
    # Exceptions
    "AptreeError",
    "NetworkError",
    "ResourceNotFoundError",
    "ValidationError",
    "ResultArityError",
    "UnlockSequenceError",
    # Constants
    "AET_SCALE",
    "BPS_DENOMINATOR",
    "PRECISION",
    "SEEDS",
    "LOCKING_DURATIONS",
    "GUARANTEED_YIELD_DURATIONS",
    "LockingTier",
    "GuaranteedYieldTier",
    "get_locking_duration",
    "get_guaranteed_yield_duration",
    # Utility functions
    "parse_u64",
    "parse_u128",
    "format_uint",
]
