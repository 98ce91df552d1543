"""Protocol modules built on the shared call builder."""

from .base import ContractModule, EntryFunction, ResourceSpec, ViewFunction
from .bridge import BridgeModule
from .glade import GladeModule
from .guaranteed_yield import GuaranteedYieldModule
from .locking import LockingModule
from .mock_vault import MockVaultModule
from .swap import (
    SwapParams,
    fa_swap_type_arguments,
    marshal_swap_arguments,
    validate_swap_type_arguments,
)

__all__ = [
    "BridgeModule",
    "ContractModule",
    "EntryFunction",
    "GladeModule",
    "GuaranteedYieldModule",
    "LockingModule",
    "MockVaultModule",
    "ResourceSpec",
    "SwapParams",
    "ViewFunction",
    "fa_swap_type_arguments",
    "marshal_swap_arguments",
    "validate_swap_type_arguments",
]
