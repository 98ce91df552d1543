"""Constants and tier tables for the Aptree protocol."""

from enum import IntEnum

# Basis points denominator (10_000 = 100%)
BPS_DENOMINATOR = 10_000

# AET share price scale; 1_000_000_000 means one share per underlying token
AET_SCALE = 1_000_000_000

# Fixed-point precision used by the locking contract
PRECISION = 1_000_000_000_000

U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Resource account seeds used by the on-chain contracts
SEEDS = {
    "BRIDGE": "APTreeEarn",
    "MONEYFI_CONTROLLER": "MoneyFiBridgeController",
    "MONEYFI_RESERVE": "MoneyFiBridgeReserve",
    "LOCKING_CONTROLLER": "APTreeLockingController",
    "GUARANTEED_YIELD_CONTROLLER": "GuaranteedYieldController",
    "GUARANTEED_YIELD_CASHBACK_VAULT": "GuaranteedYieldCashbackVault",
    "MOCK_MONEYFI_VAULT": "MockMoneyFiVault",
}


class LockingTier(IntEnum):
    """Tiers accepted by ``locking::deposit_locked``."""

    BRONZE = 1  # 90 days, 2% early withdrawal
    SILVER = 2  # 180 days, 3% early withdrawal
    GOLD = 3  # 365 days, 5% early withdrawal


class GuaranteedYieldTier(IntEnum):
    """Tiers accepted by ``GuaranteedYieldLocking::deposit_guaranteed``."""

    STARTER = 1  # 30 days, 0.4% yield
    BRONZE = 2  # 90 days, 1.25% yield
    SILVER = 3  # 180 days, 2.5% yield
    GOLD = 4  # 365 days, 5% yield


LOCKING_DURATIONS = {
    LockingTier.BRONZE: 7_776_000,
    LockingTier.SILVER: 15_552_000,
    LockingTier.GOLD: 31_536_000,
}

GUARANTEED_YIELD_DURATIONS = {
    GuaranteedYieldTier.STARTER: 2_592_000,
    GuaranteedYieldTier.BRONZE: 7_776_000,
    GuaranteedYieldTier.SILVER: 15_552_000,
    GuaranteedYieldTier.GOLD: 31_536_000,
}

# Panora router calling convention
SWAP_ARGUMENT_COUNT = 19
SWAP_TYPE_ARGUMENT_COUNT = 32
# Type argument used for every coin-type slot of a fungible asset swap
FA_PLACEHOLDER_TYPE = "0x1::string::String"


def get_locking_duration(tier: int) -> int:
    """Get the lock duration in seconds for a locking tier.

    Args:
        tier: Tier number (1=Bronze, 2=Silver, 3=Gold)

    Returns:
        Duration in seconds

    Raises:
        ValueError: If tier is not found
    """
    try:
        return LOCKING_DURATIONS[LockingTier(tier)]
    except ValueError:
        raise ValueError(f"Unknown locking tier: {tier}") from None


def get_guaranteed_yield_duration(tier: int) -> int:
    """Get the lock duration in seconds for a guaranteed-yield tier.

    Raises:
        ValueError: If tier is not found
    """
    try:
        return GUARANTEED_YIELD_DURATIONS[GuaranteedYieldTier(tier)]
    except ValueError:
        raise ValueError(f"Unknown guaranteed yield tier: {tier}") from None
