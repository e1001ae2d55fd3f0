"""SubTrack Core - Cost normalization, budgets, statistics and settlements."""

__version__ = "0.1.0"

from .config import Settings, load_settings
from .exceptions import (
    DivisionByZeroError,
    InvalidIntervalError,
    InvalidPercentileError,
    InvalidSmoothingFactorError,
    InvalidWindowError,
    InvalidSplitError,
    MismatchedLengthError,
    SubtrackError,
    UnbalancedLedgerError,
    UnsupportedUnitError,
)
from .models import (
    BillingInterval,
    BillingUnit,
    BudgetStatus,
    DistributionSegment,
    ParticipantBalance,
    SettlementTransaction,
    Subscription,
)
from .money import round_money, to_minor_units
from .normalizer import monthly_cost, normalize, yearly_cost
from .settlement import settle
from .splits import custom_split, equal_split, percentage_split

__all__ = [
    "Settings",
    "load_settings",
    "SubtrackError",
    "DivisionByZeroError",
    "InvalidIntervalError",
    "UnsupportedUnitError",
    "InvalidPercentileError",
    "MismatchedLengthError",
    "InvalidSmoothingFactorError",
    "InvalidWindowError",
    "InvalidSplitError",
    "UnbalancedLedgerError",
    "BillingInterval",
    "BillingUnit",
    "BudgetStatus",
    "DistributionSegment",
    "ParticipantBalance",
    "SettlementTransaction",
    "Subscription",
    "round_money",
    "to_minor_units",
    "monthly_cost",
    "normalize",
    "yearly_cost",
    "settle",
    "equal_split",
    "percentage_split",
    "custom_split",
]
