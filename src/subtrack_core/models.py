"""Pydantic value types for SubTrack Core."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ============================================================================
# Subscription Models
# ============================================================================


class BillingUnit(str, Enum):
    """Recurrence unit of a billing interval."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class BillingInterval(BaseModel):
    """How often a subscription charges, e.g. every 3 months."""

    model_config = ConfigDict(frozen=True)

    quantity: int = 1
    unit: BillingUnit = BillingUnit.MONTHLY


class Subscription(BaseModel):
    """A subscription record supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal
    interval: BillingInterval = Field(default_factory=BillingInterval)
    category: str | None = None
    active: bool = True


class NormalizedCost(BaseModel):
    """A recurring cost expressed on a monthly and yearly basis."""

    model_config = ConfigDict(frozen=True)

    monthly: Decimal
    yearly: Decimal


# ============================================================================
# Budget Models
# ============================================================================


class BudgetStatus(str, Enum):
    """Spending position relative to a budget limit."""

    UNDER = "under"
    EXACT = "exact"
    OVER = "over"


class CategoryBudget(BaseModel):
    """Spent amount and limit for one budget category."""

    model_config = ConfigDict(frozen=True)

    category: str
    spent: Decimal
    budget: Decimal


class CategoryShare(BaseModel):
    """A category's share of the total budget."""

    model_config = ConfigDict(frozen=True)

    category: str
    spent: Decimal
    budget: Decimal
    share: Decimal  # percentage of total budget


class BudgetSummary(BaseModel):
    """Everything the budget screens need for one spent/limit pair."""

    model_config = ConfigDict(frozen=True)

    spent: Decimal
    budget: Decimal
    remaining: Decimal
    utilization: Decimal
    status: BudgetStatus


# ============================================================================
# Statistics Models
# ============================================================================


class SampleStatistics(BaseModel):
    """Descriptive statistics for one sample."""

    model_config = ConfigDict(frozen=True)

    mean: float
    median: float
    mode: list[float]
    range: float
    variance: float
    standard_deviation: float
    min: float
    max: float
    sum: float
    count: int


class TrendDirection(str, Enum):
    """Overall direction of a spending series."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class TrendSummary(BaseModel):
    """Linear trend fitted to a spending series."""

    model_config = ConfigDict(frozen=True)

    direction: TrendDirection
    slope: float
    percentage_change: float
    absolute_change: float
    forecast: float


# ============================================================================
# Settlement Models
# ============================================================================


class ParticipantBalance(BaseModel):
    """A participant's signed position in a shared-cost split.

    Positive: the participant is owed money.
    Negative: the participant owes money.
    """

    model_config = ConfigDict(frozen=True)

    participant_id: str
    net_balance: Decimal


class ParticipantShare(BaseModel):
    """What one participant paid towards and owes for a shared expense."""

    model_config = ConfigDict(frozen=True)

    participant_id: str
    paid: Decimal = Decimal("0")
    owed: Decimal = Decimal("0")


class SettlementTransaction(BaseModel):
    """One directed payment instruction resolving part of the net balances."""

    model_config = ConfigDict(frozen=True)

    from_participant: str
    to_participant: str
    amount: Decimal = Field(gt=0)

    @model_validator(mode="after")
    def check_not_self_referential(self) -> "SettlementTransaction":
        if self.from_participant == self.to_participant:
            raise ValueError(
                f"Participant {self.from_participant} cannot pay themselves"
            )
        return self


# ============================================================================
# Chart Models
# ============================================================================


class DistributionSegment(BaseModel):
    """A proportional slice of a pie (angles) or stacked bar (offsets)."""

    model_config = ConfigDict(frozen=True)

    value: float
    percentage: float
    start: float
    end: float

    @property
    def width(self) -> float:
        return self.end - self.start


class ChartBounds(BaseModel):
    """Vertical scaling for a line or area chart."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float
    scale: float
