"""Tests for recurring cost normalization."""

from decimal import Decimal

import pytest

from subtrack_core.charts import pie_segments
from subtrack_core.exceptions import (
    DivisionByZeroError,
    InvalidIntervalError,
    UnsupportedUnitError,
)
from subtrack_core.models import BillingInterval, BillingUnit, Subscription
from subtrack_core.normalizer import (
    UNCATEGORIZED,
    average_monthly_cost,
    group_by_category,
    monthly_cost,
    normalize,
    normalize_subscription,
    prorated_amount,
    spending_by_category,
    total_monthly_cost,
    yearly_cost,
)


def make_subscription(
    id: str,
    price: str,
    unit: str = "monthly",
    quantity: int = 1,
    active=True,
    category=None,
) -> Subscription:
    """Create a Subscription for testing."""
    return Subscription(
        id=id,
        name=f"Subscription {id}",
        price=Decimal(price),
        interval=BillingInterval(quantity=quantity, unit=unit),
        active=active,
        category=category,
    )


class TestMonthlyCost:
    """Test conversion to a monthly basis."""

    def test_weekly(self):
        """9.99 a week is 9.99 x 30/7 a month."""
        assert monthly_cost(Decimal("9.99"), 1, "weekly") == Decimal("42.81")

    def test_daily(self):
        assert monthly_cost("1.50", 1, "daily") == Decimal("45.00")

    def test_monthly(self):
        assert monthly_cost("15.49", 1, "monthly") == Decimal("15.49")

    def test_yearly(self):
        assert monthly_cost("120", 1, "yearly") == Decimal("10.00")
        assert monthly_cost("99.99", 1, "yearly") == Decimal("8.33")

    def test_quantity_multiplies(self):
        assert monthly_cost("30", 3, "monthly") == Decimal("90.00")
        assert monthly_cost("9.99", 2, "weekly") == Decimal("85.63")

    def test_accepts_enum(self):
        assert monthly_cost("9.99", 1, BillingUnit.WEEKLY) == Decimal("42.81")

    def test_float_price(self):
        assert monthly_cost(9.99, 1, "weekly") == Decimal("42.81")


class TestYearlyCost:
    """Test conversion to a yearly basis."""

    def test_weekly(self):
        """Yearly is the rounded monthly cost times 12."""
        assert yearly_cost("9.99", 1, "weekly") == Decimal("513.72")

    def test_yearly_round_trip(self):
        assert yearly_cost("120", 1, "yearly") == Decimal("120.00")

    def test_normalize_returns_both(self):
        cost = normalize("9.99", 1, "weekly")
        assert cost.monthly == Decimal("42.81")
        assert cost.yearly == Decimal("513.72")


class TestValidation:
    """Test interval and unit validation."""

    @pytest.mark.parametrize("quantity", [0, -1, -12])
    def test_non_positive_quantity(self, quantity):
        with pytest.raises(InvalidIntervalError):
            monthly_cost("10.00", quantity, "monthly")

    @pytest.mark.parametrize("quantity", [1.5, "2", True])
    def test_non_integer_quantity(self, quantity):
        with pytest.raises(InvalidIntervalError):
            monthly_cost("10.00", quantity, "monthly")

    @pytest.mark.parametrize("unit", ["fortnightly", "hourly", "", None])
    def test_unsupported_unit(self, unit):
        with pytest.raises(UnsupportedUnitError) as exc_info:
            monthly_cost("10.00", 1, unit)
        assert exc_info.value.unit == unit

    def test_yearly_cost_validates_too(self):
        with pytest.raises(InvalidIntervalError):
            yearly_cost("10.00", 0, "yearly")


class TestSubscriptions:
    """Test aggregation over subscription records."""

    def test_normalize_subscription(self):
        sub = make_subscription("gym", "120", unit="yearly")
        assert normalize_subscription(sub).monthly == Decimal("10.00")

    def test_total_skips_inactive(self):
        subs = [
            make_subscription("netflix", "15.49"),
            make_subscription("gym", "120", unit="yearly"),
            make_subscription("old", "50.00", active=False),
        ]
        assert total_monthly_cost(subs) == Decimal("25.49")

    def test_total_empty(self):
        assert total_monthly_cost([]) == Decimal("0.00")

    def test_average(self):
        subs = [
            make_subscription("netflix", "15.49"),
            make_subscription("gym", "120", unit="yearly"),
            make_subscription("old", "50.00", active=False),
        ]
        assert average_monthly_cost(subs) == Decimal("12.75")

    def test_average_none_active(self):
        assert average_monthly_cost([]) == Decimal("0.00")


class TestProratedAmount:
    """Test partial-month charges."""

    def test_ten_days(self):
        assert prorated_amount("30.00", 10) == Decimal("10.00")

    def test_custom_month_length(self):
        assert prorated_amount("31.00", 1, days_in_month=31) == Decimal("1.00")

    def test_zero_day_month(self):
        with pytest.raises(DivisionByZeroError):
            prorated_amount("30.00", 10, days_in_month=0)


class TestSpendingByCategory:
    """Test per-category monthly spending."""

    @pytest.fixture
    def subscriptions(self):
        return [
            make_subscription("netflix", "15.49", category="streaming"),
            make_subscription("gym", "120", unit="yearly", category="fitness"),
            make_subscription("spotify", "9.99", category="streaming"),
            make_subscription("old", "50.00", active=False, category="news"),
            make_subscription("misc", "3.00"),
        ]

    def test_group_by_category(self, subscriptions):
        groups = group_by_category(subscriptions)
        assert list(groups) == ["streaming", "fitness", "news", UNCATEGORIZED]
        assert [s.id for s in groups["streaming"]] == ["netflix", "spotify"]

    def test_spending(self, subscriptions):
        assert spending_by_category(subscriptions) == {
            "streaming": Decimal("25.48"),
            "fitness": Decimal("10.00"),
            "news": Decimal("0.00"),
            UNCATEGORIZED: Decimal("3.00"),
        }

    def test_feeds_pie_chart(self, subscriptions):
        segments = pie_segments(list(spending_by_category(subscriptions).values()))
        assert segments[0].percentage == pytest.approx(25.48 / 38.48 * 100)
        assert segments[2].width == 0.0
        assert segments[-1].end == pytest.approx(360.0)

    def test_empty(self):
        assert spending_by_category([]) == {}
