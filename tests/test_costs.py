"""Tests for the cost heuristic."""
import pytest

from trip_planner.models.trip_form import BudgetTier, Travelers
from trip_planner.services.costs import estimate_costs_inr, safe_nights


def amounts(estimate):
    return {item.category: item.amount_inr for item in estimate.items}


class TestEstimateCosts:
    """Test the INR cost breakdown."""

    def test_value_family_two_nights(self):
        estimate = estimate_costs_inr(2, Travelers(adults=2, kids=1), BudgetTier.VALUE)
        parts = amounts(estimate)

        assert parts["transport"] == 0
        assert parts["stay"] == 6400
        assert parts["food"] == pytest.approx(7020)
        assert parts["local"] == 1000
        assert parts["attractions"] == pytest.approx(3000)
        assert parts["buffer"] == pytest.approx(2090.4)
        assert estimate.total == pytest.approx(19510.4)
        assert estimate.per_person == pytest.approx(19510.4 / 3)

    def test_rooms_round_up(self):
        estimate = estimate_costs_inr(1, Travelers(adults=3), BudgetTier.CHEAP)
        assert amounts(estimate)["stay"] == 1800 * 2

    def test_overrides(self):
        estimate = estimate_costs_inr(
            3,
            Travelers(adults=1),
            "top",
            flight_median_inr=8000,
            stay_nightly_inr=5000,
            rooms=2,
            km_local=0,
            attraction_inr=500,
        )
        parts = amounts(estimate)

        assert parts["transport"] == 8000
        assert parts["stay"] == 30000
        assert parts["local"] == 0
        assert parts["attractions"] == 500
        assert parts["food"] == 1500 * 4
        assert estimate.per_person == pytest.approx(estimate.total)

    def test_labels_and_wire_names(self):
        estimate = estimate_costs_inr(1, Travelers(), BudgetTier.VALUE)
        assert [i.label for i in estimate.items] == [
            "Flights", "Stay", "Food", "Local commute", "Attractions", "Buffer (12%)"
        ]
        data = estimate.model_dump(by_alias=True)
        assert "perPerson" in data
        assert "amountINR" in data["items"][0]


class TestSafeNights:
    """Test nights computed from the trip dates."""

    def test_valid_range(self):
        assert safe_nights("2025-03-10", "2025-03-14") == 4

    def test_same_day_or_reversed(self):
        assert safe_nights("2025-03-10", "2025-03-10") == 1
        assert safe_nights("2025-03-14", "2025-03-10") == 1

    def test_invalid(self):
        assert safe_nights("", "2025-03-10") == 1
        assert safe_nights("tomorrow", "next week") == 1
