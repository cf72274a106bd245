import pytest

from itinerary_agent.budget import daily_totals, summarize_budget
from itinerary_agent.models import Activity, DailyItinerary


def _itinerary():
    return [
        DailyItinerary(day=1, date="2024-01-01", activities=[
            Activity(name="A", estimated_cost="IDR 60", actual_cost=25.0),
            Activity(name="B", estimated_cost="N/A"),
        ]),
        DailyItinerary(day=2, date="2024-01-02", activities=[
            Activity(name="C", estimated_cost="IDR 40", actual_cost=15.0),
        ]),
    ]


def test_remaining_and_daily_average():
    summary = summarize_budget(_itinerary(), total_budget=200, duration=5)

    assert summary.total_estimated == pytest.approx(100)
    assert summary.total_actual == pytest.approx(40)
    assert summary.total_budget == 200
    assert summary.remaining == pytest.approx(160)
    assert summary.average_daily_remaining == pytest.approx(32)


def test_without_budget_remaining_is_unset():
    summary = summarize_budget(_itinerary(), duration=5)

    assert summary.remaining is None
    assert summary.average_daily_remaining is None


def test_zero_duration_leaves_average_unset():
    summary = summarize_budget(_itinerary(), total_budget=200, duration=0)

    assert summary.remaining == pytest.approx(160)
    assert summary.average_daily_remaining is None


def test_overspending_gives_negative_remaining():
    summary = summarize_budget(_itinerary(), total_budget=30, duration=2)

    assert summary.remaining == pytest.approx(-10)
    assert summary.average_daily_remaining == pytest.approx(-5)


def test_explicit_zero_actual_cost_is_counted_as_spent():
    itinerary = [DailyItinerary(day=1, date="x", activities=[Activity(name="A", actual_cost=0.0)])]

    assert summarize_budget(itinerary).total_actual == 0
    assert daily_totals(itinerary)[0]["unset"] == 0


def test_empty_itinerary():
    summary = summarize_budget([], total_budget=100, duration=4)

    assert summary.total_estimated == 0
    assert summary.total_actual == 0
    assert summary.average_daily_remaining == pytest.approx(25)


def test_summary_serializes_with_camel_case_names():
    dumped = summarize_budget(_itinerary(), total_budget=200, duration=5).model_dump(by_alias=True)

    assert set(dumped) == {"totalEstimated", "totalActual", "totalBudget", "remaining", "averageDailyRemaining"}


def test_daily_totals():
    rows = daily_totals(_itinerary())

    assert rows == [
        {"day": 1, "date": "2024-01-01", "estimated": 60.0, "actual": 25.0, "unset": 1},
        {"day": 2, "date": "2024-01-02", "estimated": 40.0, "actual": 15.0, "unset": 0},
    ]
