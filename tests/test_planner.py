import pytest

import itinerary_agent
from itinerary_agent import planner
from itinerary_agent.llm import GenerationError
from itinerary_agent.models import GroundingChunk, WebSource
from itinerary_agent.planner import TripRequestError, generate_itinerary, validate_request


@pytest.fixture
def fake_generator(monkeypatch, sample_markdown):
    calls = []

    def _generate(destination, duration, interests):
        calls.append((destination, duration, interests))
        return sample_markdown, [GroundingChunk(web=WebSource(uri="https://example.com", title="Example"))]

    monkeypatch.setattr(planner, "generate_itinerary_text", _generate)
    return calls


@pytest.mark.parametrize(
    "destination, duration, interests",
    [
        ("", 3, "food"),
        ("   ", 3, "food"),
        (None, 3, "food"),
        ("Bali", 3, ""),
        ("Bali", 0, "food"),
        ("Bali", -2, "food"),
        ("Bali", None, "food"),
        ("Bali", "", "food"),
        ("Bali", "abc", "food"),
        ("Bali", 2.5, "food"),
        ("Bali", True, "food"),
    ],
)
def test_validate_request_rejects_incomplete_input(destination, duration, interests):
    with pytest.raises(TripRequestError):
        validate_request(destination, duration, interests)


@pytest.mark.parametrize("duration, expected", [(3, 3), ("5", 5), (" 2 ", 2)])
def test_validate_request_returns_integer_days(duration, expected):
    assert validate_request("Bali", duration, "food") == expected


def test_validation_error_skips_generation(fake_generator):
    with pytest.raises(TripRequestError):
        generate_itinerary("", 3, "food")

    assert fake_generator == []


def test_generate_itinerary_parses_model_text(fake_generator):
    result = generate_itinerary("  Yogyakarta ", 2, " budaya ")

    assert fake_generator == [("Yogyakarta", 2, "budaya")]
    assert [d.day for d in result.itinerary] == [1, 2]
    assert result.citations[0].web.title == "Example"
    assert result.raw_text.startswith("\n# Rencana")


def test_unparseable_text_is_an_empty_result(monkeypatch):
    monkeypatch.setattr(planner, "generate_itinerary_text", lambda *a: ("Sorry, I cannot help.", []))

    result = generate_itinerary("Bali", 2, "food")

    assert result.itinerary == []
    assert result.raw_text == "Sorry, I cannot help."


def test_generation_error_propagates(monkeypatch):
    def _fail(*args):
        raise GenerationError("生成行程失败：timeout")

    monkeypatch.setattr(planner, "generate_itinerary_text", _fail)

    with pytest.raises(GenerationError):
        generate_itinerary("Bali", 2, "food")


def test_plan_trip_builds_structured_output(fake_generator):
    data = itinerary_agent.plan_trip("Yogyakarta", "2", "budaya", total_budget=1000)

    assert data["request"] == {"destination": "Yogyakarta", "duration": 2, "interests": "budaya", "totalBudget": 1000}
    assert data["itinerary"][0]["activities"][0]["openingHours"] == "08:30 - 14:00"
    assert data["itinerary"][0]["activities"][0]["actualCost"] is None
    assert data["budget"]["totalEstimated"] == pytest.approx(15 + 5 + 375)
    assert data["budget"]["remaining"] == pytest.approx(1000)
    assert data["budget"]["averageDailyRemaining"] == pytest.approx(500)
    assert data["citations"] == [{"web": {"uri": "https://example.com", "title": "Example"}}]
