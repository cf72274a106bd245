VERSION = "0.1.0"

import logging
from typing import Optional

from .llm import cfg_get, GenerationError
from .parser import parse_itinerary
from .currency import to_number, format_currency
from .planner import generate_itinerary, validate_request, TripRequestError
from .budget import summarize_budget
from .output import build_structured_output, export_json, export_csv
from .expenses import BudgetTracker, apply_actual_cost


def configure_logging():
    level = str(cfg_get("LOG_LEVEL", "INFO") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def plan_trip(destination: str, duration: int, interests: str, total_budget: Optional[float] = None):
    days = validate_request(destination, duration, interests)
    result = generate_itinerary(destination, days, interests)
    tracker = BudgetTracker(result.itinerary, total_budget, days)
    output = build_structured_output(
        destination.strip(), days, interests.strip(), total_budget, result, tracker.summary()
    )
    return output
