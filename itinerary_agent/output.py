import csv
import json
from typing import Dict, List, Optional

from .budget import daily_totals
from .currency import format_currency, to_number
from .models import BudgetSummary, DailyItinerary, GenerationResult


def build_structured_output(
    destination: str,
    duration: int,
    interests: str,
    total_budget: Optional[float],
    result: GenerationResult,
    summary: BudgetSummary,
) -> Dict:
    return {
        "request": {
            "destination": destination,
            "duration": duration,
            "interests": interests,
            "totalBudget": total_budget,
        },
        "itinerary": [d.model_dump(by_alias=True) for d in result.itinerary],
        "citations": [c.model_dump(by_alias=True, exclude_none=True) for c in result.citations],
        "budget": summary.model_dump(by_alias=True),
        "dailyTotals": daily_totals(result.itinerary),
    }


def export_json(data: Dict, path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def export_csv(data: Dict, path: str):
    # 费用表：每个活动一行，最后附上预算汇总
    itinerary: List[DailyItinerary] = [DailyItinerary.model_validate(d) for d in data.get("itinerary") or []]
    budget = data.get("budget") or {}
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["Day", "Date", "Activity", "Estimasi Biaya", "Estimated", "Actual"])
        for day in itinerary:
            for a in day.activities:
                actual = "" if a.actual_cost is None else a.actual_cost
                w.writerow([day.day, day.date, a.name, a.estimated_cost, to_number(a.estimated_cost), actual])
        w.writerow([])
        w.writerow(["Total Estimasi", format_currency(budget.get("totalEstimated"))])
        w.writerow(["Total Aktual", format_currency(budget.get("totalActual"))])
        w.writerow(["Total Budget", format_currency(budget.get("totalBudget"))])
        w.writerow(["Sisa Budget", format_currency(budget.get("remaining"))])
        w.writerow(["Sisa Budget Harian", format_currency(budget.get("averageDailyRemaining"))])
