from typing import Dict, List, Optional

from .currency import to_number
from .models import BudgetSummary, DailyItinerary


def summarize_budget(
    itinerary: List[DailyItinerary],
    total_budget: Optional[float] = None,
    duration: int = 0,
) -> BudgetSummary:
    total_estimated = 0.0
    total_actual = 0.0
    for day in itinerary:
        for activity in day.activities:
            total_estimated += to_number(activity.estimated_cost)
            # 未填写的实际花费不计入（与填写 0 含义不同）
            if activity.actual_cost is not None:
                total_actual += activity.actual_cost

    remaining = total_budget - total_actual if total_budget is not None else None
    average_daily_remaining = None
    if remaining is not None and duration and duration > 0:
        average_daily_remaining = remaining / duration

    return BudgetSummary(
        total_estimated=total_estimated,
        total_actual=total_actual,
        total_budget=total_budget,
        remaining=remaining,
        average_daily_remaining=average_daily_remaining,
    )


def daily_totals(itinerary: List[DailyItinerary]) -> List[Dict]:
    """每天的预估/实际小计，按原始顺序，重复的天数不合并。"""
    rows = []
    for day in itinerary:
        actuals = [a.actual_cost for a in day.activities if a.actual_cost is not None]
        rows.append({
            "day": day.day,
            "date": day.date,
            "estimated": sum(to_number(a.estimated_cost) for a in day.activities),
            "actual": sum(actuals),
            "unset": len(day.activities) - len(actuals),
        })
    return rows
