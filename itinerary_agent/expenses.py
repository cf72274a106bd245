import logging
from typing import List, Optional

from .budget import summarize_budget
from .models import BudgetSummary, DailyItinerary

logger = logging.getLogger(__name__)


def apply_actual_cost(
    itinerary: List[DailyItinerary],
    day: int,
    activity_index: int,
    cost: Optional[float],
) -> List[DailyItinerary]:
    """按（天数, 当天序号）写入实际花费，返回新的行程列表，不修改原列表。

    定位是按位置的：行程重新排序后旧的序号会失效。
    """
    updated = []
    hit = False
    for d in itinerary:
        if d.day != day or not 0 <= activity_index < len(d.activities):
            updated.append(d)
            continue
        activities = list(d.activities)
        activities[activity_index] = activities[activity_index].model_copy(update={"actual_cost": cost})
        updated.append(d.model_copy(update={"activities": activities}))
        hit = True
    if not hit:
        logger.debug("未找到第 %s 天第 %s 个活动，忽略本次修改", day, activity_index)
    return updated


class BudgetTracker:
    """保存当前这一轮的行程与预算，每次修改实际花费后重新汇总。"""

    def __init__(self, itinerary: List[DailyItinerary], total_budget: Optional[float] = None, duration: int = 0):
        self.itinerary = list(itinerary)
        self.total_budget = total_budget
        self.duration = duration

    def reset(self, itinerary: List[DailyItinerary]) -> None:
        # 新的一轮生成会丢弃之前的记录
        self.itinerary = list(itinerary)

    def on_actual_cost_change(self, day: int, activity_index: int, cost: Optional[float]) -> BudgetSummary:
        self.itinerary = apply_actual_cost(self.itinerary, day, activity_index, cost)
        return self.summary()

    def summary(self) -> BudgetSummary:
        return summarize_budget(self.itinerary, self.total_budget, self.duration)
