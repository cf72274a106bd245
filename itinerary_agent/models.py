from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    # JSON 使用前端约定的驼峰字段名，Python 侧使用下划线命名；金额不接受 inf/nan
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)


class Activity(_Record):
    name: str = Field(min_length=1)
    description: str = ""
    opening_hours: str = Field("N/A", alias="openingHours")
    estimated_cost: str = Field("N/A", alias="estimatedCost")
    check_price_link: Optional[str] = Field(None, alias="checkPriceLink")
    # None 表示用户尚未填写，不等于 0
    actual_cost: Optional[float] = Field(None, alias="actualCost")


class DailyItinerary(_Record):
    day: int = Field(gt=0)
    date: str
    activities: List[Activity] = Field(default_factory=list)


class WebSource(_Record):
    uri: str = ""
    title: str = ""


class ReviewSnippet(_Record):
    uri: str = ""
    title: str = ""


class MapsSource(_Record):
    uri: str = ""
    title: str = ""
    review_snippets: List[ReviewSnippet] = Field(default_factory=list, alias="reviewSnippets")


class GroundingChunk(_Record):
    """模型返回的引用来源：网页或地点，两者相互独立、均可缺省。"""

    web: Optional[WebSource] = None
    maps: Optional[MapsSource] = None


class GenerationResult(_Record):
    raw_text: str = Field("", alias="rawText")
    citations: List[GroundingChunk] = Field(default_factory=list)
    itinerary: List[DailyItinerary] = Field(default_factory=list)


class BudgetSummary(_Record):
    total_estimated: float = Field(0.0, alias="totalEstimated")
    total_actual: float = Field(0.0, alias="totalActual")
    total_budget: Optional[float] = Field(None, alias="totalBudget")
    remaining: Optional[float] = None
    average_daily_remaining: Optional[float] = Field(None, alias="averageDailyRemaining")
