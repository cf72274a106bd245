"""把模型返回的 Markdown 行程解析为结构化的每日行程。

约定的格式（与 llm.build_itinerary_prompt 中的要求一致）::

    ## Day 1: 2024-05-10
    - **09:00 Visit Museum**: 简短说明
      - 描述（可选，只取第一行）
      - Jam Buka/Tutup: 09:00 - 17:00
      - Estimasi Biaya: IDR 50.000
      - Link Cek Harga: Museum Ticket

解析是单遍、逐行的状态机。格式不对的行直接跳过，不抛异常，
能识别多少就返回多少（可能是空列表）。
"""
import logging
import re
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .models import Activity, DailyItinerary

logger = logging.getLogger(__name__)


OPENING_HOURS_LABEL = "Jam Buka/Tutup"
ESTIMATED_COST_LABEL = "Estimasi Biaya"
PRICE_CHECK_LINK_LABEL = "Link Cek Harga"

# 天数位数有上限，超长数字不算 Day 标题
DAY_HEADING_RE = re.compile(r"^## Day (\d{1,9}): (.+)$")
ACTIVITY_HEADING_RE = re.compile(r"^- \*\*([^*]+)\*\*(?::\s*(.*))?$")
OPENING_HOURS_RE = re.compile(r"^- " + re.escape(OPENING_HOURS_LABEL) + r": (.+)$")
ESTIMATED_COST_RE = re.compile(r"^- " + re.escape(ESTIMATED_COST_LABEL) + r": (.+)$")
PRICE_CHECK_LINK_RE = re.compile(r"^- " + re.escape(PRICE_CHECK_LINK_LABEL) + r": (.+)$")
BULLET_RE = re.compile(r"^- (.+)$")


class ParserState(Enum):
    AWAITING_DAY = "awaiting_day"
    IN_DAY = "in_day"
    IN_ACTIVITY = "in_activity"


class LineKind(Enum):
    DAY_HEADING = "day_heading"
    ACTIVITY_HEADING = "activity_heading"
    OPENING_HOURS = "opening_hours"
    ESTIMATED_COST = "estimated_cost"
    PRICE_CHECK_LINK = "price_check_link"
    BULLET = "bullet"
    OTHER = "other"


# 带标签的字段必须排在通用 "- 文本" 之前，否则会被当成描述
_FIELD_PATTERNS = [
    (LineKind.OPENING_HOURS, OPENING_HOURS_RE),
    (LineKind.ESTIMATED_COST, ESTIMATED_COST_RE),
    (LineKind.PRICE_CHECK_LINK, PRICE_CHECK_LINK_RE),
]

_FIELD_ATTRS = {
    LineKind.OPENING_HOURS: "opening_hours",
    LineKind.ESTIMATED_COST: "estimated_cost",
    LineKind.PRICE_CHECK_LINK: "check_price_link",
}


def iter_lines(text: Optional[str]) -> Iterator[str]:
    """按行切分，去掉首尾空白并跳过空行。"""
    if not text:
        return
    for raw in text.split("\n"):
        line = raw.strip()
        if line:
            yield line


def classify_line(line: str) -> Tuple[LineKind, Tuple[str, ...]]:
    """按固定优先级判断一行的类型，返回类型与捕获到的内容。"""
    m = DAY_HEADING_RE.match(line)
    if m:
        day = int(m.group(1))
        date = m.group(2).strip()
        if day > 0 and date:
            return LineKind.DAY_HEADING, (m.group(1), date)

    m = ACTIVITY_HEADING_RE.match(line)
    if m and m.group(1).strip():
        return LineKind.ACTIVITY_HEADING, (m.group(1).strip(), (m.group(2) or "").strip())

    for kind, pattern in _FIELD_PATTERNS:
        m = pattern.match(line)
        if m:
            return kind, (m.group(1).strip(),)

    m = BULLET_RE.match(line)
    if m:
        return LineKind.BULLET, (m.group(1).strip(),)

    return LineKind.OTHER, ()


class _ItineraryBuilder:
    """一次解析调用内部使用的累加器：当前的天、当前的活动，以及已完成的结果。"""

    def __init__(self):
        self.state = ParserState.AWAITING_DAY
        self.days: List[DailyItinerary] = []
        self._day: Optional[Dict] = None
        self._activity: Optional[Dict] = None

    def feed(self, line: str) -> None:
        kind, groups = classify_line(line)
        if kind is LineKind.DAY_HEADING:
            self._on_day_heading(int(groups[0]), groups[1])
        elif self.state is ParserState.AWAITING_DAY:
            # 第一个 Day 标题之前的内容全部丢弃
            self._skip(line)
        elif kind is LineKind.ACTIVITY_HEADING:
            self._on_activity_heading(groups[0], groups[1])
        elif self.state is ParserState.IN_DAY:
            # 活动标题之前的零散条目不属于任何活动
            self._skip(line)
        elif kind in _FIELD_ATTRS:
            self._on_field(kind, groups[0])
        elif kind is LineKind.BULLET:
            self._on_bullet(groups[0])
        else:
            self._skip(line)

    def finish(self) -> List[DailyItinerary]:
        self._flush_activity()
        self._flush_day()
        self.state = ParserState.AWAITING_DAY
        return self.days

    # ---- 状态转移 ----

    def _on_day_heading(self, day: int, date: str) -> None:
        self._flush_activity()
        self._flush_day()
        self._day = {"day": day, "date": date, "activities": []}
        self.state = ParserState.IN_DAY

    def _on_activity_heading(self, name: str, description: str) -> None:
        self._flush_activity()
        self._activity = {
            "name": name,
            "description": description,
            "opening_hours": "N/A",
            "estimated_cost": "N/A",
            "check_price_link": None,
            "actual_cost": None,
        }
        self.state = ParserState.IN_ACTIVITY

    def _on_field(self, kind: LineKind, value: str) -> None:
        # 重复出现时以最后一次为准
        self._activity[_FIELD_ATTRS[kind]] = value

    def _on_bullet(self, text: str) -> None:
        # 描述只取第一条，后续的普通条目忽略
        if self._activity["description"] == "":
            self._activity["description"] = text
        else:
            self._skip("- " + text)

    def _skip(self, line: str) -> None:
        logger.debug("跳过无法归属的行（状态 %s）：%s", self.state.value, line)

    # ---- 写入结果 ----

    def _flush_activity(self) -> None:
        if self._activity is None:
            return
        self._day["activities"].append(Activity(**self._activity))
        self._activity = None
        self.state = ParserState.IN_DAY

    def _flush_day(self) -> None:
        if self._day is None:
            return
        self.days.append(DailyItinerary(**self._day))
        self._day = None


def parse_itinerary(markdown_text: Optional[str]) -> List[DailyItinerary]:
    """解析 Markdown 行程文本。永不抛出异常，无法识别时返回空列表。"""
    builder = _ItineraryBuilder()
    for line in iter_lines(markdown_text):
        builder.feed(line)
    days = builder.finish()
    logger.info(
        "行程解析完成：%d 天，%d 个活动",
        len(days),
        sum(len(d.activities) for d in days),
    )
    return days
