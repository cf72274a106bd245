import logging
from typing import Any

from .llm import generate_itinerary_text
from .models import GenerationResult
from .parser import parse_itinerary

logger = logging.getLogger(__name__)


class TripRequestError(ValueError):
    """表单输入不完整，不会调用模型。"""


def validate_request(destination: Any, duration: Any, interests: Any) -> int:
    """校验目的地、天数、兴趣三项输入，返回整数天数。"""
    if not isinstance(destination, str) or not destination.strip():
        raise TripRequestError("请填写目的地")
    if not isinstance(interests, str) or not interests.strip():
        raise TripRequestError("请填写兴趣偏好")
    # 表单提交的天数可能是字符串；小数、布尔值都不接受
    if isinstance(duration, str) and duration.strip().isdigit():
        duration = int(duration.strip())
    if isinstance(duration, bool) or not isinstance(duration, int) or duration < 1:
        raise TripRequestError("旅行天数必须是正整数")
    return duration


def generate_itinerary(destination: str, duration: int, interests: str) -> GenerationResult:
    """生成并解析行程。模型只调用一次；解析结果为空不视为错误。"""
    days = validate_request(destination, duration, interests)
    destination = destination.strip()
    interests = interests.strip()
    logger.info("生成行程：%s，%d 天，兴趣：%s", destination, days, interests)
    raw_text, citations = generate_itinerary_text(destination, days, interests)
    itinerary = parse_itinerary(raw_text)
    if not itinerary:
        logger.warning("模型返回内容中没有识别到任何 Day 标题")
    return GenerationResult(raw_text=raw_text, citations=citations, itinerary=itinerary)
