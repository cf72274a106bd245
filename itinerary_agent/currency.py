import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional


_NON_NUMERIC = re.compile(r"[^0-9.,]")
# 与 JS parseFloat 一致：只取合法的数字前缀，后面的内容忽略
_FLOAT_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")
_CENT = Decimal("0.01")


def to_number(text: Optional[str]) -> float:
    """把 "IDR 50.000" 这类费用文本转成数字，无法识别时返回 0。

    逗号一律当作小数点处理，所以 "1,234.56" 会得到 1.234，这是已知限制。
    超出浮点范围的数字同样按 0 处理。
    """
    if not text:
        return 0.0
    cleaned = _NON_NUMERIC.sub("", text).replace(",", ".")
    m = _FLOAT_PREFIX.match(cleaned)
    if not m:
        return 0.0
    value = float(m.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def format_currency(value: Optional[float]) -> str:
    # 固定 id-ID 格式：Rp 1.234.567,89，最多两位小数，末尾的 0 去掉
    if value is None or not math.isfinite(value):
        return "N/A"
    with localcontext() as ctx:
        ctx.prec = 400
        amount = Decimal(repr(float(value))).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, _, frac = f"{abs(amount):.2f}".partition(".")
    text = f"{int(whole):,}".replace(",", ".")
    frac = frac.rstrip("0")
    if frac:
        text += "," + frac
    return f"{sign}Rp {text}"
