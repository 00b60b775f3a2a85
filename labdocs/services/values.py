import math
import re

NUMBER_PATTERN = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)"
_NUMBER_RE = re.compile(NUMBER_PATTERN)


def to_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace(",", "")
    if not cleaned or not _NUMBER_RE.fullmatch(cleaned):
        return None
    number = float(cleaned)
    return number if math.isfinite(number) else None


def price_of(value) -> float:
    """Price coercion used for aggregation: anything unusable counts as zero."""
    number = to_float(value)
    return number if number is not None else 0.0


def money(value: float) -> float:
    return round(value, 2)
