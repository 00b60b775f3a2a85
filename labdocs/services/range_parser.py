"""Reference-range parsing.

Turns free-form reference text such as ``"7.94 - 20.07"``, ``"< 0.3"``,
``"70 - 100 mg/dL"`` or ``"Male: 13.0–17.0\\nFemale: 12.0–15.0"`` into a
``ParsedRange``. Purely textual references ("Clear", "Nil", "Negative") parse
to ``None``, which callers treat as "no numeric classification possible".
"""

import logging
import re

from labdocs.config import settings
from labdocs.schemas.ranges import ParsedRange
from labdocs.schemas.snapshot import Status
from labdocs.services.values import NUMBER_PATTERN, to_float

logger = logging.getLogger(__name__)

_UNITS = (
    r"mg/dL", r"g/dL", r"ng/dL", r"mg/L", r"g/L", r"mmol/L", r"µmol/L", r"μmol/L", r"umol/L",
    r"mEq/L", r"mIU/L", r"µIU/mL", r"μIU/mL", r"IU/L", r"U/L", r"ng/mL", r"pg/mL", r"cells/µL",
    r"cells/μL", r"K/µL", r"K/μL", r"M/µL", r"M/μL", r"/HPF", r"/LPF", r"mm/hr", r"fL", r"pg", r"%",
)
_UNIT_RE = re.compile(r"\s*(?:" + "|".join(re.escape(u) for u in _UNITS) + r")\s*$", re.IGNORECASE)
_LABEL_RE = re.compile(r"^[A-Za-z][^:\r\n]*:\s*")
_COMPARISON_RE = re.compile(r"^(<=|>=|≤|≥|<|>)\s*(" + NUMBER_PATTERN + r")$")
_UP_TO_RE = re.compile(r"^up\s*to\s*(" + NUMBER_PATTERN + r")$", re.IGNORECASE)
_RANGE_RE = re.compile(r"^(" + NUMBER_PATTERN + r")\s*[-–—]\s*(" + NUMBER_PATTERN + r")$")
_LINE_SPLIT_RE = re.compile(r"[\r\n]+")

_OPERATORS = {"<": "lt", "<=": "lte", "≤": "lte", ">": "gt", ">=": "gte", "≥": "gte"}


def _strip_decorations(text: str) -> str:
    body = _LABEL_RE.sub("", text, count=1)
    return _UNIT_RE.sub("", body).strip()


def _single_bound(kind: str, bound: float, text: str) -> ParsedRange:
    if kind in ("lt", "lte"):
        return ParsedRange(type=kind, value=bound, max=bound, text=text)
    return ParsedRange(type=kind, value=bound, min=bound, text=text)


def _parse_line(text: str) -> ParsedRange | None:
    body = _strip_decorations(text)
    if not body:
        return None

    match = _COMPARISON_RE.match(body)
    if match:
        return _single_bound(_OPERATORS[match.group(1)], float(match.group(2)), text)

    match = _UP_TO_RE.match(body)
    if match:
        return _single_bound("lte", float(match.group(1)), text)

    match = _RANGE_RE.match(body)
    if match:
        return ParsedRange(type="range", min=float(match.group(1)), max=float(match.group(2)), text=text)
    return None


def parse_range(text, depth: int = 0, max_depth: int | None = None) -> ParsedRange | None:
    limit = max_depth if max_depth is not None else settings.range_parse_max_depth
    if not text or not isinstance(text, str):
        return None
    if depth > limit:
        logger.debug("Reference text recursion limit reached at depth %s", depth)
        return None

    s = text.strip()
    parsed = _parse_line(s)
    if parsed is not None:
        return parsed

    # Population-specific references: first line that parses wins.
    if depth < limit:
        for line in _LINE_SPLIT_RE.split(s):
            line = line.strip()
            if not line or line == s:
                continue
            parsed = parse_range(line, depth + 1, limit)
            if parsed is not None:
                return parsed
    return None


def check_range_status(value, parsed: ParsedRange | None) -> Status:
    """Classify ``value`` against ``parsed``; exact bound matches are BOUNDARY."""
    if parsed is None:
        return Status.NORMAL
    number = to_float(value)
    if number is None:
        return Status.NORMAL

    if parsed.type in ("lt", "lte"):
        if number > parsed.value:
            return Status.HIGH
        if number == parsed.value:
            return Status.BOUNDARY
        return Status.NORMAL

    if parsed.type in ("gt", "gte"):
        if number < parsed.value:
            return Status.LOW
        if number == parsed.value:
            return Status.BOUNDARY
        return Status.NORMAL

    if number < parsed.min:
        return Status.LOW
    if number > parsed.max:
        return Status.HIGH
    if number == parsed.min or number == parsed.max:
        return Status.BOUNDARY
    return Status.NORMAL


def format_bounds(low: float, high: float) -> str:
    return f"{low:g} – {high:g}"
