from typing import Literal

from pydantic import BaseModel, ConfigDict

RangeType = Literal["range", "lt", "lte", "gt", "gte"]
ReferenceSource = Literal["explicit", "gender", "bio_reference", "ref_text", "none"]


class ParsedRange(BaseModel):
    """Typed form of a reference-range string.

    Two-sided ranges fill ``min`` and ``max``. Single-bound comparisons fill
    ``value`` and mirror it into ``max`` (``lt``/``lte``) or ``min``
    (``gt``/``gte``). ``text`` keeps the source text for display.
    """

    model_config = ConfigDict(frozen=True)

    type: RangeType
    min: float | None = None
    max: float | None = None
    value: float | None = None
    text: str = ""


class ReferenceInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    range: ParsedRange | None = None
    source: ReferenceSource = "none"
    text: str = "—"
