import logging
from typing import Iterable

from labdocs.config import settings
from labdocs.schemas.catalog import NON_NUMERIC_TYPES, GenderRange
from labdocs.schemas.ranges import ParsedRange, ReferenceInfo
from labdocs.schemas.snapshot import Status, TestSnapshot
from labdocs.services.range_parser import check_range_status, format_bounds, parse_range
from labdocs.services.values import to_float

logger = logging.getLogger(__name__)

_MALE = {"male", "m"}
_FEMALE = {"female", "f"}


def normalize_gender(gender: str | None) -> str | None:
    if not gender:
        return None
    text = gender.strip().lower()
    if text in _MALE:
        return "male"
    if text in _FEMALE:
        return "female"
    return None


def _explicit_range(snapshot: TestSnapshot) -> ParsedRange | None:
    low = to_float(snapshot.ref_low)
    high = to_float(snapshot.ref_high)
    if low is None or high is None:
        return None
    return ParsedRange(type="range", min=low, max=high, text=format_bounds(low, high))


def _gender_range(snapshot: TestSnapshot, gender: str | None) -> ParsedRange | None:
    if not snapshot.gender_specific:
        return None
    key = normalize_gender(gender)
    if key is None:
        return None
    table: GenderRange | None = snapshot.male_range if key == "male" else snapshot.female_range
    if table is None:
        return None
    if table.low is not None and table.high is not None:
        text = table.text.strip() if table.text else format_bounds(table.low, table.high)
        return ParsedRange(type="range", min=table.low, max=table.high, text=text)
    return parse_range(table.text)


def resolve_reference(snapshot: TestSnapshot, gender: str | None = None) -> ReferenceInfo:
    """Resolve the range a snapshot is classified against.

    Priority, first match wins: explicit numeric bounds, the gender table,
    ``bio_reference`` text, then ``ref_text``. The display text follows the
    same source so it never contradicts the resulting status.
    """
    explicit = _explicit_range(snapshot)
    if explicit is not None:
        return ReferenceInfo(range=explicit, source="explicit", text=explicit.text)

    by_gender = _gender_range(snapshot, gender)
    if by_gender is not None:
        return ReferenceInfo(range=by_gender, source="gender", text=by_gender.text)

    for source, text in (("bio_reference", snapshot.bio_reference), ("ref_text", snapshot.ref_text)):
        parsed = parse_range(text)
        if parsed is not None:
            return ReferenceInfo(range=parsed, source=source, text=text.strip())

    fallback_text = (snapshot.bio_reference or snapshot.ref_text).strip()
    return ReferenceInfo(range=None, source="none", text=fallback_text or "—")


def classify(
    value,
    snapshot: TestSnapshot,
    gender: str | None = None,
    report_boundary: bool | None = None,
) -> Status:
    if snapshot.input_type in NON_NUMERIC_TYPES:
        return Status.NORMAL
    if to_float(value) is None:
        return Status.NORMAL

    reference = resolve_reference(snapshot, gender)
    status = check_range_status(value, reference.range)

    keep_boundary = report_boundary if report_boundary is not None else settings.report_boundary_status
    if status is Status.BOUNDARY and not keep_boundary:
        return Status.NORMAL
    return status


def classify_snapshot(snapshot: TestSnapshot, gender: str | None = None) -> TestSnapshot:
    status = classify(snapshot.value, snapshot, gender)
    if status is snapshot.status:
        return snapshot
    return snapshot.model_copy(update={"status": status})


def classify_snapshots(snapshots: Iterable[TestSnapshot], gender: str | None = None) -> list[TestSnapshot]:
    return [classify_snapshot(snapshot, gender) for snapshot in snapshots]


def record_result(snapshot: TestSnapshot, value, gender: str | None = None) -> TestSnapshot:
    """Return ``snapshot`` with a newly entered value and its status.

    Unparseable values are kept as entered and classified NORMAL; rejecting
    bad input is left to the entry form.
    """
    text = "" if value is None else str(value)
    if text.strip() and snapshot.input_type not in NON_NUMERIC_TYPES and to_float(text) is None:
        logger.debug("Non-numeric value %r for %s left unclassified", text, snapshot.test_id)
    status = classify(text, snapshot, gender)
    return snapshot.model_copy(update={"value": text, "status": status})
