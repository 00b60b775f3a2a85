from fastapi import APIRouter

from labdocs.schemas.results import ClassifyRequest, ClassifyResult, ParseRangeRequest
from labdocs.services.classifier import record_result, resolve_reference
from labdocs.services.range_parser import parse_range

router = APIRouter(prefix="/api/results", tags=["results"])


@router.post("/parse-range")
def parse_reference_range(payload: ParseRangeRequest):
    parsed = parse_range(payload.text)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": parsed.model_dump(mode="json") if parsed else None,
    }


@router.post("/classify")
def classify_result(payload: ClassifyRequest):
    updated = record_result(payload.snapshot, payload.value, payload.gender)
    result = ClassifyResult(
        status=updated.status,
        reference=resolve_reference(updated, payload.gender),
        snapshot=updated,
    )
    return {"statusCode": 200, "message": "Success", "data": result.model_dump(mode="json")}
