import logging

from fastapi import APIRouter, HTTPException

from labdocs.schemas.catalog import ProfileDefinition
from labdocs.schemas.documents import ComposeMode, ComposeRequest, GroupRequest
from labdocs.seed.catalog_seed import active_profiles
from labdocs.services.document_composer import compose_visit
from labdocs.services.formula import apply_calculated_values
from labdocs.services.profile_grouper import group_by_profile, resolve_groups

router = APIRouter(prefix="/api/documents", tags=["documents"])
logger = logging.getLogger(__name__)


def _catalog(profiles: list[ProfileDefinition] | None) -> list[ProfileDefinition]:
    return profiles if profiles is not None else active_profiles()


@router.post("/groups")
def group_snapshots(payload: GroupRequest):
    catalog = _catalog(payload.profiles)
    grouped = group_by_profile(apply_calculated_values(payload.snapshots), catalog)
    groups = resolve_groups(grouped, catalog)
    return {"statusCode": 200, "message": "Success", "data": [group.model_dump(mode="json") for group in groups]}


@router.post("/compose")
def compose_documents(payload: ComposeRequest):
    catalog = _catalog(payload.profiles)
    sections = compose_visit(
        payload.snapshots,
        catalog,
        payload.mode,
        gender=payload.gender,
        payment_status=payload.payment_status,
        discount=payload.discount,
        profile_filter=payload.profile_filter,
    )
    if payload.mode is ComposeMode.PER_PROFILE_REPORTS and payload.profile_filter and not sections:
        raise HTTPException(status_code=404, detail=f"No tests found for profile {payload.profile_filter}")

    logger.info("Composed %s sections in %s mode", len(sections), payload.mode.value)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "mode": payload.mode.value,
            "sections": [section.model_dump(mode="json") for section in sections],
        },
    }
