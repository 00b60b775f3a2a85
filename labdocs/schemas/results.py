from pydantic import BaseModel

from labdocs.schemas.ranges import ReferenceInfo
from labdocs.schemas.snapshot import Status, TestSnapshot


class ParseRangeRequest(BaseModel):
    text: str


class ClassifyRequest(BaseModel):
    snapshot: TestSnapshot
    value: str | float | None = None
    gender: str | None = None


class ClassifyResult(BaseModel):
    status: Status
    reference: ReferenceInfo
    snapshot: TestSnapshot
