from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from labdocs.schemas.catalog import ProfileDefinition
from labdocs.schemas.snapshot import Status, TestSnapshot

MatchSource = Literal["snapshot", "overlap", "custom"]


class ComposeMode(str, Enum):
    PER_PROFILE_REPORTS = "per-profile-reports"
    COMBINED_INVOICE = "combined-invoice"
    COMBINED_REPORT_AND_INVOICE = "combined-report-and-invoice"


class ProfileGroup(BaseModel):
    """A profile key with its snapshots and the resolved label and price."""

    key: str
    name: str
    price: float
    matched: bool
    match_source: MatchSource = "snapshot"
    snapshots: list[TestSnapshot]


class ReportEntry(BaseModel):
    snapshot: TestSnapshot
    status: Status
    reference_text: str
    abnormal: bool = False


class InvoiceLineItem(BaseModel):
    profile_key: str
    name: str
    price: float
    test_count: int
    matched: bool


class InvoiceTotals(BaseModel):
    subtotal: float
    discount: float = 0.0
    tax: float = 0.0
    total: float
    amount_paid: float = 0.0
    balance: float


class DocumentSection(BaseModel):
    kind: Literal["report", "invoice"]
    profile_key: str | None = None
    profile_name: str
    price: float = 0.0
    entries: list[ReportEntry] = Field(default_factory=list)
    line_items: list[InvoiceLineItem] = Field(default_factory=list)
    totals: InvoiceTotals | None = None


class GroupRequest(BaseModel):
    snapshots: list[TestSnapshot]
    profiles: list[ProfileDefinition] | None = None


class ComposeRequest(BaseModel):
    snapshots: list[TestSnapshot]
    profiles: list[ProfileDefinition] | None = None
    mode: ComposeMode = ComposeMode.COMBINED_REPORT_AND_INVOICE
    gender: str | None = None
    payment_status: str | None = None
    discount: float = Field(default=0.0, ge=0)
    profile_filter: str | None = None
