from labdocs.schemas.catalog import GenderRange, InputType, ProfileDefinition, TestDefinition
from labdocs.schemas.documents import (
    ComposeMode,
    DocumentSection,
    InvoiceLineItem,
    InvoiceTotals,
    ProfileGroup,
    ReportEntry,
)
from labdocs.schemas.ranges import ParsedRange, ReferenceInfo
from labdocs.schemas.snapshot import Status, TestSnapshot, snapshot_test

__all__ = [
    "ComposeMode",
    "DocumentSection",
    "GenderRange",
    "InputType",
    "InvoiceLineItem",
    "InvoiceTotals",
    "ParsedRange",
    "ProfileDefinition",
    "ProfileGroup",
    "ReferenceInfo",
    "ReportEntry",
    "Status",
    "TestDefinition",
    "TestSnapshot",
    "snapshot_test",
]
