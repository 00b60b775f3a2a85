"""Section descriptors for lab reports and invoices.

The composer never renders anything: it returns plain ``DocumentSection``
objects that a renderer turns into pages. Each section boundary is where a
renderer starts a new page.
"""

import logging
from typing import Iterable

from labdocs.schemas.catalog import ProfileDefinition
from labdocs.schemas.documents import (
    ComposeMode,
    DocumentSection,
    InvoiceLineItem,
    InvoiceTotals,
    ProfileGroup,
    ReportEntry,
)
from labdocs.schemas.snapshot import Status, TestSnapshot
from labdocs.services.classifier import classify_snapshot, resolve_reference
from labdocs.services.formula import apply_calculated_values
from labdocs.services.profile_grouper import group_by_profile, resolve_groups
from labdocs.services.values import money, price_of

logger = logging.getLogger(__name__)

INVOICE_TITLE = "Lab Invoice"


def _report_section(group: ProfileGroup, gender: str | None) -> DocumentSection:
    entries = []
    for snapshot in group.snapshots:
        classified = classify_snapshot(snapshot, gender)
        reference = resolve_reference(snapshot, gender)
        entries.append(
            ReportEntry(
                snapshot=classified,
                status=classified.status,
                reference_text=reference.text,
                abnormal=classified.status is not Status.NORMAL and bool(classified.value.strip()),
            )
        )
    return DocumentSection(
        kind="report",
        profile_key=group.key,
        profile_name=group.name,
        price=group.price,
        entries=entries,
    )


def invoice_totals(subtotal: float, discount=0.0, payment_status: str | None = None) -> InvoiceTotals:
    applied = min(max(price_of(discount), 0.0), subtotal)
    total = money(subtotal - applied)
    paid = total if (payment_status or "").strip().lower() == "paid" else 0.0
    return InvoiceTotals(
        subtotal=money(subtotal),
        discount=money(applied),
        tax=0.0,
        total=total,
        amount_paid=paid,
        balance=money(total - paid),
    )


def _invoice_section(
    groups: list[ProfileGroup],
    discount=0.0,
    payment_status: str | None = None,
) -> DocumentSection:
    line_items = [
        InvoiceLineItem(
            profile_key=group.key,
            name=group.name,
            price=group.price,
            test_count=len(group.snapshots),
            matched=group.matched,
        )
        for group in groups
    ]
    totals = invoice_totals(sum(item.price for item in line_items), discount, payment_status)
    return DocumentSection(
        kind="invoice",
        profile_name=INVOICE_TITLE,
        price=totals.subtotal,
        line_items=line_items,
        totals=totals,
    )


def compose(
    grouped: dict[str, list[TestSnapshot]],
    profiles: Iterable[ProfileDefinition] | None,
    mode: ComposeMode | str,
    gender: str | None = None,
    payment_status: str | None = None,
    discount=0.0,
    profile_filter: str | None = None,
) -> list[DocumentSection]:
    mode = ComposeMode(mode)
    groups = resolve_groups(grouped, profiles)

    if mode is ComposeMode.PER_PROFILE_REPORTS:
        if profile_filter is not None:
            groups = [group for group in groups if group.key == profile_filter]
        return [_report_section(group, gender) for group in groups]

    invoice = _invoice_section(groups, discount, payment_status)
    if mode is ComposeMode.COMBINED_INVOICE:
        return [invoice]

    logger.debug("Composing invoice with %s report sections", len(groups))
    return [invoice, *(_report_section(group, gender) for group in groups)]


def compose_visit(
    snapshots: Iterable[TestSnapshot],
    profiles: Iterable[ProfileDefinition] | None,
    mode: ComposeMode | str,
    gender: str | None = None,
    **options,
) -> list[DocumentSection]:
    """Run the whole pipeline for one visit: calculated values, grouping, composition."""
    catalog = list(profiles or [])
    filled = apply_calculated_values(snapshots)
    return compose(group_by_profile(filled, catalog), catalog, mode, gender=gender, **options)


def invoice_total(sections: Iterable[DocumentSection]) -> float | None:
    for section in sections:
        if section.kind == "invoice" and section.totals is not None:
            return section.totals.subtotal
    return None
