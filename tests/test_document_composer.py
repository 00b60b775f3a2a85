from collections import Counter

import pytest

from labdocs.schemas.documents import ComposeMode
from labdocs.schemas.snapshot import Status, TestSnapshot
from labdocs.services.document_composer import compose, compose_visit, invoice_total, invoice_totals
from labdocs.services.profile_grouper import group_by_profile


def _snapshot(test_id, profile=None, **fields):
    return TestSnapshot.model_validate({"test_id": test_id, "name": test_id, "profile_id": profile, **fields})


@pytest.fixture()
def visit(hdl):
    return [
        _snapshot("KFT002", "kidney", ref_low=10, ref_high=45, value="60"),
        hdl.model_copy(update={"profile_id": "lipid", "value": "40"}),
        _snapshot("KFT001", "kidney", ref_text="0.6 - 1.2", value="0.9"),
        _snapshot("VITD", price=900, ref_text="30 - 100", value="12"),
    ]


def test_per_profile_reports_one_section_per_group(visit, profiles):
    sections = compose(group_by_profile(visit, profiles), profiles, ComposeMode.PER_PROFILE_REPORTS)
    assert [section.kind for section in sections] == ["report", "report", "report"]
    assert [section.profile_key for section in sections] == ["kidney", "lipid", "CUSTOM"]
    assert [entry.snapshot.test_id for entry in sections[0].entries] == ["KFT002", "KFT001"]
    assert sections[0].profile_name == "Kidney Function Test"


def test_report_entries_are_classified_for_gender(visit, profiles):
    grouped = group_by_profile(visit, profiles)
    male = compose(grouped, profiles, "per-profile-reports", gender="male")
    female = compose(grouped, profiles, "per-profile-reports", gender="female")
    assert male[1].entries[0].status is Status.NORMAL
    assert female[1].entries[0].status is Status.LOW
    assert female[1].entries[0].reference_text == "45 - 65"
    assert male[0].entries[0].status is Status.HIGH
    assert male[0].entries[0].abnormal
    assert not male[0].entries[1].abnormal


def test_profile_filter_limits_reports(visit, profiles):
    sections = compose(group_by_profile(visit, profiles), profiles, "per-profile-reports", profile_filter="lipid")
    assert [section.profile_key for section in sections] == ["lipid"]
    assert compose(group_by_profile(visit, profiles), profiles, "per-profile-reports", profile_filter="nope") == []


def test_combined_invoice_line_items_and_subtotal(visit, profiles):
    sections = compose(group_by_profile(visit, profiles), profiles, ComposeMode.COMBINED_INVOICE)
    assert len(sections) == 1
    invoice = sections[0]
    assert invoice.kind == "invoice"
    assert [(item.profile_key, item.price) for item in invoice.line_items] == [
        ("kidney", 500.0),
        ("lipid", 450.0),
        ("CUSTOM", 900.0),
    ]
    assert invoice.totals.subtotal == sum(item.price for item in invoice.line_items) == 1850.0
    assert invoice.line_items[0].test_count == 2
    assert invoice_total(sections) == 1850.0


def test_combined_report_and_invoice_puts_invoice_first(visit, profiles):
    sections = compose(group_by_profile(visit, profiles), profiles, ComposeMode.COMBINED_REPORT_AND_INVOICE)
    assert [section.kind for section in sections] == ["invoice", "report", "report", "report"]
    assert [section.profile_key for section in sections[1:]] == ["kidney", "lipid", "CUSTOM"]


def test_compose_visit_fills_calculated_values(profiles):
    visit = [
        _snapshot("LIP001", "lipid", value="180"),
        _snapshot("LIP002", "lipid", value="45"),
        _snapshot("LIP006", "lipid", input_type="calculated", formula="LIP001 / LIP002", ref_text="Up to 4.5"),
    ]
    sections = compose_visit(visit, profiles, "per-profile-reports")
    ratio = sections[0].entries[2]
    assert ratio.snapshot.value == "4.00"
    assert ratio.status is Status.NORMAL


def test_compose_visit_without_catalog_prices_per_test():
    visit = [_snapshot("A", price=100, value="1"), _snapshot("B", price="bad", value="2")]
    sections = compose_visit(visit, None, "combined-invoice")
    assert sections[0].line_items[0].name == "Custom Test Package"
    assert invoice_total(sections) == 100.0


def test_empty_visit_gives_empty_invoice(profiles):
    sections = compose_visit([], profiles, "combined-report-and-invoice")
    assert len(sections) == 1
    assert sections[0].line_items == []
    assert sections[0].totals.subtotal == 0.0


def test_invoice_totals_follow_payment_status():
    paid = invoice_totals(1000.0, discount=150, payment_status="Paid")
    assert (paid.total, paid.amount_paid, paid.balance, paid.tax) == (850.0, 850.0, 0.0, 0.0)

    pending = invoice_totals(1000.0, payment_status="pending")
    assert (pending.total, pending.amount_paid, pending.balance) == (1000.0, 0.0, 1000.0)


def test_discount_is_clamped_to_subtotal():
    totals = invoice_totals(200.0, discount=500)
    assert totals.discount == 200.0
    assert totals.total == 0.0
    assert invoice_totals(200.0, discount=-20).discount == 0.0


def test_reports_and_invoice_cover_every_group_once(profiles):
    visit = [
        _snapshot("KFT001", "kidney", value="1.0"),
        _snapshot("LIP001", value="150"),
        _snapshot("LIP002", value="50"),
        _snapshot("KFT002", "kidney", value="20"),
        _snapshot("T3", "thyroid", price=200, value="1.1"),
    ]
    custom = [_snapshot("VITD", price=900), _snapshot("B12", price=400)]
    grouped = group_by_profile(visit, profiles)
    grouped.update(group_by_profile(custom, profiles))
    assert list(grouped) == ["kidney", "lipid", "thyroid", "CUSTOM"]

    reports = compose(grouped, profiles, ComposeMode.PER_PROFILE_REPORTS)
    [invoice] = compose(grouped, profiles, ComposeMode.COMBINED_INVOICE)

    reported = Counter(entry.snapshot.test_id for section in reports for entry in section.entries)
    assert reported == Counter(snapshot.test_id for snapshot in visit + custom)
    assert [item.profile_key for item in invoice.line_items] == list(grouped)
    assert [section.profile_key for section in reports] == list(grouped)
    assert {item.profile_key: item.test_count for item in invoice.line_items} == {
        key: len(members) for key, members in grouped.items()
    }
