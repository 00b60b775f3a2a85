from labdocs.schemas.snapshot import Status, TestSnapshot
from labdocs.services.classifier import (
    classify,
    classify_snapshots,
    normalize_gender,
    record_result,
    resolve_reference,
)


def make_snapshot(test_id, **fields):
    return TestSnapshot.model_validate({"test_id": test_id, "name": test_id, **fields})


def test_explicit_bounds_win_over_reference_text():
    snapshot = make_snapshot("KFT002", ref_low=10, ref_high=45, ref_text="5 - 100")
    reference = resolve_reference(snapshot)
    assert reference.source == "explicit"
    assert (reference.range.min, reference.range.max) == (10.0, 45.0)
    assert classify("50", snapshot) is Status.HIGH


def test_explicit_bounds_accept_numeric_strings():
    snapshot = make_snapshot("BUN", refLow_snapshot="7.94", refHigh_snapshot="20.07")
    assert classify("7.94", snapshot) is Status.BOUNDARY
    assert classify("20.07", snapshot) is Status.BOUNDARY
    assert classify("7.9", snapshot) is Status.LOW
    assert classify("12", snapshot) is Status.NORMAL


def test_partial_explicit_bounds_fall_through_to_text():
    snapshot = make_snapshot("LFT001", ref_low=None, ref_high=40, ref_text="Up to 40")
    reference = resolve_reference(snapshot)
    assert reference.source == "ref_text"
    assert classify("55", snapshot) is Status.HIGH


def test_gender_specific_ranges(hdl):
    assert classify("40", hdl, gender="male") is Status.NORMAL
    assert classify("40", hdl, gender="Female") is Status.LOW
    assert classify("40", hdl, gender="F") is Status.LOW
    assert resolve_reference(hdl, "m").text == "35 - 55"


def test_gender_specific_without_gender_uses_reference_text(hdl):
    reference = resolve_reference(hdl)
    assert reference.source == "ref_text"
    assert classify("40", hdl) is Status.BOUNDARY


def test_gender_range_text_only(hdl):
    snapshot = TestSnapshot.model_validate({**hdl.model_dump(), "female_range": {"text": "45 - 65"}})
    assert resolve_reference(snapshot, "female").source == "gender"
    assert classify("44", snapshot, "female") is Status.LOW


def test_bio_reference_preferred_over_ref_text():
    snapshot = make_snapshot("X1", bioReference_snapshot="< 5", ref_text="1 - 100")
    reference = resolve_reference(snapshot)
    assert reference.source == "bio_reference"
    assert classify("10", snapshot) is Status.HIGH


def test_textual_and_dropdown_types_are_always_normal():
    colour = make_snapshot("URI001", input_type="text", ref_text="Pale Yellow")
    protein = make_snapshot("URI005", inputType="select", ref_low=0, ref_high=1)
    assert classify("Red", colour) is Status.NORMAL
    assert classify("5", protein) is Status.NORMAL


def test_non_numeric_values_are_normal():
    snapshot = make_snapshot("KFT002", ref_low=10, ref_high=45)
    for value in ("", "abc", "12abc", None, "inf", "nan"):
        assert classify(value, snapshot) is Status.NORMAL


def test_thousands_separator_and_whitespace():
    snapshot = make_snapshot("PLT", ref_low=150000, ref_high=450000)
    assert classify(" 1,20,000 ", snapshot) is Status.LOW
    assert classify("250,000", snapshot) is Status.NORMAL


def test_textual_reference_has_no_range():
    snapshot = make_snapshot("URI013", ref_text="Nil")
    reference = resolve_reference(snapshot)
    assert reference.range is None
    assert reference.text == "Nil"
    assert classify("3", snapshot) is Status.NORMAL
    assert resolve_reference(make_snapshot("X")).text == "—"


def test_boundary_can_fold_into_normal():
    snapshot = make_snapshot("KFT002", ref_low=10, ref_high=45)
    assert classify("45", snapshot, report_boundary=False) is Status.NORMAL
    assert classify("46", snapshot, report_boundary=False) is Status.HIGH


def test_classification_is_idempotent(hdl):
    first = classify("60", hdl, "female")
    assert all(classify("60", hdl, "female") is first for _ in range(3))


def test_record_result_returns_new_snapshot(hdl):
    updated = record_result(hdl, "30", "male")
    assert updated.value == "30"
    assert updated.status is Status.LOW
    assert hdl.value == ""
    assert hdl.status is Status.NORMAL

    cleared = record_result(updated, None, "male")
    assert cleared.value == ""
    assert cleared.status is Status.NORMAL


def test_classify_snapshots_refreshes_stale_status():
    stale = make_snapshot("KFT002", ref_low=10, ref_high=45, value="60", status="NORMAL")
    fresh = make_snapshot("KFT004", ref_low=8.5, ref_high=10.5, value="9", status="HIGH")
    refreshed = classify_snapshots([stale, fresh])
    assert [s.status for s in refreshed] == [Status.HIGH, Status.NORMAL]


def test_normalize_gender():
    assert normalize_gender(" MALE ") == "male"
    assert normalize_gender("f") == "female"
    assert normalize_gender("other") is None
    assert normalize_gender(None) is None
