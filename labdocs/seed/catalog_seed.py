from functools import lru_cache

from labdocs.schemas.catalog import ProfileDefinition, TestDefinition

KIDNEY = "KIDNEY FUNCTION TEST"
LIVER = "LIVER FUNCTION TEST"
LIPID = "LIPID PROFILE"
DIABETES = "DIABETES PROFILE"
URINE = "URINE ROUTINE EXAMINATION"
SUGAR = "SUGAR PROFILE"

_GRADED = ["Negative", "Trace", "1+", "2+", "3+", "4+"]

TESTS = [
    {"test_id": "KFT001", "name": "Creatinine", "category": KIDNEY, "unit": "mg/dL", "ref_text": "0.6 - 1.2", "order": 1,
     "gender_specific": True, "male_range": {"low": 0.7, "high": 1.3, "text": "0.7 - 1.3"},
     "female_range": {"low": 0.6, "high": 1.1, "text": "0.6 - 1.1"}},
    {"test_id": "KFT002", "name": "Urea", "category": KIDNEY, "unit": "mg/dL", "ref_low": 10, "ref_high": 45, "ref_text": "10 - 45", "order": 2},
    {"test_id": "KFT003", "name": "Uric Acid", "category": KIDNEY, "unit": "mg/dL", "ref_text": "3.4 - 7.0", "order": 3,
     "gender_specific": True, "male_range": {"low": 3.4, "high": 7.0, "text": "3.4 - 7.0"},
     "female_range": {"low": 2.4, "high": 6.0, "text": "2.4 - 6.0"}},
    {"test_id": "KFT004", "name": "Calcium", "category": KIDNEY, "unit": "mg/dL", "ref_low": 8.5, "ref_high": 10.5, "ref_text": "8.5 - 10.5", "order": 4},
    {"test_id": "KFT005", "name": "BUN (Blood Urea Nitrogen)", "category": KIDNEY, "unit": "mg/dL", "ref_low": 7, "ref_high": 20, "ref_text": "7 - 20", "order": 5},
    {"test_id": "KFT006", "name": "eGFR", "category": KIDNEY, "unit": "mL/min/1.73m²", "ref_text": ">90", "order": 6},
    {"test_id": "LFT001", "name": "SGOT (AST)", "category": LIVER, "unit": "U/L", "ref_text": "Up to 40", "order": 1},
    {"test_id": "LFT002", "name": "SGPT (ALT)", "category": LIVER, "unit": "U/L", "ref_text": "Up to 41", "order": 2},
    {"test_id": "LFT003", "name": "ALP (Alkaline Phosphatase)", "category": LIVER, "unit": "U/L", "ref_low": 30, "ref_high": 120, "ref_text": "30 - 120", "order": 3},
    {"test_id": "LFT004", "name": "Total Bilirubin", "category": LIVER, "unit": "mg/dL", "ref_low": 0.3, "ref_high": 1.2, "ref_text": "0.3 - 1.2", "order": 4},
    {"test_id": "LFT005", "name": "Direct Bilirubin", "category": LIVER, "unit": "mg/dL", "ref_low": 0, "ref_high": 0.3, "ref_text": "0 - 0.3", "order": 5},
    {"test_id": "LFT006", "name": "Total Protein", "category": LIVER, "unit": "g/dL", "ref_low": 6.0, "ref_high": 8.3, "ref_text": "6.0 - 8.3", "order": 6},
    {"test_id": "LFT007", "name": "Albumin", "category": LIVER, "unit": "g/dL", "ref_low": 3.5, "ref_high": 5.0, "ref_text": "3.5 - 5.0", "order": 7},
    {"test_id": "LFT008", "name": "A/G Ratio", "category": LIVER, "unit": "ratio", "ref_low": 0.9, "ref_high": 2.0, "ref_text": "0.9 - 2.0", "order": 8},
    {"test_id": "LIP001", "name": "Total Cholesterol", "category": LIPID, "unit": "mg/dL", "ref_text": "Up to 200", "order": 1},
    {"test_id": "LIP002", "name": "HDL Cholesterol", "category": LIPID, "unit": "mg/dL", "ref_text": "40 - 60", "order": 2,
     "gender_specific": True, "male_range": {"low": 35, "high": 55, "text": "35 - 55"},
     "female_range": {"low": 45, "high": 65, "text": "45 - 65"}},
    {"test_id": "LIP003", "name": "LDL Cholesterol", "category": LIPID, "unit": "mg/dL", "ref_text": "Up to 100", "order": 3},
    {"test_id": "LIP004", "name": "VLDL", "category": LIPID, "unit": "mg/dL", "ref_low": 15, "ref_high": 35, "ref_text": "15 - 35", "order": 4},
    {"test_id": "LIP005", "name": "Triglycerides", "category": LIPID, "unit": "mg/dL", "ref_low": 60, "ref_high": 150, "ref_text": "60 - 150", "order": 5},
    {"test_id": "LIP006", "name": "TC/HDL Ratio", "category": LIPID, "input_type": "calculated", "unit": "ratio",
     "ref_text": "Up to 4.5", "formula": "LIP001 / LIP002", "order": 6},
    {"test_id": "LIP007", "name": "LDL/HDL Ratio", "category": LIPID, "input_type": "calculated", "unit": "ratio",
     "ref_text": "Up to 3.0", "formula": "LIP003 / LIP002", "order": 7},
    {"test_id": "LIP008", "name": "Non-HDL Cholesterol", "category": LIPID, "input_type": "calculated", "unit": "mg/dL",
     "ref_text": "Up to 130", "formula": "LIP001 - LIP002", "order": 8},
    {"test_id": "DIA001", "name": "FBS (Fasting Blood Sugar)", "category": DIABETES, "unit": "mg/dL", "ref_low": 70, "ref_high": 110, "ref_text": "70 - 110", "order": 1},
    {"test_id": "DIA002", "name": "RBS (Random Blood Sugar)", "category": DIABETES, "unit": "mg/dL", "ref_low": 70, "ref_high": 140, "ref_text": "70 - 140", "order": 2},
    {"test_id": "DIA003", "name": "PPBS (Post Prandial Blood Sugar)", "category": DIABETES, "unit": "mg/dL", "ref_text": "Up to 140", "order": 3},
    {"test_id": "DIA004", "name": "HbA1c", "category": DIABETES, "unit": "%", "ref_low": 4.0, "ref_high": 5.7, "ref_text": "4.0 - 5.7", "order": 4},
    {"test_id": "URI001", "name": "Colour", "category": URINE, "input_type": "text", "ref_text": "Pale Yellow", "order": 1},
    {"test_id": "URI002", "name": "Appearance", "category": URINE, "input_type": "text", "ref_text": "Clear", "order": 2},
    {"test_id": "URI003", "name": "pH", "category": URINE, "ref_low": 5.0, "ref_high": 7.0, "ref_text": "5.0 - 7.0", "order": 3},
    {"test_id": "URI004", "name": "Specific Gravity", "category": URINE, "ref_low": 1.010, "ref_high": 1.025, "ref_text": "1.010 - 1.025", "order": 4},
    {"test_id": "URI005", "name": "Protein", "category": URINE, "input_type": "dropdown", "ref_text": "Negative", "dropdown_options": _GRADED, "order": 5},
    {"test_id": "URI006", "name": "Glucose", "category": URINE, "input_type": "dropdown", "ref_text": "Negative", "dropdown_options": _GRADED, "order": 6},
    {"test_id": "URI007", "name": "Ketone", "category": URINE, "input_type": "dropdown", "ref_text": "Negative", "dropdown_options": _GRADED[:5], "order": 7},
    {"test_id": "URI008", "name": "Nitrite", "category": URINE, "input_type": "dropdown", "ref_text": "Negative", "dropdown_options": ["Negative", "Positive"], "order": 8},
    {"test_id": "URI009", "name": "Leukocyte Esterase", "category": URINE, "input_type": "dropdown", "ref_text": "Negative", "dropdown_options": _GRADED[:5], "order": 9},
    {"test_id": "URI010", "name": "RBC", "category": URINE, "input_type": "microscopy_number", "unit": "/HPF", "ref_low": 0, "ref_high": 2, "ref_text": "0 - 2 /HPF", "order": 10},
    {"test_id": "URI011", "name": "Pus Cells", "category": URINE, "input_type": "microscopy_number", "unit": "/HPF", "ref_low": 0, "ref_high": 5, "ref_text": "0 - 5 /HPF", "order": 11},
    {"test_id": "URI012", "name": "Epithelial Cells", "category": URINE, "input_type": "microscopy_number", "unit": "/HPF", "ref_low": 0, "ref_high": 3, "ref_text": "0 - 3 /HPF", "order": 12},
    {"test_id": "URI013", "name": "Casts", "category": URINE, "input_type": "text", "ref_text": "Nil", "order": 13},
    {"test_id": "URI014", "name": "Crystals", "category": URINE, "input_type": "text", "ref_text": "Nil", "order": 14},
    {"test_id": "SUG001", "name": "FBS (Fasting Blood Sugar)", "category": SUGAR, "unit": "mg/dL", "ref_low": 70, "ref_high": 110, "ref_text": "70 - 110", "order": 1},
    {"test_id": "SUG002", "name": "RBS (Random Blood Sugar)", "category": SUGAR, "unit": "mg/dL", "ref_low": 70, "ref_high": 140, "ref_text": "70 - 140", "order": 2},
    {"test_id": "SUG003", "name": "PPBS (Post Prandial Blood Sugar)", "category": SUGAR, "unit": "mg/dL", "ref_text": "Up to 140", "order": 3},
]

PROFILES = [
    {"profile_id": "kidney", "name": "Kidney Function Test", "price": 500,
     "test_ids": ["KFT001", "KFT002", "KFT003", "KFT004", "KFT005", "KFT006"]},
    {"profile_id": "liver", "name": "Liver Function Test", "price": 600,
     "test_ids": ["LFT001", "LFT002", "LFT003", "LFT004", "LFT005", "LFT006", "LFT007", "LFT008"]},
    {"profile_id": "lipid", "name": "Lipid Profile", "price": 450,
     "test_ids": ["LIP001", "LIP002", "LIP003", "LIP004", "LIP005", "LIP006", "LIP007", "LIP008"]},
    {"profile_id": "diabetes", "name": "Diabetes Profile", "price": 550,
     "test_ids": ["DIA001", "DIA002", "DIA003", "DIA004"]},
    {"profile_id": "urine", "name": "Urine Routine Examination", "price": 200,
     "test_ids": [f"URI{n:03d}" for n in range(1, 15)]},
    {"profile_id": "sugar", "name": "Sugar Profile", "price": 150,
     "test_ids": ["SUG001", "SUG002", "SUG003"]},
]


@lru_cache
def load_tests() -> tuple[TestDefinition, ...]:
    tests = [TestDefinition.model_validate(item) for item in TESTS]
    return tuple(sorted(tests, key=lambda t: (t.category, t.order)))


@lru_cache
def load_profiles() -> tuple[ProfileDefinition, ...]:
    return tuple(ProfileDefinition.model_validate(item) for item in PROFILES)


def active_profiles() -> list[ProfileDefinition]:
    return [profile for profile in load_profiles() if profile.active]
