from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from labdocs.main import app
from labdocs.schemas.catalog import ProfileDefinition
from labdocs.schemas.snapshot import TestSnapshot


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def profiles() -> list[ProfileDefinition]:
    return [
        ProfileDefinition.model_validate(
            {"profileId": "kidney", "name": "Kidney Function Test", "packagePrice": 500, "tests": ["KFT001", "KFT002", "KFT003"]}
        ),
        ProfileDefinition.model_validate(
            {"profileId": "lipid", "name": "Lipid Profile", "price": 450, "tests": [{"testId": "LIP001"}, {"testId": "LIP002"}]}
        ),
    ]


@pytest.fixture()
def hdl() -> TestSnapshot:
    return TestSnapshot(
        test_id="LIP002",
        name="HDL Cholesterol",
        unit="mg/dL",
        gender_specific=True,
        male_range={"low": 35, "high": 55, "text": "35 - 55"},
        female_range={"low": 45, "high": 65, "text": "45 - 65"},
        ref_text="40 - 60",
    )
