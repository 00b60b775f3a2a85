from fastapi import APIRouter

from labdocs.seed.catalog_seed import load_profiles, load_tests

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/tests")
def list_tests(active_only: bool = True):
    tests = [test for test in load_tests() if test.active or not active_only]
    return {"statusCode": 200, "message": "Success", "data": [test.model_dump(mode="json") for test in tests]}


@router.get("/profiles")
def list_profiles(active_only: bool = True):
    profiles = [profile for profile in load_profiles() if profile.active or not active_only]
    return {
        "statusCode": 200,
        "message": "Success",
        "data": [profile.model_dump(mode="json") for profile in profiles],
    }
