from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from labdocs.schemas.catalog import GenderRange, InputType, TestDefinition
from labdocs.services.values import to_float


class Status(str, Enum):
    NORMAL = "NORMAL"
    LOW = "LOW"
    HIGH = "HIGH"
    BOUNDARY = "BOUNDARY"

    @classmethod
    def coerce(cls, raw) -> "Status":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw or "").strip().upper())
        except ValueError:
            return cls.NORMAL


class TestSnapshot(BaseModel):
    """Immutable copy of a catalog test taken when it was attached to a visit.

    Field aliases accept the camelCase and ``*_snapshot`` spellings handed over
    by the visit collaborator, so callers never need to fall back between them.
    """

    __test__ = False
    model_config = ConfigDict(frozen=True, extra="ignore")

    test_id: str | None = Field(default=None, validation_alias=AliasChoices("test_id", "testId"))
    name: str = Field(default="", validation_alias=AliasChoices("name", "name_snapshot", "description"))
    category: str = Field(default="General", validation_alias=AliasChoices("category", "category_snapshot"))
    unit: str = Field(default="", validation_alias=AliasChoices("unit", "unit_snapshot"))
    ref_low: float | str | None = Field(
        default=None, validation_alias=AliasChoices("ref_low", "refLow_snapshot", "refLow", "low")
    )
    ref_high: float | str | None = Field(
        default=None, validation_alias=AliasChoices("ref_high", "refHigh_snapshot", "refHigh", "high")
    )
    ref_text: str = Field(
        default="", validation_alias=AliasChoices("ref_text", "refText_snapshot", "refText", "referenceText")
    )
    bio_reference: str = Field(
        default="", validation_alias=AliasChoices("bio_reference", "bioReference_snapshot", "bioReference")
    )
    input_type: InputType = Field(
        default=InputType.NUMBER,
        validation_alias=AliasChoices("input_type", "inputType_snapshot", "inputType", "type"),
    )
    gender_specific: bool = Field(
        default=False, validation_alias=AliasChoices("gender_specific", "genderSpecific")
    )
    male_range: GenderRange | None = Field(default=None, validation_alias=AliasChoices("male_range", "maleRange"))
    female_range: GenderRange | None = Field(
        default=None, validation_alias=AliasChoices("female_range", "femaleRange")
    )
    dropdown_options: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("dropdown_options", "dropdownOptions_snapshot", "dropdownOptions"),
    )
    price: float = Field(default=0.0, validation_alias=AliasChoices("price", "price_snapshot"))
    formula: str | None = Field(default=None, validation_alias=AliasChoices("formula", "formula_snapshot"))

    value: str = ""
    profile_id: str | None = Field(default=None, validation_alias=AliasChoices("profile_id", "profileId", "profile"))
    profile_name: str | None = Field(default=None, validation_alias=AliasChoices("profile_name", "profileName"))
    status: Status = Status.NORMAL

    @field_validator("input_type", mode="before")
    @classmethod
    def _input_type(cls, value):
        return InputType.coerce(value)

    @field_validator("status", mode="before")
    @classmethod
    def _status(cls, value):
        return Status.coerce(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return to_float(value) or 0.0

    @field_validator("value", mode="before")
    @classmethod
    def _value(cls, value):
        if value is None:
            return ""
        return str(value)

    @field_validator("name", "unit", "ref_text", "bio_reference", mode="before")
    @classmethod
    def _text(cls, value):
        return "" if value is None else str(value)

    @field_validator("dropdown_options", mode="before")
    @classmethod
    def _options(cls, value):
        return tuple(str(option) for option in value or ())

    @field_validator("profile_id", "profile_name", mode="before")
    @classmethod
    def _optional_key(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None


def snapshot_test(
    definition: TestDefinition,
    profile_id: str | None = None,
    profile_name: str | None = None,
) -> TestSnapshot:
    return TestSnapshot(
        test_id=definition.test_id,
        name=definition.name,
        category=definition.category,
        unit=definition.unit,
        ref_low=definition.ref_low,
        ref_high=definition.ref_high,
        ref_text=definition.ref_text,
        bio_reference=definition.bio_reference,
        input_type=definition.input_type,
        gender_specific=definition.gender_specific,
        male_range=definition.male_range,
        female_range=definition.female_range,
        dropdown_options=tuple(definition.dropdown_options),
        price=definition.price,
        formula=definition.formula,
        profile_id=profile_id,
        profile_name=profile_name,
    )
