from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from labdocs.services.values import to_float


class InputType(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    DROPDOWN = "dropdown"
    MICROSCOPY_NUMBER = "microscopy_number"
    CALCULATED = "calculated"

    @classmethod
    def coerce(cls, raw) -> "InputType":
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip().lower().replace("-", "_")
        if text == "select":
            return cls.DROPDOWN
        try:
            return cls(text)
        except ValueError:
            return cls.NUMBER


NON_NUMERIC_TYPES = frozenset({InputType.TEXT, InputType.DROPDOWN})


class GenderRange(BaseModel):
    """Population-specific bounds for a gender-specific test."""

    model_config = ConfigDict(frozen=True)

    low: float | None = None
    high: float | None = None
    text: str | None = None

    @field_validator("low", "high", mode="before")
    @classmethod
    def _numeric_bound(cls, value):
        return to_float(value)


class TestDefinition(BaseModel):
    """Catalog entry for a single orderable test."""

    __test__ = False
    model_config = ConfigDict(frozen=True, extra="ignore")

    test_id: str = Field(validation_alias=AliasChoices("test_id", "testId", "id"))
    name: str = ""
    category: str = "General"
    input_type: InputType = Field(
        default=InputType.NUMBER, validation_alias=AliasChoices("input_type", "inputType", "type")
    )
    unit: str = ""
    ref_low: float | str | None = Field(default=None, validation_alias=AliasChoices("ref_low", "refLow"))
    ref_high: float | str | None = Field(default=None, validation_alias=AliasChoices("ref_high", "refHigh"))
    ref_text: str = Field(default="", validation_alias=AliasChoices("ref_text", "refText", "referenceText"))
    bio_reference: str = Field(default="", validation_alias=AliasChoices("bio_reference", "bioReference"))
    gender_specific: bool = Field(
        default=False, validation_alias=AliasChoices("gender_specific", "genderSpecific")
    )
    male_range: GenderRange | None = Field(default=None, validation_alias=AliasChoices("male_range", "maleRange"))
    female_range: GenderRange | None = Field(
        default=None, validation_alias=AliasChoices("female_range", "femaleRange")
    )
    dropdown_options: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("dropdown_options", "dropdownOptions", "options")
    )
    price: float = 0.0
    active: bool = Field(default=True, validation_alias=AliasChoices("active", "isActive"))
    order: int = 0
    formula: str | None = None

    @field_validator("input_type", mode="before")
    @classmethod
    def _input_type(cls, value):
        return InputType.coerce(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return to_float(value) or 0.0

    @field_validator("ref_text", "bio_reference", "unit", mode="before")
    @classmethod
    def _text(cls, value):
        return "" if value is None else str(value)


class ProfileDefinition(BaseModel):
    """A named, priced bundle of catalog tests."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    profile_id: str = Field(validation_alias=AliasChoices("profile_id", "profileId", "id"))
    name: str = ""
    test_ids: tuple[str, ...] = Field(default=(), validation_alias=AliasChoices("test_ids", "testIds", "tests"))
    price: float = 0.0
    active: bool = Field(default=True, validation_alias=AliasChoices("active", "isActive"))

    @model_validator(mode="before")
    @classmethod
    def _package_price(cls, data):
        # A blank or zero package price falls through to the list price.
        if not isinstance(data, dict):
            return data
        keys = ("packagePrice", "package_price", "price", "basePrice")
        price = next((to_float(data[key]) for key in keys if to_float(data.get(key))), 0.0)
        return {**data, "price": price}

    @field_validator("test_ids", mode="before")
    @classmethod
    def _member_ids(cls, value):
        if not value:
            return ()
        ids = []
        for item in value:
            if isinstance(item, dict):
                member = item.get("testId") or item.get("test_id") or item.get("id")
            else:
                member = item
            if member:
                ids.append(str(member))
        return ids

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value):
        return to_float(value) or 0.0
