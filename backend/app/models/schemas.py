from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.catalog import kind_for
from app.models.trials import TrialResult

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d", "%b %d, %Y", "%B %d, %Y")


def parse_date(value: str) -> Optional[date]:
    """Best-effort parse of a wizard date string; None when unparseable."""
    if not value:
        return None
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for f in _DATE_FORMATS:
        try:
            return datetime.strptime(text, f).date()
        except ValueError:
            continue
    return None


class RecordModel(BaseModel):
    """Base for every ingestion model: camelCase JSON, frozen, lenient.

    Explicit ``null`` values are dropped before validation so the field
    default (usually an empty string) applies instead.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
        allow_inf_nan=False,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class InjuryEvent(RecordModel):
    date: str = ""
    description: str = ""


class ClaimantData(RecordModel):
    full_name: str = ""
    first_name: str = ""
    last_name: str = ""
    claimant_id: str = Field(
        "", validation_alias=AliasChoices("claimantID", "claimantId", "claimant_id"),
        serialization_alias="claimantId",
    )
    date_of_birth: str = ""
    gender: str = ""
    address: str = ""
    phone: str = ""
    work_phone: str = ""
    height: str = ""
    height_unit: str = ""
    weight: str = ""
    weight_unit: str = ""
    occupation: str = Field(
        "", validation_alias=AliasChoices("occupation", "currentOccupation"),
    )
    employer: str = ""
    insurance: str = ""
    physician: str = ""
    referred_by: str = ""
    dominant_hand: str = ""
    resting_pulse: str = ""
    bp_sitting: str = ""
    evaluation_date: str = ""
    photo: Optional[str] = None
    injury_history: list[InjuryEvent] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        if self.full_name.strip():
            return self.full_name.strip()
        if self.last_name or self.first_name:
            return ", ".join(p for p in (self.last_name.strip(), self.first_name.strip()) if p)
        return ""

    def age(self, as_of: date) -> Optional[int]:
        born = parse_date(self.date_of_birth)
        if born is None or born > as_of:
            return None
        years = as_of.year - born.year
        if (as_of.month, as_of.day) < (born.month, born.day):
            years -= 1
        return years


class ClientProfileData(RecordModel):
    """Evaluator and clinic profile."""

    name: str = ""
    credentials: str = ""
    clinic_name: str = ""
    address: str = ""
    phone: str = ""
    fax: str = ""
    logo: Optional[str] = None
    clinic_logo: Optional[str] = None
    logo_url: Optional[str] = None
    logo_path: Optional[str] = None

    @property
    def logo_ref(self) -> Optional[str]:
        for ref in (self.logo, self.clinic_logo, self.logo_url, self.logo_path):
            if ref:
                return ref
        return None

    @property
    def signature_name(self) -> str:
        return ", ".join(p for p in (self.name, self.credentials) if p)


class PainMarker(RecordModel):
    x: float  # percent of image width
    y: float  # percent of image height
    type: str = ""
    view: str = "front"
    concern: str = ""
    description: str = ""


class PainIllustration(RecordModel):
    diagram: Optional[str] = None
    markers: list[PainMarker] = Field(default_factory=list)


class Measurement(RecordModel):
    area: str = ""
    value: str = ""
    passed: Optional[bool] = None
    norm: str = ""


def _image_ref(item) -> Optional[str]:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        for key in ("url", "dataUrl", "path", "src"):
            if item.get(key):
                return item[key]
    return None


class ReferralQuestion(RecordModel):
    question: str = ""
    answer: str = ""
    measurements: list[Measurement] = Field(default_factory=list)
    images: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("images", "savedImageData"),
    )
    note: str = ""

    @field_validator("images", mode="before")
    @classmethod
    def image_refs(cls, v):
        if not isinstance(v, list):
            return []
        return [ref for ref in (_image_ref(i) for i in v) if ref]


class LibraryItem(RecordModel):
    name: str = ""
    url: Optional[str] = Field(
        None, validation_alias=AliasChoices("url", "dataUrl", "path", "src"),
    )


class EvaluationRecord(RecordModel):
    """Complete input for one report build. Never mutated after ingestion."""

    claimant_data: ClaimantData = Field(default_factory=ClaimantData)
    client_profile_data: ClientProfileData = Field(default_factory=ClientProfileData)
    tests: list[str]
    test_results: list[TrialResult] = Field(default_factory=list)
    pain_illustration: PainIllustration = Field(default_factory=PainIllustration)
    referral_questions: list[ReferralQuestion] = Field(default_factory=list)
    conclusions: list[str] = Field(default_factory=list)
    digital_library: list[LibraryItem] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def tag_trial_results(cls, data):
        """Attach the ``kind`` discriminator to untagged trial results.

        ``testResults`` may be a list of ``{testId, ...}`` or a mapping of
        test id → fields; either way each entry leaves here tagged.
        """
        if not isinstance(data, dict):
            return data
        key = "testResults" if "testResults" in data else "test_results"
        raw = data.get(key)
        if isinstance(raw, dict):
            raw = [{"testId": tid, **(fields or {})} for tid, fields in raw.items()]
        if isinstance(raw, list):
            tagged = []
            for item in raw:
                if isinstance(item, dict) and "kind" not in item:
                    tid = item.get("testId", item.get("test_id", ""))
                    item = {**item, "kind": kind_for(str(tid))}
                tagged.append(item)
            data = {**data, key: tagged}
        return data

    def trial_for(self, test_id: str):
        for trial in self.test_results:
            if trial.test_id == test_id:
                return trial
        return None
