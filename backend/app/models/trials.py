"""
Per-test trial results, normalized into a tagged union at ingestion.

The wizard submits loosely-shaped measurement blobs per test.  Each one is
validated once, here, into one of the ``kind``-discriminated models below,
so section builders only ever call ``summary()`` and the typed helpers.

Kinds:
  - bilateral            left/right trial lists (grip, pinch, muscle tests)
  - range_of_motion      named components, e.g. F/E for flexion/extension
  - industrial_standard  percent of industrial standard (%IS)
  - weight               static/dynamic lifts
  - cardio               VO2max / peak heart rate
  - generic              free-text result for tests outside the catalog
"""

from __future__ import annotations

import math
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


# ──────────────────────────────────────────────────────────────────
# TRIAL STATISTICS
# ──────────────────────────────────────────────────────────────────

def clean_trials(raw) -> list[float]:
    """Keep only positive numeric trials.

    Accepts a list, or the wizard's ``{"trial1": .., "trial6": ..}`` dict.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        raw = [raw[k] for k in sorted(raw)]
    values = []
    for v in raw:
        if isinstance(v, bool):
            continue
        try:
            f = float(v)
        except (TypeError, ValueError):
            continue
        if math.isfinite(f) and f > 0:
            values.append(f)
    return values


def average(values: list[float]) -> float:
    if not values:
        return 0.0
    return round(sum(values) / len(values), 2)


def coefficient_of_variation(values: list[float]) -> float:
    """Population CV in percent, one decimal; 0 with fewer than two trials."""
    if len(values) < 2:
        return 0.0
    avg = sum(values) / len(values)
    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return round(math.sqrt(variance) / avg * 100, 1)


def bilateral_deficiency(left_avg: float, right_avg: float) -> float:
    """Percent difference of the weaker side relative to the stronger."""
    if not left_avg or not right_avg:
        return 0.0
    hi, lo = max(left_avg, right_avg), min(left_avg, right_avg)
    return round((hi - lo) / hi * 100, 1)


def fmt(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


# ──────────────────────────────────────────────────────────────────
# TRIAL MODELS
# ──────────────────────────────────────────────────────────────────

_Trials = Annotated[list[float], Field(default_factory=list)]


class _TrialBase(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
        allow_inf_nan=False,
    )

    test_id: str
    date: str = ""
    duration_min: Optional[float] = None
    posture: Optional[str] = None  # "sit" | "stand"; None → catalog default
    job_demand: str = ""
    job_match: str = ""

    def summary(self) -> str:
        return ""


class BilateralTrial(_TrialBase):
    kind: Literal["bilateral"] = "bilateral"
    left: _Trials
    right: _Trials

    @field_validator("left", "right", mode="before")
    @classmethod
    def clean_sides(cls, v):
        return clean_trials(v)

    @property
    def left_average(self) -> float:
        return average(self.left)

    @property
    def right_average(self) -> float:
        return average(self.right)

    @property
    def left_cv(self) -> float:
        return coefficient_of_variation(self.left)

    @property
    def right_cv(self) -> float:
        return coefficient_of_variation(self.right)

    @property
    def deficiency(self) -> float:
        return bilateral_deficiency(self.left_average, self.right_average)

    def summary(self) -> str:
        parts = []
        if self.left:
            parts.append(f"L={fmt(self.left_average)}")
        if self.right:
            parts.append(f"R={fmt(self.right_average)}")
        return " ".join(parts)


class RangeOfMotionTrial(_TrialBase):
    kind: Literal["range_of_motion"] = "range_of_motion"
    components: dict[str, list[float]] = Field(default_factory=dict)

    @field_validator("components", mode="before")
    @classmethod
    def clean_components(cls, v):
        if not isinstance(v, dict):
            return {}
        return {str(k): clean_trials(vals) for k, vals in v.items()}

    def summary(self) -> str:
        return " ".join(
            f"{name}={fmt(average(vals))}"
            for name, vals in self.components.items() if vals
        )


class IndustrialStandardTrial(_TrialBase):
    kind: Literal["industrial_standard"] = "industrial_standard"
    percent_is: Optional[float] = None

    def summary(self) -> str:
        if self.percent_is is None:
            return ""
        return f"%IS={fmt(round(self.percent_is, 2))}"


class WeightTrial(_TrialBase):
    kind: Literal["weight"] = "weight"
    weight: Optional[float] = None
    trials: _Trials
    unit: str = "lbs"
    frequency: str = ""

    @field_validator("trials", mode="before")
    @classmethod
    def clean_lift_trials(cls, v):
        return clean_trials(v)

    @property
    def value(self) -> Optional[float]:
        if self.weight is not None:
            return self.weight
        if self.trials:
            return average(self.trials)
        return None

    def summary(self) -> str:
        if self.value is None:
            return ""
        text = f"{fmt(self.value)} {self.unit}".strip()
        if self.frequency:
            text += f" {self.frequency}"
        return text


class CardioTrial(_TrialBase):
    kind: Literal["cardio"] = "cardio"
    vo2_max: Optional[float] = None
    peak_heart_rate: Optional[float] = None

    def summary(self) -> str:
        parts = []
        if self.vo2_max is not None:
            parts.append(f"VO2max={fmt(round(self.vo2_max, 2))}")
        if self.peak_heart_rate is not None:
            parts.append(f"HR={fmt(round(self.peak_heart_rate))}")
        return " ".join(parts)


class GenericTrial(_TrialBase):
    kind: Literal["generic"] = "generic"
    result: str = ""

    def summary(self) -> str:
        return self.result


TrialResult = Annotated[
    Union[
        BilateralTrial,
        RangeOfMotionTrial,
        IndustrialStandardTrial,
        WeightTrial,
        CardioTrial,
        GenericTrial,
    ],
    Field(discriminator="kind"),
]
