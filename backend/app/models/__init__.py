from __future__ import annotations

from app.models.schemas import EvaluationRecord, ClaimantData, ClientProfileData
from app.models.trials import TrialResult

__all__ = ["EvaluationRecord", "ClaimantData", "ClientProfileData", "TrialResult"]
