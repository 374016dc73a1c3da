from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from app.models.schemas import EvaluationRecord, parse_date
from app.report_engine.theme import ReportTheme
from app.services.assets import AssetFetcher


@dataclass(frozen=True)
class BuildContext:
    """Everything a section builder may read during one report build."""

    record: EvaluationRecord
    theme: ReportTheme
    fetcher: AssetFetcher
    generated_at: datetime
    title: str = "Functional Abilities Determination"
    library_columns: int = 6

    @property
    def evaluation_date(self) -> date:
        """Evaluation date from the record, else the generation date."""
        return parse_date(self.record.claimant_data.evaluation_date) or self.generated_at.date()

    @property
    def evaluation_date_text(self) -> str:
        return self.evaluation_date.strftime("%m/%d/%Y")
