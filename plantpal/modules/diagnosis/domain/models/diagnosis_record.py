# 📄 File: plantpal/modules/diagnosis/domain/models/diagnosis_record.py
# 🧭 Purpose (Layman Explanation):
# A saved diagnosis result that a user wants to keep, plus the statistics we
# compute over everything a user has saved
# 🧪 Purpose (Technical Summary):
# DiagnosisRecord entity owned by a user and the DiagnosisStats aggregate
# 🔗 Dependencies:
# pydantic, classification value objects
# 🔄 Connected Modules / Calls From:
# diagnosis_service.py, record repositories, diagnosis API schemas

from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from plantpal.shared.utils.helpers import generate_id, utc_now

from .classification import Prediction

HEALTHY_LABEL = "healthy"


class DiagnosisRecord(BaseModel):
    """A classification result saved by a user."""

    record_id: str = Field(default_factory=generate_id)
    user_id: str
    disease: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    predictions: List[Prediction] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    plant_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    timestamp: datetime = Field(default_factory=utc_now)


class DiagnosisStats(BaseModel):
    total_diagnoses: int = 0
    healthy_count: int = 0
    diseased_count: int = 0
    most_common_disease: Optional[str] = None
    average_confidence: float = 0.0

    @classmethod
    def from_records(cls, records: Sequence[DiagnosisRecord]) -> "DiagnosisStats":
        """
        Summarize saved records.

        ``healthy_count`` counts records whose disease is exactly "healthy";
        ``most_common_disease`` breaks ties in favour of the label of the
        oldest record, whatever order the records arrive in.
        """
        total = len(records)
        if total == 0:
            return cls()
        healthy = sum(1 for record in records if record.disease == HEALTHY_LABEL)
        oldest_first = sorted(records, key=lambda record: record.timestamp)
        most_common = Counter(record.disease for record in oldest_first).most_common(1)[0][0]
        average = sum(record.confidence for record in records) / total
        return cls(
            total_diagnoses=total,
            healthy_count=healthy,
            diseased_count=total - healthy,
            most_common_disease=most_common,
            average_confidence=round(average, 4),
        )
