# 📄 File: plantpal/modules/plant_management/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Defines what a plant record is - its name, species and location - and keeps a
# diary of every diagnosis, from which the plant's current health is worked out
# 🧪 Purpose (Technical Summary):
# Plant aggregate with an append-only DiagnosisEntry history and the health status
# derivation rule; the only place health status is ever computed
# 🔗 Dependencies:
# pydantic, datetime, enum
# 🔄 Connected Modules / Calls From:
# plant_service.py, plant repository implementations, plant API schemas

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from plantpal.shared.utils.helpers import generate_id, utc_now

DEFAULT_SPECIES = "Unknown"
DEFAULT_LOCATION = "Unknown"
DISEASED_CONFIDENCE_THRESHOLD = 0.7


class HealthStatus(str, Enum):
    """Plant health as derived from the most recent diagnosis"""
    UNKNOWN = "Unknown"
    HEALTHY = "Healthy"
    DISEASED = "Diseased"
    SUSPICIOUS = "Suspicious"


def derive_health_status(disease: str, confidence: float) -> HealthStatus:
    """
    Map a diagnosis to a health status.

    Rules, evaluated in order:
    1. "healthy" appears in the disease label (case-sensitive substring) -> Healthy
    2. confidence > 0.7 -> Diseased
    3. otherwise -> Suspicious
    """
    if "healthy" in disease:
        return HealthStatus.HEALTHY
    if confidence > DISEASED_CONFIDENCE_THRESHOLD:
        return HealthStatus.DISEASED
    return HealthStatus.SUSPICIOUS


class DiagnosisEntry(BaseModel):
    """One immutable diagnosis recorded against a plant."""

    model_config = ConfigDict(frozen=True)

    entry_id: str = Field(default_factory=generate_id)
    disease: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    image_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class Plant(BaseModel):
    """
    Plant aggregate owned by a single user.

    ``health_status`` and ``last_diagnosis`` are only changed through
    ``record_diagnosis``; ``diagnosis_history`` only ever grows.
    """

    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    plant_id: str = Field(default_factory=generate_id)
    owner_id: str
    name: str
    species: str = DEFAULT_SPECIES
    location: str = DEFAULT_LOCATION
    planted_date: datetime = Field(default_factory=utc_now)
    notes: str = ""
    health_status: HealthStatus = HealthStatus.UNKNOWN
    last_diagnosis: Optional[DiagnosisEntry] = None
    diagnosis_history: List[DiagnosisEntry] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def record_diagnosis(self, entry: DiagnosisEntry) -> None:
        """Append a diagnosis and recompute the derived health fields."""
        self.diagnosis_history = [*self.diagnosis_history, entry]
        self.last_diagnosis = entry
        self.health_status = derive_health_status(entry.disease, entry.confidence).value
        self.touch()

    def touch(self) -> None:
        now = utc_now()
        self.updated_at = now if now >= self.created_at else self.created_at

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, species, location or notes."""
        needle = query.lower()
        return any(
            needle in (value or "").lower()
            for value in (self.name, self.species, self.location, self.notes)
        )


class HealthSummary(BaseModel):
    """Per-owner health counts."""
    total: int = 0
    healthy: int = 0
    diseased: int = 0
    suspicious: int = 0
    unknown: int = 0

    @property
    def plants_needing_attention(self) -> int:
        return self.diseased + self.suspicious
