# 📄 File: plantpal/modules/plant_management/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes the plant forms users fill in and how plants and their diagnosis
# diaries look when the app sends them back.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for plant endpoints with camelCase aliases.
# Name/disease/confidence rules are enforced by PlantService so its messages
# reach the client unchanged.
#
# 🔗 Dependencies:
# - pydantic, plantpal.shared.core.schemas
# - Plant domain models
#
# 🔄 Connected Modules / Calls From:
# - plantpal.modules.plant_management.presentation.api.v1.plants

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from plantpal.shared.core.schemas import CamelModel, SuccessResponse

from ....domain.models.plant import DiagnosisEntry, HealthSummary, Plant


# =============================================================================
# REQUESTS
# =============================================================================

class PlantCreateRequest(CamelModel):
    name: Optional[str] = None
    species: Optional[str] = None
    location: Optional[str] = None
    planted_date: Optional[datetime] = None
    notes: Optional[str] = None


class PlantUpdateRequest(PlantCreateRequest):
    """Partial update; only fields present in the body are applied."""


class DiagnosisCreateRequest(CamelModel):
    disease: Optional[str] = None
    confidence: Optional[float] = None
    image_url: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("confidence", mode="before")
    @classmethod
    def reject_boolean_confidence(cls, v):
        if isinstance(v, bool):
            raise ValueError("Confidence must be a number between 0 and 1")
        return v


# =============================================================================
# RESPONSES
# =============================================================================

class DiagnosisEntryResponse(CamelModel):
    id: str
    disease: str
    confidence: float
    image_url: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, entry: DiagnosisEntry) -> "DiagnosisEntryResponse":
        return cls.model_validate({**entry.model_dump(), "id": entry.entry_id})


class PlantResponse(CamelModel):
    id: str
    owner_id: str
    name: str
    species: str
    location: str
    planted_date: datetime
    notes: str
    health_status: str
    last_diagnosis: Optional[DiagnosisEntryResponse] = None
    diagnosis_history: List[DiagnosisEntryResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, plant: Plant) -> "PlantResponse":
        return cls(
            id=plant.plant_id,
            owner_id=plant.owner_id,
            name=plant.name,
            species=plant.species,
            location=plant.location,
            planted_date=plant.planted_date,
            notes=plant.notes,
            health_status=plant.health_status,
            last_diagnosis=DiagnosisEntryResponse.from_domain(plant.last_diagnosis) if plant.last_diagnosis else None,
            diagnosis_history=[DiagnosisEntryResponse.from_domain(entry) for entry in plant.diagnosis_history],
            created_at=plant.created_at,
            updated_at=plant.updated_at,
        )


class HealthSummaryResponse(CamelModel):
    total: int
    healthy: int
    diseased: int
    suspicious: int
    unknown: int
    plants_needing_attention: int

    @classmethod
    def from_domain(cls, summary: HealthSummary) -> "HealthSummaryResponse":
        return cls(
            **summary.model_dump(),
            plants_needing_attention=summary.plants_needing_attention,
        )


class PlantListResponse(SuccessResponse):
    plants: List[PlantResponse]
    total: int


class PlantStatusListResponse(PlantListResponse):
    status: str


class PlantEnvelope(SuccessResponse):
    plant: PlantResponse


class PlantMessageEnvelope(PlantEnvelope):
    message: str


class DiagnosisAddedResponse(SuccessResponse):
    message: str = "Diagnosis added successfully"
    diagnosis: DiagnosisEntryResponse
    plant: PlantResponse


class DiagnosisHistoryResponse(SuccessResponse):
    diagnosis_history: List[DiagnosisEntryResponse]


class HealthSummaryEnvelope(SuccessResponse):
    summary: HealthSummaryResponse
