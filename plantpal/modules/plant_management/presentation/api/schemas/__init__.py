from .plant_schemas import (
    DiagnosisAddedResponse,
    DiagnosisCreateRequest,
    DiagnosisEntryResponse,
    DiagnosisHistoryResponse,
    HealthSummaryEnvelope,
    HealthSummaryResponse,
    PlantCreateRequest,
    PlantEnvelope,
    PlantListResponse,
    PlantMessageEnvelope,
    PlantResponse,
    PlantStatusListResponse,
    PlantUpdateRequest,
)

__all__ = [
    "DiagnosisAddedResponse",
    "DiagnosisCreateRequest",
    "DiagnosisEntryResponse",
    "DiagnosisHistoryResponse",
    "HealthSummaryEnvelope",
    "HealthSummaryResponse",
    "PlantCreateRequest",
    "PlantEnvelope",
    "PlantListResponse",
    "PlantMessageEnvelope",
    "PlantResponse",
    "PlantStatusListResponse",
    "PlantUpdateRequest",
]
