# 📄 File: plantpal/modules/plant_management/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for a user's plant collection: add, view, edit and remove
# plants, record diagnoses, and see which plants need attention.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router over PlantService. Every route requires a bearer token and is
# scoped to the caller; another owner's plant is reported as 404.
#
# 🔗 Dependencies:
# - FastAPI router
# - plantpal.shared.core.dependencies (container and current user)
# - plant request/response schemas
#
# 🔄 Connected Modules / Calls From:
# - plantpal.api.router (mounted under /api/plants)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from plantpal.modules.user_management.domain.models.user import User
from plantpal.shared.core.dependencies import get_container, get_current_user

from ....domain.services.plant_service import PlantService
from ..schemas.plant_schemas import (
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

logger = logging.getLogger(__name__)

plants_router = APIRouter()


def get_plant_service(request: Request) -> PlantService:
    return get_container(request).plant_service


@plants_router.get("", response_model=PlantListResponse, summary="List own plants")
async def list_plants(
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantListResponse:
    plants = await plant_service.list(current_user.user_id)
    return PlantListResponse(plants=[PlantResponse.from_domain(p) for p in plants], total=len(plants))


@plants_router.post(
    "",
    response_model=PlantMessageEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a plant",
    responses={400: {"description": "Plant name is required"}},
)
async def create_plant(
    payload: PlantCreateRequest,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantMessageEnvelope:
    plant = await plant_service.create(current_user.user_id, payload.model_dump(exclude_none=True))
    return PlantMessageEnvelope(message="Plant created successfully", plant=PlantResponse.from_domain(plant))


# Fixed paths are declared before /{plant_id} so they are not captured by it

@plants_router.get("/health/summary", response_model=HealthSummaryEnvelope, summary="Health counts")
async def health_summary(
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> HealthSummaryEnvelope:
    summary = await plant_service.health_summary(current_user.user_id)
    return HealthSummaryEnvelope(summary=HealthSummaryResponse.from_domain(summary))


@plants_router.get(
    "/search",
    response_model=PlantListResponse,
    summary="Search own plants",
    responses={400: {"description": "Search query is required"}},
)
async def search_plants(
    q: Optional[str] = Query(None, description="Substring matched against name, species, location and notes"),
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantListResponse:
    plants = await plant_service.search(current_user.user_id, q)
    return PlantListResponse(plants=[PlantResponse.from_domain(p) for p in plants], total=len(plants))


@plants_router.get(
    "/status/{health_status}",
    response_model=PlantStatusListResponse,
    summary="Filter own plants by health status",
    responses={400: {"description": "Unknown health status"}},
)
async def plants_by_status(
    health_status: str,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantStatusListResponse:
    plants = await plant_service.by_health_status(current_user.user_id, health_status)
    return PlantStatusListResponse(
        plants=[PlantResponse.from_domain(p) for p in plants],
        total=len(plants),
        status=health_status,
    )


@plants_router.get("/{plant_id}", response_model=PlantEnvelope, summary="Get a plant")
async def get_plant(
    plant_id: str,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantEnvelope:
    plant = await plant_service.get(plant_id, current_user.user_id)
    return PlantEnvelope(plant=PlantResponse.from_domain(plant))


@plants_router.put("/{plant_id}", response_model=PlantMessageEnvelope, summary="Update a plant")
async def update_plant(
    plant_id: str,
    payload: PlantUpdateRequest,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantMessageEnvelope:
    plant = await plant_service.update(plant_id, current_user.user_id, payload.model_dump(exclude_unset=True))
    return PlantMessageEnvelope(message="Plant updated successfully", plant=PlantResponse.from_domain(plant))


@plants_router.delete("/{plant_id}", response_model=PlantMessageEnvelope, summary="Delete a plant")
async def delete_plant(
    plant_id: str,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> PlantMessageEnvelope:
    plant = await plant_service.delete(plant_id, current_user.user_id)
    return PlantMessageEnvelope(message="Plant deleted successfully", plant=PlantResponse.from_domain(plant))


@plants_router.post(
    "/{plant_id}/diagnosis",
    response_model=DiagnosisAddedResponse,
    summary="Record a diagnosis",
    responses={400: {"description": "Invalid disease or confidence"}, 404: {"description": "Plant not found"}},
)
async def add_diagnosis(
    plant_id: str,
    payload: DiagnosisCreateRequest,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> DiagnosisAddedResponse:
    entry, plant = await plant_service.append_diagnosis(
        plant_id,
        current_user.user_id,
        disease=payload.disease,
        confidence=payload.confidence,
        image_url=payload.image_url,
        notes=payload.notes,
    )
    return DiagnosisAddedResponse(
        diagnosis=DiagnosisEntryResponse.from_domain(entry),
        plant=PlantResponse.from_domain(plant),
    )


@plants_router.get("/{plant_id}/diagnosis", response_model=DiagnosisHistoryResponse, summary="Diagnosis history")
async def diagnosis_history(
    plant_id: str,
    current_user: User = Depends(get_current_user),
    plant_service: PlantService = Depends(get_plant_service),
) -> DiagnosisHistoryResponse:
    history = await plant_service.diagnosis_history(plant_id, current_user.user_id)
    return DiagnosisHistoryResponse(diagnosis_history=[DiagnosisEntryResponse.from_domain(e) for e in history])
