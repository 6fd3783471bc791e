# 📄 File: plantpal/modules/diagnosis/presentation/api/v1/diagnosis.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints where users upload a leaf photo to get a diagnosis, and
# where they save, review and delete the diagnoses they want to keep.
#
# 🧪 Purpose (Technical Summary):
# FastAPI router over DiagnosisService: multipart image analysis (/upload and
# its /analyze alias) plus owner-scoped CRUD and statistics for saved records.
#
# 🔗 Dependencies:
# - FastAPI router, UploadFile (python-multipart)
# - plantpal.shared.core.dependencies
# - diagnosis request/response schemas
#
# 🔄 Connected Modules / Calls From:
# - plantpal.api.router (mounted under /api/diagnosis)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from plantpal.modules.user_management.domain.models.user import User
from plantpal.shared.core.dependencies import get_container, get_current_user
from plantpal.shared.core.exceptions import ValidationError
from plantpal.shared.core.schemas import MessageResponse
from plantpal.shared.utils.helpers import utc_now

from ....domain.services.diagnosis_service import DiagnosisService
from ..schemas.diagnosis_schemas import (
    AnalysisResponse,
    DiagnosisHistoryEnvelope,
    DiagnosisRecordEnvelope,
    DiagnosisRecordRequest,
    DiagnosisRecordResponse,
    DiagnosisStatsEnvelope,
    DiagnosisStatsResponse,
    ImageDiagnosisResponse,
)

logger = logging.getLogger(__name__)

diagnosis_router = APIRouter()


def get_diagnosis_service(request: Request) -> DiagnosisService:
    return get_container(request).diagnosis_service


async def read_upload(image: UploadFile, max_size: int) -> bytes:
    """
    Read an upload without buffering more than one byte past ``max_size``.

    The extra byte is enough for FileManager to report FILE_TOO_LARGE while
    keeping its usual check order.
    """
    try:
        return await image.read(max_size + 1)
    finally:
        await image.close()


@diagnosis_router.post(
    "/upload",
    response_model=AnalysisResponse,
    summary="Analyze a plant image",
    responses={
        400: {"description": "Missing, oversized or unsupported image"},
        500: {"description": "Error analyzing image"},
    },
)
@diagnosis_router.post("/analyze", response_model=AnalysisResponse, include_in_schema=False)
async def analyze_image(
    image: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> AnalysisResponse:
    """
    Classify an uploaded image sent as the multipart field ``image``.

    The upload is written to a temporary file for the classifier and removed
    afterwards, whatever the outcome.
    """
    if image is None:
        raise ValidationError("No image file provided", field="image")

    data = await read_upload(image, diagnosis_service.file_manager.max_size)
    result = await diagnosis_service.analyze_upload(image.filename, image.content_type, data)
    logger.debug(f"User {current_user.user_id} analyzed {image.filename}")
    return AnalysisResponse(diagnosis=ImageDiagnosisResponse.from_domain(result), timestamp=utc_now())


@diagnosis_router.post(
    "",
    response_model=DiagnosisRecordEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Save a diagnosis",
    responses={400: {"description": "Disease or confidence missing or invalid"}},
)
async def save_diagnosis(
    payload: DiagnosisRecordRequest,
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisRecordEnvelope:
    record = await diagnosis_service.create_record(current_user.user_id, payload.model_dump())
    return DiagnosisRecordEnvelope(diagnosis=DiagnosisRecordResponse.from_domain(record))


@diagnosis_router.get("/history", response_model=DiagnosisHistoryEnvelope, summary="Saved diagnoses, newest first")
async def diagnosis_history(
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisHistoryEnvelope:
    records = await diagnosis_service.history(current_user.user_id)
    return DiagnosisHistoryEnvelope(history=[DiagnosisRecordResponse.from_domain(r) for r in records])


@diagnosis_router.get("/stats/overview", response_model=DiagnosisStatsEnvelope, summary="Saved diagnosis statistics")
async def diagnosis_stats(
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisStatsEnvelope:
    stats = await diagnosis_service.stats(current_user.user_id)
    return DiagnosisStatsEnvelope(stats=DiagnosisStatsResponse.from_domain(stats))


@diagnosis_router.get("/{record_id}", response_model=DiagnosisRecordEnvelope, summary="Get a saved diagnosis")
async def get_diagnosis(
    record_id: str,
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> DiagnosisRecordEnvelope:
    record = await diagnosis_service.get_record(record_id, current_user.user_id)
    return DiagnosisRecordEnvelope(diagnosis=DiagnosisRecordResponse.from_domain(record))


@diagnosis_router.delete("/{record_id}", response_model=MessageResponse, summary="Delete a saved diagnosis")
async def delete_diagnosis(
    record_id: str,
    current_user: User = Depends(get_current_user),
    diagnosis_service: DiagnosisService = Depends(get_diagnosis_service),
) -> MessageResponse:
    await diagnosis_service.delete_record(record_id, current_user.user_id)
    return MessageResponse(message="Diagnosis deleted successfully")
