# 📄 File: plantpal/modules/diagnosis/presentation/api/schemas/diagnosis_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the app answers after looking at a leaf photo and how saved
# diagnoses and their statistics are presented.
#
# 🧪 Purpose (Technical Summary):
# Pydantic schemas for the diagnosis endpoints. The save request is loose
# (Any-typed confidence/timestamp) so DiagnosisService owns validation messages.
#
# 🔗 Dependencies:
# - pydantic, plantpal.shared.core.schemas
# - diagnosis domain models
#
# 🔄 Connected Modules / Calls From:
# - plantpal.modules.diagnosis.presentation.api.v1.diagnosis

from datetime import datetime
from typing import Any, Dict, List, Optional

from plantpal.shared.core.schemas import CamelModel, SuccessResponse

from ....domain.models.classification import ImageDiagnosis
from ....domain.models.diagnosis_record import DiagnosisRecord, DiagnosisStats


class DiagnosisRecordRequest(CamelModel):
    disease: Optional[str] = None
    confidence: Any = None
    predictions: Optional[List[Dict[str, Any]]] = None
    recommendations: Optional[List[Any]] = None
    plant_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    timestamp: Any = None


class PredictionResponse(CamelModel):
    disease: str
    confidence: float


class ImageDiagnosisResponse(CamelModel):
    disease: str
    confidence: float
    predictions: List[PredictionResponse]
    recommendations: List[str]
    plant_info: Optional[Dict[str, Any]] = None

    @classmethod
    def from_domain(cls, diagnosis: ImageDiagnosis) -> "ImageDiagnosisResponse":
        return cls.model_validate(diagnosis.model_dump())


class AnalysisResponse(SuccessResponse):
    diagnosis: ImageDiagnosisResponse
    timestamp: datetime


class DiagnosisRecordResponse(CamelModel):
    id: str
    user_id: str
    disease: str
    confidence: float
    predictions: List[PredictionResponse]
    recommendations: List[str]
    plant_info: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    timestamp: datetime

    @classmethod
    def from_domain(cls, record: DiagnosisRecord) -> "DiagnosisRecordResponse":
        return cls.model_validate({**record.model_dump(), "id": record.record_id})


class DiagnosisRecordEnvelope(SuccessResponse):
    diagnosis: DiagnosisRecordResponse


class DiagnosisHistoryEnvelope(SuccessResponse):
    history: List[DiagnosisRecordResponse]


class DiagnosisStatsResponse(CamelModel):
    total_diagnoses: int
    healthy_count: int
    diseased_count: int
    most_common_disease: Optional[str] = None
    average_confidence: float

    @classmethod
    def from_domain(cls, stats: DiagnosisStats) -> "DiagnosisStatsResponse":
        return cls.model_validate(stats.model_dump())


class DiagnosisStatsEnvelope(SuccessResponse):
    stats: DiagnosisStatsResponse
