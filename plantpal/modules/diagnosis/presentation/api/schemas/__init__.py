from .diagnosis_schemas import (
    AnalysisResponse,
    DiagnosisHistoryEnvelope,
    DiagnosisRecordEnvelope,
    DiagnosisRecordRequest,
    DiagnosisRecordResponse,
    DiagnosisStatsEnvelope,
    DiagnosisStatsResponse,
    ImageDiagnosisResponse,
    PredictionResponse,
)

__all__ = [
    "AnalysisResponse",
    "DiagnosisHistoryEnvelope",
    "DiagnosisRecordEnvelope",
    "DiagnosisRecordRequest",
    "DiagnosisRecordResponse",
    "DiagnosisStatsEnvelope",
    "DiagnosisStatsResponse",
    "ImageDiagnosisResponse",
    "PredictionResponse",
]
