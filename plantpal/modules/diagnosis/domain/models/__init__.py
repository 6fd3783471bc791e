from .classification import ClassificationResult, ImageDiagnosis, Prediction, top_prediction
from .diagnosis_record import DiagnosisRecord, DiagnosisStats

__all__ = [
    "ClassificationResult",
    "DiagnosisRecord",
    "DiagnosisStats",
    "ImageDiagnosis",
    "Prediction",
    "top_prediction",
]
