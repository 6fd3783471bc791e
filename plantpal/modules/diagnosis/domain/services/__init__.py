from .care_guide import DEFAULT_RECOMMENDATIONS, get_plant_info, get_recommendations
from .classifier import DiseaseClassifier
from .diagnosis_service import DiagnosisService

__all__ = [
    "DEFAULT_RECOMMENDATIONS",
    "DiagnosisService",
    "DiseaseClassifier",
    "get_plant_info",
    "get_recommendations",
]
