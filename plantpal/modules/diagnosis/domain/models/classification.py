# 📄 File: plantpal/modules/diagnosis/domain/models/classification.py
# 🧭 Purpose (Layman Explanation):
# Describes what the disease detector answers: how likely each disease is, and
# which one is the best guess
# 🧪 Purpose (Technical Summary):
# Value objects for classifier output. The top prediction is the argmax of the
# distribution with ties broken by label-set order.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Classifier implementations, diagnosis_service.py, diagnosis API schemas

from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field


class Prediction(BaseModel):
    """Confidence for one label."""

    model_config = ConfigDict(frozen=True)

    disease: str
    confidence: float = Field(..., ge=0.0, le=1.0)


def top_prediction(distribution: Sequence[Prediction]) -> Prediction:
    """
    Highest-confidence prediction; the first one in label order wins a tie.

    Raises:
        ValueError: If the distribution is empty
    """
    if not distribution:
        raise ValueError("Empty prediction distribution")
    best = distribution[0]
    for prediction in distribution[1:]:
        if prediction.confidence > best.confidence:
            best = prediction
    return best


class ClassificationResult(BaseModel):
    """Classifier output with the distribution kept in label-set order."""

    model_config = ConfigDict(frozen=True)

    disease: str
    confidence: float
    distribution: List[Prediction]

    @classmethod
    def from_distribution(cls, distribution: Sequence[Prediction]) -> "ClassificationResult":
        best = top_prediction(distribution)
        return cls(disease=best.disease, confidence=best.confidence, distribution=list(distribution))

    def ranked(self) -> List[Prediction]:
        """Predictions by descending confidence, stable for ties."""
        return sorted(self.distribution, key=lambda p: p.confidence, reverse=True)


class ImageDiagnosis(BaseModel):
    """Full answer for an analyzed image."""

    disease: str
    confidence: float
    predictions: List[Prediction]
    recommendations: List[str]
    plant_info: Dict[str, Any]
