# 📄 File: plantpal/modules/diagnosis/domain/services/classifier.py
# 🧭 Purpose (Layman Explanation):
# The agreement every "disease detector" must follow: look at a photo and say how
# likely each known disease is
# 🧪 Purpose (Technical Summary):
# DiseaseClassifier port; implementations live in infrastructure/classifiers
# 🔗 Dependencies:
# ClassificationResult value object
# 🔄 Connected Modules / Calls From:
# diagnosis_service.py, MockDiseaseClassifier

from abc import ABC, abstractmethod
from typing import List

from ..models.classification import ClassificationResult


class DiseaseClassifier(ABC):
    """Image to disease-distribution classifier."""

    @property
    @abstractmethod
    def labels(self) -> List[str]:
        """Label set, in the order distributions are reported."""
        pass

    @abstractmethod
    async def classify(self, image_bytes: bytes) -> ClassificationResult:
        """
        Classify an image.

        Returns:
            ClassificationResult with one prediction per label in label order

        Raises:
            ClassificationError: If the image cannot be classified
        """
        pass
