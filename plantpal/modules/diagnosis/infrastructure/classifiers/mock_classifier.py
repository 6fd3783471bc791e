# 📄 File: plantpal/modules/diagnosis/infrastructure/classifiers/mock_classifier.py
# 🧭 Purpose (Layman Explanation):
# A stand-in disease detector used until a trained model is plugged in. It picks
# one disease and reports it with high confidence and the rest with low confidence.
# 🧪 Purpose (Technical Summary):
# DiseaseClassifier producing a random peaked distribution over the configured
# label set; the selected label scores in [0.7, 1.0) and all others in [0, 0.2)
# 🔗 Dependencies:
# random, DiseaseClassifier port, classification value objects
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container

import logging
import random
from typing import List, Optional, Sequence

from ...domain.models.classification import ClassificationResult, Prediction
from ...domain.services.classifier import DiseaseClassifier

logger = logging.getLogger(__name__)

SELECTED_MIN_CONFIDENCE = 0.7
SELECTED_CONFIDENCE_SPAN = 0.3
OTHER_MAX_CONFIDENCE = 0.2


class MockDiseaseClassifier(DiseaseClassifier):
    """
    Random classifier for development and tests.

    Pass ``seed`` to get a reproducible sequence of results.
    """

    def __init__(self, labels: Sequence[str], seed: Optional[int] = None):
        if not labels:
            raise ValueError("MockDiseaseClassifier needs at least one label")
        self._labels = list(labels)
        self._random = random.Random(seed)
        logger.info(f"Mock disease classifier ready with {len(self._labels)} labels")

    @property
    def labels(self) -> List[str]:
        return list(self._labels)

    async def classify(self, image_bytes: bytes) -> ClassificationResult:
        selected = self._random.choice(self._labels)
        distribution = [
            Prediction(
                disease=label,
                confidence=(
                    SELECTED_MIN_CONFIDENCE + self._random.random() * SELECTED_CONFIDENCE_SPAN
                    if label == selected
                    else self._random.random() * OTHER_MAX_CONFIDENCE
                ),
            )
            for label in self._labels
        ]
        logger.debug(f"Mock classification of {len(image_bytes)} bytes selected {selected}")
        return ClassificationResult.from_distribution(distribution)
