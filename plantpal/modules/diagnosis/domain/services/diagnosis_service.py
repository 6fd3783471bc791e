# 📄 File: plantpal/modules/diagnosis/domain/services/diagnosis_service.py
# 🧭 Purpose (Layman Explanation):
# Takes a photo of a sick plant, asks the disease detector what is wrong, and adds
# care advice. Also keeps the diagnoses a user chose to save and sums them up.
# 🧪 Purpose (Technical Summary):
# Upload validation, temporary-file lifecycle and bounded-time classification,
# plus owner-scoped CRUD and statistics over saved DiagnosisRecords
# 🔗 Dependencies:
# DiseaseClassifier, DiagnosisRecordRepository, FileManager, care_guide
# 🔄 Connected Modules / Calls From:
# Diagnosis API endpoints

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from plantpal.shared.core.exceptions import (
    ClassificationError,
    NotFoundError,
    PlantPalException,
    ValidationError,
)
from plantpal.shared.infrastructure.storage.file_manager import FileManager
from plantpal.shared.utils.helpers import ensure_utc

from ..models.classification import ImageDiagnosis, Prediction
from ..models.diagnosis_record import DiagnosisRecord, DiagnosisStats
from ..repositories.diagnosis_record_repository import DiagnosisRecordRepository
from .care_guide import get_plant_info, get_recommendations
from .classifier import DiseaseClassifier

logger = logging.getLogger(__name__)


class DiagnosisService:
    """
    Domain service for image diagnosis and saved diagnosis records.

    Business rules:
    - Uploaded images are removed from disk whether or not classification succeeds
    - A classifier that fails or exceeds its time budget yields ClassificationError
    - Saved records are only visible to the user who saved them
    """

    def __init__(
        self,
        classifier: DiseaseClassifier,
        record_repository: DiagnosisRecordRepository,
        file_manager: FileManager,
        classifier_timeout: float = 30.0,
    ):
        self.classifier = classifier
        self.record_repository = record_repository
        self.file_manager = file_manager
        self.classifier_timeout = classifier_timeout

    # =========================================================================
    # IMAGE ANALYSIS
    # =========================================================================

    async def analyze_upload(
        self,
        filename: Optional[str],
        content_type: Optional[str],
        data: bytes,
    ) -> ImageDiagnosis:
        """
        Validate, classify and annotate an uploaded plant image.

        Args:
            filename: Client supplied filename
            content_type: Declared MIME type
            data: Raw image bytes

        Returns:
            ImageDiagnosis with predictions sorted by descending confidence

        Raises:
            ValidationError: If the upload is missing, too large or not an allowed image
            ClassificationError: If the classifier fails or times out
        """
        extension = self.file_manager.validate_image(filename, content_type, data)

        async with self.file_manager.temporary_upload(data, extension) as path:
            image_bytes = await asyncio.to_thread(path.read_bytes)
            result = await self._classify(image_bytes)

        logger.info(f"Image {filename} classified as {result.disease} ({result.confidence:.2f})")
        return ImageDiagnosis(
            disease=result.disease,
            confidence=result.confidence,
            predictions=result.ranked(),
            recommendations=get_recommendations(result.disease),
            plant_info=get_plant_info(),
        )

    async def _classify(self, image_bytes: bytes):
        try:
            return await asyncio.wait_for(
                self.classifier.classify(image_bytes),
                timeout=self.classifier_timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Classifier exceeded {self.classifier_timeout}s")
            raise ClassificationError(reason="timeout")
        except PlantPalException:
            raise
        except Exception as e:
            logger.error(f"Classifier failed: {e}", exc_info=True)
            raise ClassificationError(reason=str(e))

    # =========================================================================
    # SAVED RECORDS
    # =========================================================================

    async def create_record(self, user_id: str, fields: Dict[str, Any]) -> DiagnosisRecord:
        """
        Save a diagnosis for a user.

        Args:
            user_id: Owner user id
            fields: disease and confidence (required), predictions,
                recommendations, plant_info, notes, image_url, timestamp

        Raises:
            ValidationError: If disease or confidence are missing or invalid
        """
        disease = fields.get("disease")
        if not isinstance(disease, str) or not disease.strip():
            raise ValidationError("Disease is required", field="disease")
        confidence = self._confidence(fields.get("confidence"), field="confidence")

        predictions = []
        for item in fields.get("predictions") or []:
            if not isinstance(item, dict) or not isinstance(item.get("disease"), str):
                raise ValidationError("Each prediction needs a disease and confidence", field="predictions")
            predictions.append(Prediction(
                disease=item["disease"],
                confidence=self._confidence(item.get("confidence"), field="predictions"),
            ))

        record_kwargs: Dict[str, Any] = {
            "user_id": user_id,
            "disease": disease.strip(),
            "confidence": confidence,
            "predictions": predictions,
            "recommendations": [str(r) for r in fields.get("recommendations") or []],
            "plant_info": fields.get("plant_info"),
            "notes": fields.get("notes"),
            "image_url": fields.get("image_url"),
        }
        if fields.get("timestamp") is not None:
            record_kwargs["timestamp"] = self._timestamp(fields["timestamp"])

        record = await self.record_repository.add(DiagnosisRecord(**record_kwargs))
        logger.info(f"Diagnosis record {record.record_id} saved for user {user_id}")
        return record

    async def history(self, user_id: str) -> List[DiagnosisRecord]:
        return await self.record_repository.list_by_user(user_id)

    async def get_record(self, record_id: str, user_id: str) -> DiagnosisRecord:
        record = await self.record_repository.get(record_id, user_id)
        if record is None:
            raise NotFoundError("Diagnosis not found", resource_type="diagnosis", resource_id=record_id)
        return record

    async def delete_record(self, record_id: str, user_id: str) -> DiagnosisRecord:
        removed = await self.record_repository.delete(record_id, user_id)
        if removed is None:
            raise NotFoundError("Diagnosis not found", resource_type="diagnosis", resource_id=record_id)
        logger.info(f"Diagnosis record {record_id} deleted by user {user_id}")
        return removed

    async def stats(self, user_id: str) -> DiagnosisStats:
        return DiagnosisStats.from_records(await self.history(user_id))

    @staticmethod
    def _confidence(value: Any, field: str) -> float:
        if isinstance(value, bool):
            value = None
        try:
            confidence = float(value)
        except (TypeError, ValueError):
            raise ValidationError("Confidence must be a number between 0 and 1", field=field, value=value)
        if not 0.0 <= confidence <= 1.0:
            raise ValidationError("Confidence must be between 0 and 1", field=field, value=value)
        return confidence

    @staticmethod
    def _timestamp(value: Any) -> datetime:
        if isinstance(value, datetime):
            return ensure_utc(value)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            # Epoch milliseconds, as sent by browser clients
            try:
                return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                raise ValidationError("Timestamp is out of range", field="timestamp", value=value)
        if isinstance(value, str):
            try:
                return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
            except ValueError:
                pass
        raise ValidationError("Timestamp must be an ISO 8601 date", field="timestamp", value=value)
