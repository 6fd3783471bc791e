# 📄 File: plantpal/modules/plant_management/domain/services/plant_service.py
# 🧭 Purpose (Layman Explanation):
# The plant "manager": it checks what users send in, fills in sensible defaults,
# records diagnoses, and answers questions like "which of my plants need attention?"
# 🧪 Purpose (Technical Summary):
# Domain service over PlantRepository implementing owner-scoped CRUD, diagnosis
# appends, health summaries, search and status filtering with input validation
# 🔗 Dependencies:
# Plant domain models, PlantRepository, shared exceptions
# 🔄 Connected Modules / Calls From:
# Plant API endpoints

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from plantpal.shared.core.exceptions import NotFoundError, ValidationError
from plantpal.shared.utils.helpers import ensure_utc

from ..models.plant import (
    DEFAULT_LOCATION,
    DEFAULT_SPECIES,
    DiagnosisEntry,
    HealthStatus,
    HealthSummary,
    Plant,
)
from ..repositories.plant_repository import PlantRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "species", "location", "planted_date", "notes")


class PlantService:
    """
    Domain service for plant records.

    Business rules:
    - Every operation is scoped to the requesting owner; other owners' plants
      are reported as not found
    - A plant name is required and never blank
    - Diagnosis history is append-only and drives the health status
    """

    def __init__(self, plant_repository: PlantRepository):
        self.plant_repository = plant_repository

    async def create(self, owner_id: str, fields: Dict[str, Any]) -> Plant:
        """
        Create a plant for an owner.

        Args:
            owner_id: Owner user id
            fields: name (required), species, location, planted_date, notes

        Returns:
            The created Plant with defaults applied

        Raises:
            ValidationError: If the name is missing or blank
        """
        name = self._require_name(fields.get("name"))
        plant_kwargs: Dict[str, Any] = {
            "owner_id": owner_id,
            "name": name,
            "species": self._text_or_default(fields.get("species"), DEFAULT_SPECIES),
            "location": self._text_or_default(fields.get("location"), DEFAULT_LOCATION),
            "notes": fields.get("notes") or "",
        }
        if fields.get("planted_date") is not None:
            plant_kwargs["planted_date"] = self._as_datetime(fields["planted_date"])

        plant = await self.plant_repository.add(Plant(**plant_kwargs))
        logger.info(f"Plant {plant.plant_id} created for owner {owner_id}")
        return plant

    async def get(self, plant_id: str, owner_id: str) -> Plant:
        plant = await self.plant_repository.get(plant_id, owner_id)
        if plant is None:
            raise NotFoundError("Plant not found", resource_type="plant", resource_id=plant_id)
        return plant

    async def list(self, owner_id: str) -> List[Plant]:
        return await self.plant_repository.list_by_owner(owner_id)

    async def update(self, plant_id: str, owner_id: str, changes: Dict[str, Any]) -> Plant:
        """
        Merge the provided editable fields into a plant.

        Only keys present in ``changes`` are applied; identity, owner,
        health status and history cannot be changed here.
        """
        plant = await self.get(plant_id, owner_id)

        for field in UPDATABLE_FIELDS:
            if field not in changes:
                continue
            value = changes[field]
            if field == "name":
                value = self._require_name(value)
            elif field == "planted_date":
                if value is None:
                    continue
                value = self._as_datetime(value)
            elif field in ("species", "location"):
                value = self._text_or_default(value, DEFAULT_SPECIES if field == "species" else DEFAULT_LOCATION)
            elif field == "notes":
                value = value or ""
            setattr(plant, field, value)

        plant.touch()
        saved = await self.plant_repository.save(plant)
        if saved is None:
            raise NotFoundError("Plant not found", resource_type="plant", resource_id=plant_id)
        return saved

    async def delete(self, plant_id: str, owner_id: str) -> Plant:
        removed = await self.plant_repository.delete(plant_id, owner_id)
        if removed is None:
            raise NotFoundError("Plant not found", resource_type="plant", resource_id=plant_id)
        logger.info(f"Plant {plant_id} deleted by owner {owner_id}")
        return removed

    async def append_diagnosis(
        self,
        plant_id: str,
        owner_id: str,
        disease: Optional[str],
        confidence: Any,
        image_url: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Tuple[DiagnosisEntry, Plant]:
        """
        Record a diagnosis against a plant.

        Returns:
            Tuple of (new entry, updated plant)

        Raises:
            ValidationError: If disease is blank or confidence is outside [0, 1]
            NotFoundError: If the plant does not exist for this owner
        """
        if not isinstance(disease, str) or not disease.strip():
            raise ValidationError("Disease is required", field="disease")
        try:
            if isinstance(confidence, bool):
                raise TypeError("boolean confidence")
            confidence_value = float(confidence)
        except (TypeError, ValueError):
            raise ValidationError("Confidence must be a number between 0 and 1", field="confidence", value=confidence)
        if not 0.0 <= confidence_value <= 1.0:
            raise ValidationError("Confidence must be between 0 and 1", field="confidence", value=confidence)

        entry = DiagnosisEntry(
            disease=disease.strip(),
            confidence=confidence_value,
            image_url=image_url,
            notes=notes,
        )
        plant = await self.plant_repository.append_diagnosis(plant_id, owner_id, entry)
        if plant is None:
            raise NotFoundError("Plant not found", resource_type="plant", resource_id=plant_id)

        logger.info(
            f"Diagnosis '{entry.disease}' ({entry.confidence:.2f}) recorded for plant {plant_id}; "
            f"status is now {plant.health_status}"
        )
        return entry, plant

    async def diagnosis_history(self, plant_id: str, owner_id: str) -> List[DiagnosisEntry]:
        plant = await self.get(plant_id, owner_id)
        return plant.diagnosis_history

    async def health_summary(self, owner_id: str) -> HealthSummary:
        plants = await self.list(owner_id)
        summary = HealthSummary(total=len(plants))
        for plant in plants:
            if plant.health_status == HealthStatus.HEALTHY.value:
                summary.healthy += 1
            elif plant.health_status == HealthStatus.DISEASED.value:
                summary.diseased += 1
            elif plant.health_status == HealthStatus.SUSPICIOUS.value:
                summary.suspicious += 1
            else:
                summary.unknown += 1
        return summary

    async def search(self, owner_id: str, query: Optional[str]) -> List[Plant]:
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="q")
        needle = query.strip()
        return [plant for plant in await self.list(owner_id) if plant.matches(needle)]

    async def by_health_status(self, owner_id: str, status: str) -> List[Plant]:
        allowed = [s.value for s in HealthStatus]
        if status not in allowed:
            raise ValidationError(
                f"Health status must be one of {allowed}",
                field="status",
                value=status,
            )
        return [plant for plant in await self.list(owner_id) if plant.health_status == status]

    @staticmethod
    def _require_name(value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValidationError("Plant name is required", field="name")
        return value.strip()

    @staticmethod
    def _text_or_default(value: Any, default: str) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        return default

    @staticmethod
    def _as_datetime(value: Any) -> datetime:
        if isinstance(value, datetime):
            return ensure_utc(value)
        if isinstance(value, str):
            try:
                return ensure_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
            except ValueError:
                pass
        raise ValidationError("Planted date must be an ISO 8601 date", field="planted_date", value=value)
