# 📄 File: plantpal/modules/plant_management/infrastructure/database/plant_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles all database operations for plants: saving, finding, editing, deleting
# and adding diagnoses to a plant's diary
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of PlantRepository. Every query filters on both plant id
# and owner id; each operation is one transaction.
#
# 🔗 Dependencies:
# - plant domain models and repository interface
# - plant ORM models
# - plantpal.shared.infrastructure.database.session (transactions)
#
# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container (database backend)

import logging
from typing import List, Optional

from sqlalchemy import select

from plantpal.shared.infrastructure.database.session import DatabaseSessionManager
from plantpal.shared.utils.helpers import ensure_utc

from ...domain.models.plant import DiagnosisEntry, Plant
from ...domain.repositories.plant_repository import PlantRepository
from .models import PlantDiagnosisModel, PlantModel

logger = logging.getLogger(__name__)


class PlantRepositoryImpl(PlantRepository):
    """
    SQLAlchemy implementation of the PlantRepository interface.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def add(self, plant: Plant) -> Plant:
        async with self._sessions.get_session() as session:
            plant_model = self._domain_to_model(plant)
            session.add(plant_model)
            await session.flush()
            logger.info(f"Created plant {plant.plant_id} for owner {plant.owner_id}")
            return self._model_to_domain(plant_model)

    async def get(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        async with self._sessions.get_session() as session:
            plant_model = await self._load(session, plant_id, owner_id)
            return self._model_to_domain(plant_model) if plant_model else None

    async def list_by_owner(self, owner_id: str) -> List[Plant]:
        async with self._sessions.get_session() as session:
            result = await session.execute(
                select(PlantModel)
                .where(PlantModel.owner_id == owner_id)
                .order_by(PlantModel.created_at)
            )
            return [self._model_to_domain(model) for model in result.scalars().all()]

    async def save(self, plant: Plant) -> Optional[Plant]:
        async with self._sessions.get_session() as session:
            plant_model = await self._load(session, plant.plant_id, plant.owner_id)
            if plant_model is None:
                return None
            plant_model.name = plant.name
            plant_model.species = plant.species
            plant_model.location = plant.location
            plant_model.planted_date = plant.planted_date
            plant_model.notes = plant.notes
            plant_model.updated_at = plant.updated_at
            await session.flush()
            return self._model_to_domain(plant_model)

    async def delete(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        async with self._sessions.get_session() as session:
            plant_model = await self._load(session, plant_id, owner_id)
            if plant_model is None:
                return None
            removed = self._model_to_domain(plant_model)
            await session.delete(plant_model)
            await session.flush()
            logger.info(f"Deleted plant {plant_id}")
            return removed

    async def append_diagnosis(self, plant_id: str, owner_id: str, entry: DiagnosisEntry) -> Optional[Plant]:
        """
        Append a diagnosis row and write back the derived health fields.

        The plant row is locked for the duration of the transaction on
        databases that support SELECT ... FOR UPDATE.
        """
        async with self._sessions.get_session() as session:
            plant_model = await self._load(session, plant_id, owner_id, for_update=True)
            if plant_model is None:
                return None

            plant = self._model_to_domain(plant_model)
            plant.record_diagnosis(entry)

            plant_model.diagnoses.append(
                PlantDiagnosisModel(
                    entry_id=entry.entry_id,
                    position=len(plant_model.diagnoses),
                    disease=entry.disease,
                    confidence=entry.confidence,
                    image_url=entry.image_url,
                    notes=entry.notes,
                    created_at=entry.created_at,
                )
            )
            plant_model.health_status = plant.health_status
            plant_model.last_diagnosis_id = entry.entry_id
            plant_model.updated_at = plant.updated_at
            await session.flush()
            return plant

    async def _load(self, session, plant_id: str, owner_id: str, for_update: bool = False) -> Optional[PlantModel]:
        stmt = select(PlantModel).where(
            PlantModel.plant_id == plant_id,
            PlantModel.owner_id == owner_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    def _domain_to_model(self, plant: Plant) -> PlantModel:
        return PlantModel(
            plant_id=plant.plant_id,
            owner_id=plant.owner_id,
            name=plant.name,
            species=plant.species,
            location=plant.location,
            planted_date=plant.planted_date,
            notes=plant.notes,
            health_status=plant.health_status,
            last_diagnosis_id=plant.last_diagnosis.entry_id if plant.last_diagnosis else None,
            created_at=plant.created_at,
            updated_at=plant.updated_at,
            diagnoses=[],
        )

    def _model_to_domain(self, model: PlantModel) -> Plant:
        history = [
            DiagnosisEntry(
                entry_id=row.entry_id,
                disease=row.disease,
                confidence=row.confidence,
                image_url=row.image_url,
                notes=row.notes,
                created_at=ensure_utc(row.created_at),
            )
            for row in model.diagnoses
        ]
        last = next((e for e in history if e.entry_id == model.last_diagnosis_id), None)
        return Plant(
            plant_id=model.plant_id,
            owner_id=model.owner_id,
            name=model.name,
            species=model.species,
            location=model.location,
            planted_date=ensure_utc(model.planted_date),
            notes=model.notes,
            health_status=model.health_status,
            last_diagnosis=last,
            diagnosis_history=history,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )
