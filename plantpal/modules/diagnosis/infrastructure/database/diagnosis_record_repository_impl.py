# 📄 File: plantpal/modules/diagnosis/infrastructure/database/diagnosis_record_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Handles database operations for saved diagnosis results
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of DiagnosisRecordRepository, owner-scoped on every query
#
# 🔗 Dependencies:
# - DiagnosisRecord model and repository interface
# - DiagnosisRecordModel ORM model
# - plantpal.shared.infrastructure.database.session (transactions)
#
# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container (database backend)

import logging
from typing import List, Optional

from sqlalchemy import select

from plantpal.shared.infrastructure.database.session import DatabaseSessionManager
from plantpal.shared.utils.helpers import ensure_utc

from ...domain.models.classification import Prediction
from ...domain.models.diagnosis_record import DiagnosisRecord
from ...domain.repositories.diagnosis_record_repository import DiagnosisRecordRepository
from .models import DiagnosisRecordModel

logger = logging.getLogger(__name__)


class DiagnosisRecordRepositoryImpl(DiagnosisRecordRepository):
    """
    SQLAlchemy implementation of the DiagnosisRecordRepository interface.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def add(self, record: DiagnosisRecord) -> DiagnosisRecord:
        async with self._sessions.get_session() as session:
            model = DiagnosisRecordModel(
                record_id=record.record_id,
                user_id=record.user_id,
                disease=record.disease,
                confidence=record.confidence,
                predictions=[p.model_dump() for p in record.predictions],
                recommendations=list(record.recommendations),
                plant_info=record.plant_info,
                notes=record.notes,
                image_url=record.image_url,
                timestamp=record.timestamp,
            )
            session.add(model)
            await session.flush()
            logger.info(f"Saved diagnosis record {record.record_id} for user {record.user_id}")
            return self._model_to_domain(model)

    async def list_by_user(self, user_id: str) -> List[DiagnosisRecord]:
        async with self._sessions.get_session() as session:
            result = await session.execute(
                select(DiagnosisRecordModel)
                .where(DiagnosisRecordModel.user_id == user_id)
                .order_by(DiagnosisRecordModel.timestamp.desc())
            )
            return [self._model_to_domain(model) for model in result.scalars().all()]

    async def get(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        async with self._sessions.get_session() as session:
            model = await self._load(session, record_id, user_id)
            return self._model_to_domain(model) if model else None

    async def delete(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        async with self._sessions.get_session() as session:
            model = await self._load(session, record_id, user_id)
            if model is None:
                return None
            removed = self._model_to_domain(model)
            await session.delete(model)
            await session.flush()
            return removed

    async def _load(self, session, record_id: str, user_id: str) -> Optional[DiagnosisRecordModel]:
        result = await session.execute(
            select(DiagnosisRecordModel).where(
                DiagnosisRecordModel.record_id == record_id,
                DiagnosisRecordModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    def _model_to_domain(self, model: DiagnosisRecordModel) -> DiagnosisRecord:
        return DiagnosisRecord(
            record_id=model.record_id,
            user_id=model.user_id,
            disease=model.disease,
            confidence=model.confidence,
            predictions=[Prediction(**p) for p in (model.predictions or [])],
            recommendations=list(model.recommendations or []),
            plant_info=model.plant_info,
            notes=model.notes,
            image_url=model.image_url,
            timestamp=ensure_utc(model.timestamp),
        )
