# 📄 File: plantpal/modules/diagnosis/domain/repositories/diagnosis_record_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how saved diagnosis results are stored and found for their owner
# 🧪 Purpose (Technical Summary):
# Owner-scoped repository interface for DiagnosisRecord entities
# 🔗 Dependencies:
# DiagnosisRecord model, typing, abc
# 🔄 Connected Modules / Calls From:
# diagnosis_service.py, memory and database implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.diagnosis_record import DiagnosisRecord


class DiagnosisRecordRepository(ABC):
    """Repository interface for saved diagnosis records."""

    @abstractmethod
    async def add(self, record: DiagnosisRecord) -> DiagnosisRecord:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: str) -> List[DiagnosisRecord]:
        """Records of a user, newest timestamp first."""
        pass

    @abstractmethod
    async def get(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        pass

    @abstractmethod
    async def delete(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        """Remove a record; None if it does not exist for this user."""
        pass
