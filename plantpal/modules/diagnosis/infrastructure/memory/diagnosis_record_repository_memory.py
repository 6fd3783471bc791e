# 📄 File: plantpal/modules/diagnosis/infrastructure/memory/diagnosis_record_repository_memory.py
# 🧭 Purpose (Layman Explanation):
# Keeps saved diagnosis results in memory when PlantPal runs without a database
# 🧪 Purpose (Technical Summary):
# In-memory DiagnosisRecordRepository over InMemoryCollection
# 🔗 Dependencies:
# plantpal.shared.infrastructure.memory, DiagnosisRecord, repository interface
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container (memory backend)

from typing import List, Optional

from plantpal.shared.infrastructure.memory import InMemoryCollection

from ...domain.models.diagnosis_record import DiagnosisRecord
from ...domain.repositories.diagnosis_record_repository import DiagnosisRecordRepository


class InMemoryDiagnosisRecordRepository(DiagnosisRecordRepository):

    def __init__(self):
        self._records: InMemoryCollection[DiagnosisRecord] = InMemoryCollection()

    async def add(self, record: DiagnosisRecord) -> DiagnosisRecord:
        return self._records.put(record.record_id, record)

    async def list_by_user(self, user_id: str) -> List[DiagnosisRecord]:
        records = self._records.filter(lambda r: r.user_id == user_id)
        return sorted(records, key=lambda r: r.timestamp, reverse=True)

    async def get(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        record = self._records.get(record_id)
        if record is None or record.user_id != user_id:
            return None
        return record

    async def delete(self, record_id: str, user_id: str) -> Optional[DiagnosisRecord]:
        return self._records.pop(record_id, lambda r: r.user_id == user_id)
