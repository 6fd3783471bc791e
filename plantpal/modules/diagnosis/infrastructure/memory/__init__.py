from .diagnosis_record_repository_memory import InMemoryDiagnosisRecordRepository

__all__ = ["InMemoryDiagnosisRecordRepository"]
