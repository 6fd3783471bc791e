from .diagnosis_record_repository import DiagnosisRecordRepository

__all__ = ["DiagnosisRecordRepository"]
