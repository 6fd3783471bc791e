from .diagnosis_record_repository_impl import DiagnosisRecordRepositoryImpl

__all__ = ["DiagnosisRecordRepositoryImpl"]
