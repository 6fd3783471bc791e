# 📄 File: plantpal/modules/diagnosis/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how saved diagnosis results are stored in the database
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model for diagnosis_records; list-shaped fields use JSON columns
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantpal.shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - diagnosis_record_repository_impl.py
# - migrations/versions (schema)

from sqlalchemy import JSON, Column, DateTime, Float, String, Text

from plantpal.shared.infrastructure.database.connection import Base
from plantpal.shared.utils.helpers import utc_now


class DiagnosisRecordModel(Base):
    """A classification result saved by a user."""
    __tablename__ = "diagnosis_records"

    record_id = Column(String(36), primary_key=True)
    user_id = Column(String(36), nullable=False, index=True)
    disease = Column(String(200), nullable=False)
    confidence = Column(Float, nullable=False)
    predictions = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    plant_info = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
