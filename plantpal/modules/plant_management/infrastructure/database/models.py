# 📄 File: plantpal/modules/plant_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how plants and their diagnosis diary are stored in the database
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for plants and plant_diagnoses. Diagnosis rows carry an
# explicit position so history order survives identical timestamps.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - plantpal.shared.infrastructure.database.connection (declarative Base)
#
# 🔄 Connected Modules / Calls From:
# - plant_repository_impl.py
# - migrations/versions (schema)

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from plantpal.shared.infrastructure.database.connection import Base
from plantpal.shared.utils.helpers import utc_now


class PlantModel(Base):
    """SQLAlchemy model for a user's plant."""
    __tablename__ = "plants"

    plant_id = Column(String(36), primary_key=True)
    owner_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    species = Column(String(200), nullable=False, default="Unknown")
    location = Column(String(200), nullable=False, default="Unknown")
    planted_date = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    notes = Column(Text, nullable=False, default="")
    health_status = Column(String(20), nullable=False, default="Unknown", index=True)
    last_diagnosis_id = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    diagnoses = relationship(
        "PlantDiagnosisModel",
        back_populates="plant",
        cascade="all, delete-orphan",
        order_by="PlantDiagnosisModel.position",
        lazy="selectin",
    )


class PlantDiagnosisModel(Base):
    """One append-only diagnosis entry of a plant."""
    __tablename__ = "plant_diagnoses"

    entry_id = Column(String(36), primary_key=True)
    plant_id = Column(String(36), ForeignKey("plants.plant_id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    disease = Column(String(200), nullable=False)
    confidence = Column(Float, nullable=False)
    image_url = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)

    plant = relationship("PlantModel", back_populates="diagnoses")
