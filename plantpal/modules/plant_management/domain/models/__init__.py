# 📄 File: plantpal/modules/plant_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the plant data models - plants, their diagnosis diary and health summaries
# 🧪 Purpose (Technical Summary):
# Package initialization exporting the Plant aggregate, DiagnosisEntry, HealthStatus
# and the health derivation rule
# 🔗 Dependencies:
# plant.py
# 🔄 Connected Modules / Calls From:
# Plant service, repositories, API schemas

from .plant import (
    DiagnosisEntry,
    HealthStatus,
    HealthSummary,
    Plant,
    derive_health_status,
)

__all__ = [
    "DiagnosisEntry",
    "HealthStatus",
    "HealthSummary",
    "Plant",
    "derive_health_status",
]
