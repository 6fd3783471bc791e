# 📄 File: plantpal/modules/plant_management/infrastructure/memory/plant_repository_memory.py
# 🧭 Purpose (Layman Explanation):
# Keeps plant records in the server's memory when PlantPal runs without a database
# 🧪 Purpose (Technical Summary):
# In-memory PlantRepository; ownership checks and diagnosis appends happen under the
# collection lock so a mutation is never observed half-applied
# 🔗 Dependencies:
# plantpal.shared.infrastructure.memory, plant domain models and repository interface
# 🔄 Connected Modules / Calls From:
# plantpal.shared.infrastructure.container (memory backend)

from typing import List, Optional

from plantpal.shared.infrastructure.memory import InMemoryCollection

from ...domain.models.plant import DiagnosisEntry, Plant
from ...domain.repositories.plant_repository import PlantRepository

EDITABLE_FIELDS = ("name", "species", "location", "planted_date", "notes", "updated_at")


class InMemoryPlantRepository(PlantRepository):
    """PlantRepository backed by process memory."""

    def __init__(self):
        self._plants: InMemoryCollection[Plant] = InMemoryCollection()

    async def add(self, plant: Plant) -> Plant:
        return self._plants.put(plant.plant_id, plant)

    async def get(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        plant = self._plants.get(plant_id)
        if plant is None or plant.owner_id != owner_id:
            return None
        return plant

    async def list_by_owner(self, owner_id: str) -> List[Plant]:
        return self._plants.filter(lambda p: p.owner_id == owner_id)

    async def save(self, plant: Plant) -> Optional[Plant]:
        def apply(stored: Plant):
            if stored.owner_id != plant.owner_id:
                return False
            for field in EDITABLE_FIELDS:
                setattr(stored, field, getattr(plant, field))

        return self._plants.mutate(plant.plant_id, apply)

    async def delete(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        return self._plants.pop(plant_id, lambda p: p.owner_id == owner_id)

    async def append_diagnosis(self, plant_id: str, owner_id: str, entry: DiagnosisEntry) -> Optional[Plant]:
        def apply(stored: Plant):
            if stored.owner_id != owner_id:
                return False
            stored.record_diagnosis(entry)

        return self._plants.mutate(plant_id, apply)
