# 📄 File: plantpal/modules/plant_management/domain/repositories/plant_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how plant records are saved and found, always on behalf of the plant's owner
# 🧪 Purpose (Technical Summary):
# Owner-scoped repository interface for the Plant aggregate. Every read or write
# takes the owner id; a plant owned by someone else behaves as if it did not exist.
# 🔗 Dependencies:
# Plant domain models, typing, abc
# 🔄 Connected Modules / Calls From:
# plant_service.py, memory and database implementations

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.plant import DiagnosisEntry, Plant


class PlantRepository(ABC):
    """
    Repository interface for Plant aggregates.

    Implementation Notes:
    - Each mutating method is atomic for a single plant
    - Returned plants are detached copies; changing them changes nothing stored
    - ``append_diagnosis`` must apply ``Plant.record_diagnosis`` so the health
      rule is identical across providers
    """

    @abstractmethod
    async def add(self, plant: Plant) -> Plant:
        """Persist a new plant."""
        pass

    @abstractmethod
    async def get(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        """
        Get a plant by id for its owner.

        Returns:
            Plant if it exists and belongs to owner_id, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> List[Plant]:
        """All plants of an owner in creation order."""
        pass

    @abstractmethod
    async def save(self, plant: Plant) -> Optional[Plant]:
        """
        Store the editable fields of an existing plant.

        Returns:
            The stored plant, or None if no plant with this id belongs to plant.owner_id
        """
        pass

    @abstractmethod
    async def delete(self, plant_id: str, owner_id: str) -> Optional[Plant]:
        """
        Remove a plant and its history.

        Returns:
            The removed plant, or None if not found for this owner
        """
        pass

    @abstractmethod
    async def append_diagnosis(self, plant_id: str, owner_id: str, entry: DiagnosisEntry) -> Optional[Plant]:
        """
        Append a diagnosis entry and update the derived health fields atomically.

        Returns:
            The updated plant, or None if not found for this owner
        """
        pass
