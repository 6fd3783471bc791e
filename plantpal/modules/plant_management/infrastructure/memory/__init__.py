from .plant_repository_memory import InMemoryPlantRepository

__all__ = ["InMemoryPlantRepository"]
