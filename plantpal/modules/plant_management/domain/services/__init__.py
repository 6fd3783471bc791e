from .plant_service import PlantService

__all__ = ["PlantService"]
