from .plant_repository_impl import PlantRepositoryImpl

__all__ = ["PlantRepositoryImpl"]
