"""Plant domain layer: models, repository interface and service."""
