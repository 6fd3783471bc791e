from .user_repository_memory import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
