from .post_repository_memory import InMemoryPostRepository

__all__ = ["InMemoryPostRepository"]
