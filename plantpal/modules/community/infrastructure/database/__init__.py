from .post_repository_impl import PostRepositoryImpl

__all__ = ["PostRepositoryImpl"]
