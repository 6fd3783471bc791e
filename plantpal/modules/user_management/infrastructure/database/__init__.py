from .models import UserIdentityModel, UserModel
from .user_repository_impl import UserRepositoryImpl

__all__ = ["UserIdentityModel", "UserModel", "UserRepositoryImpl"]
