# 📄 File: plantpal/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the core user data models - what information we keep about an account
# 🧪 Purpose (Technical Summary):
# Package initialization for the User entity, its enums and the normalized OAuth profile
# 🔗 Dependencies:
# Domain model classes, enums, pydantic base models
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure layer, API schemas

from .user import AuthProvider, FederatedProfile, User, UserRole

__all__ = [
    "AuthProvider",
    "FederatedProfile",
    "User",
    "UserRole",
]
