# 📄 File: plantpal/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell PlantPal where to store data, which secrets
# to sign tokens with, and how to reach external services.
#
# 🧪 Purpose (Technical Summary):
# Configuration package initialization exporting the pydantic-settings model
# and its cached accessor.
#
# 🔗 Dependencies:
# - settings.py (application settings)
#
# 🔄 Connected Modules / Calls From:
# - plantpal.main (application startup)
# - All modules requiring configuration

"""
Configuration Management Package

Handles all application configuration including:
- Environment-based settings
- Storage backend selection and database connection
- Security, OAuth and AI service credentials
"""

from .settings import get_settings, Settings

__all__ = [
    "get_settings",
    "Settings",
]
