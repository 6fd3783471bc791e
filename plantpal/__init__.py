# 📄 File: plantpal/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this 'plantpal' folder contains the PlantPal application code
# and records the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata
# for the PlantPal FastAPI backend.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantpal.main (application entry point)
# - pyproject.toml (dynamic version)

"""
PlantPal - Plant Care Backend

REST backend for tracking plants and their diagnosis history, classifying
leaf images for diseases, and sharing tips in a community feed with optional
AI-assisted tagging and search ranking.
"""

__version__ = "1.0.0"
__title__ = "PlantPal API"
__description__ = "Plant care backend with disease diagnosis and community features"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
