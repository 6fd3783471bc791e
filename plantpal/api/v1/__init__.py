# 📄 File: plantpal/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# The table of contents for the PlantPal API: which address each feature lives
# at and how the features are grouped in the documentation.
# 🧪 Purpose (Technical Summary):
# API v1 route prefixes and OpenAPI tag metadata shared by the router and the
# application factory.
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# plantpal.api.v1.router, plantpal.main

"""
PlantPal API Version 1

Structure:
    v1/
    ├── __init__.py   # Prefixes and tags
    ├── router.py     # Aggregates module routers under /api
    └── health.py     # Liveness and readiness endpoints (root level)
"""

from typing import Any, Dict, List

API_PREFIX = "/api"

ROUTE_PREFIXES: Dict[str, str] = {
    "auth": "/auth",
    "plants": "/plants",
    "diagnosis": "/diagnosis",
    "community": "/community",
}

API_TAGS: List[Dict[str, Any]] = [
    {"name": "Authentication", "description": "Accounts, tokens and OAuth sign-in"},
    {"name": "Plants", "description": "Personal plant records and diagnosis history"},
    {"name": "Diagnosis", "description": "Image analysis and saved diagnoses"},
    {"name": "Community", "description": "Posts, comments, likes, search and discovery"},
    {"name": "Health Check", "description": "Service liveness and readiness"},
]
