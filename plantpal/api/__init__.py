# 📄 File: plantpal/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front desk of PlantPal: holds the web addresses the apps call and the
# helpers that watch every request on its way in and out.
# 🧪 Purpose (Technical Summary):
# Package initialization for the HTTP layer: versioned routers under v1/ and
# request middleware under middleware/.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# plantpal.main

"""
PlantPal API Package

Structure:
    api/
    ├── middleware/          # Request logging and catch-all error handling
    └── v1/
        ├── router.py        # Aggregates module routers under /api
        └── health.py        # Liveness and readiness probes
"""

CURRENT_VERSION = "v1"
SUPPORTED_VERSIONS = ["v1"]
