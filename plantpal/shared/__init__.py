# 📄 File: plantpal/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The toolbox every part of PlantPal borrows from: settings, security,
# logging, and the connections to storage and outside services.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, core cross-cutting concerns,
# infrastructure adapters and utilities used by all feature modules.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - plantpal.modules.* (domain services and repositories)
# - plantpal.api and plantpal.main

"""
Shared Kernel

- config/          pydantic-settings application settings
- core/            exceptions, security, request dependencies, rate limiting
- infrastructure/  database engine, in-memory collections, uploads, LLM client
- utils/           structured logging and small helpers
"""

__all__ = []
