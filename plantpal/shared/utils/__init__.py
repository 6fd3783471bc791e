# 📄 File: plantpal/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# Small everyday tools the rest of PlantPal leans on: writing the activity
# diary, stamping times, and tidying up text and file names.

# 🧪 Purpose (Technical Summary):
# Utilities package exporting structured logging setup and generic helpers.

# 🔗 Dependencies:
# - logging: python-json-logger based structured logging
# - helpers: time, id and text helpers

# 🔄 Connected Modules / Calls From:
# Used by: All modules for logging and common conversions

from .helpers import (
    ensure_utc,
    generate_id,
    get_file_extension,
    utc_now,
)
from .logging import (
    SecurityLogger,
    StructuredLogger,
    bind_user,
    get_logger,
    log_context,
    log_shutdown_event,
    log_startup_event,
    setup_logging,
)

__all__ = [
    # Helpers
    "ensure_utc",
    "generate_id",
    "get_file_extension",
    "utc_now",

    # Logging
    "SecurityLogger",
    "StructuredLogger",
    "bind_user",
    "get_logger",
    "log_context",
    "log_shutdown_event",
    "log_startup_event",
    "setup_logging",
]
