# 📄 File: plantpal/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small shortcuts used all over PlantPal, like getting the current time,
# making up new IDs and reading file extensions.

# 🧪 Purpose (Technical Summary):
# General purpose helpers for timezone-aware timestamps, ID generation and
# file extensions.

# 🔗 Dependencies:
# - uuid: Unique identifier generation
# - datetime: Timestamps
# - pathlib: File extensions

# 🔄 Connected Modules / Calls From:
# Used by: domain models, repository implementations, file manager, augmenter parsing

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import uuid4


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to naive datetimes.

    Some database drivers (SQLite) drop the timezone on the way back; every
    timestamp leaving a repository goes through here so comparisons stay valid.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_id() -> str:
    """Generate a unique identifier."""
    return str(uuid4())


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension without the dot."""
    return Path(filename).suffix.lower().lstrip('.')
