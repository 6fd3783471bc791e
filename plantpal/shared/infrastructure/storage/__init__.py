# 📄 File: plantpal/shared/infrastructure/storage/__init__.py

# 🧭 Purpose (Layman Explanation):
# The file handling toolbox: checks uploaded photos and keeps them only as long as needed.

# 🧪 Purpose (Technical Summary):
# Storage infrastructure exports.

# 🔗 Dependencies:
# - file_manager

# 🔄 Connected Modules / Calls From:
# - plantpal.shared.infrastructure.container
# - diagnosis module

from .file_manager import IMAGE_FORMATS, FileManager

__all__ = ["FileManager", "IMAGE_FORMATS"]
