from .connection import Base, DatabaseConnectionManager
from .session import DatabaseSessionManager

__all__ = ["Base", "DatabaseConnectionManager", "DatabaseSessionManager"]
