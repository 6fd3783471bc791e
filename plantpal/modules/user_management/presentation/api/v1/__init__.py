"""Versioned user management endpoints, mounted under /api/auth."""
