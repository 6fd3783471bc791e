"""Versioned community endpoints, mounted under /api/community."""
