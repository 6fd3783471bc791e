"""Versioned plant endpoints, mounted under /api/plants."""
