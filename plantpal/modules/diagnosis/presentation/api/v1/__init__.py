"""Versioned diagnosis endpoints, mounted under /api/diagnosis."""
