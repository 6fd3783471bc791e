"""Diagnosis domain layer."""
