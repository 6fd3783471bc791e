"""Diagnosis HTTP layer."""
