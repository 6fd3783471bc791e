"""Diagnosis HTTP API: router and schemas."""
