"""Classifier and storage providers for diagnoses."""
