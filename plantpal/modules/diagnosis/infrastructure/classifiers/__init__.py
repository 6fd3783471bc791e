from .mock_classifier import MockDiseaseClassifier

__all__ = ["MockDiseaseClassifier"]
