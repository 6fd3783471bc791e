# 📄 File: plantpal/modules/diagnosis/__init__.py
# 🧭 Purpose (Layman Explanation):
# Looks at photos of plant leaves, guesses what is wrong, and keeps a history of
# the results a user chose to save.
# 🧪 Purpose (Technical Summary):
# Diagnosis bounded context: DiseaseClassifier contract and mock implementation,
# DiagnosisService (upload validation, classification, saved records) and the
# /api/diagnosis router.

"""Image diagnosis module."""
