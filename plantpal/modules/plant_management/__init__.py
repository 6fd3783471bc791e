# 📄 File: plantpal/modules/plant_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about a user's own plants: the records, their diagnosis diary and health.
# 🧪 Purpose (Technical Summary):
# Plant management bounded context: Plant aggregate, PlantService, memory and
# SQLAlchemy repositories, and the /api/plants router.

"""Plant management module."""
