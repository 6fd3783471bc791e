"""
Infrastructure layer package for PlantPal.
Provides database connections, in-memory stores, upload storage, external API
clients and the service container that wires them together.
"""
