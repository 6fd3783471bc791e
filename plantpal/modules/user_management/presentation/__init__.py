"""User management presentation layer."""
