"""Community domain layer."""
