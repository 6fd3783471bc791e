"""Storage providers for plants."""
