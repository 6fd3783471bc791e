"""User management infrastructure: repository providers and OAuth clients."""
