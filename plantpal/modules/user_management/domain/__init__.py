"""User management domain layer: User entity, repository port and AuthService."""
