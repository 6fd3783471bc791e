"""Community HTTP API: router and schemas."""
