"""Plant HTTP API: router and schemas."""
