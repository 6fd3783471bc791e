"""Feature modules, each split into domain, infrastructure and presentation layers."""
