"""Domain-level contracts."""
