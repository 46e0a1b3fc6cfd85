"""Application layer: use cases, listing options and field rules."""
