"""Application use cases (orchestrate validation, storage and persistence)."""
