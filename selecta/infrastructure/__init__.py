"""Infrastructure layer: upload storage and registration persistence backends."""
