"""Application services: stateless validation helpers."""
