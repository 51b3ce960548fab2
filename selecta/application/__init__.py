"""Application layer: DTOs, interfaces, validation and use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (registration stores, file store).
"""
