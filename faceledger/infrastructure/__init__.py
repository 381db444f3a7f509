"""Infrastructure adapters: persistence and FastAPI dependency providers."""
