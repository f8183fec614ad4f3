"""Infrastructure adapters: logging, connectivity checks and REST clients."""
