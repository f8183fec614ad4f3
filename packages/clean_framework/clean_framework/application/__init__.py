"""Application layer: JSON services, path templates and pipes."""
