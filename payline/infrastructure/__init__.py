"""Infrastructure layer: Ledyer adapters, persistence and logging."""
