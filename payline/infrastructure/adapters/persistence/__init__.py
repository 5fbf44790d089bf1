from .in_memory_order import InMemoryOrder

__all__ = ["InMemoryOrder"]
