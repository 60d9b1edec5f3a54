from .toast_feed import InMemoryToastFeed, Toast

__all__ = ["InMemoryToastFeed", "Toast"]
