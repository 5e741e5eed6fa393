"""Vector memory backed by a local Chroma store."""

from .vector_store import query_memories, retrieve_memory, store_memory

__all__ = ["store_memory", "retrieve_memory", "query_memories"]
