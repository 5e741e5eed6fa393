"""Async helpers for interacting with the local Chroma vector store."""

from __future__ import annotations
import asyncio
import threading
from typing import Any, Mapping, Sequence

import chromadb
import numpy as np

from agent_bridge.config import memory
import logging

logger = logging.getLogger(__name__)

_client: Any = None
_collection: Any = None
_collection_lock = threading.Lock()


def _as_vector(embedding) -> list[float]:
    """Return ``embedding`` as a flat list of floats, rejecting non-1D input."""

    v = np.asarray(embedding, dtype=np.float64)
    if v.ndim != 1:
        raise ValueError(f"Expected a 1-D embedding, got shape {v.shape}")
    return v.tolist()


def _get_collection():
    """Return the shared Chroma collection, creating client and collection if needed."""

    global _client, _collection

    if _collection is not None:
        return _collection

    with _collection_lock:
        if _collection is not None:
            return _collection

        if _client is None:
            logger.info("Opening Chroma store at %s", memory.PATH)
            _client = chromadb.PersistentClient(path=memory.PATH)

        _collection = _client.get_or_create_collection(name=memory.COLLECTION)
        return _collection


def reset() -> None:
    """Forget the cached client and collection."""

    global _client, _collection
    with _collection_lock:
        _client = None
        _collection = None


async def store_memory(
    id: str,
    text: str,
    embedding: Sequence[float],
    metadata: Mapping[str, Any] | None = None,
) -> None:
    """Add a single memory record to the collection.

    :param id: Record identifier, unique within the collection.
    :param text: Document text stored alongside the vector.
    :param embedding: Embedding vector for ``text``.
    :param metadata: Flat metadata mapping. Empty mappings are sent as ``None``.
    :returns: ``None``.
    """

    vec = _as_vector(embedding)
    # Chroma rejects empty metadata dicts.
    metadatas = [dict(metadata)] if metadata else None

    def _run() -> None:
        col = _get_collection()
        col.add(
            ids=[str(id)],
            documents=[text],
            embeddings=[vec],
            metadatas=metadatas,
        )

    await asyncio.to_thread(_run)


async def query_memories(query_embedding: Sequence[float], top_k: int | None = None) -> dict:
    """Run one nearest-neighbour query and return Chroma's raw result mapping.

    :param query_embedding: Embedding to search with.
    :param top_k: Number of neighbours to return (defaults to ``memory.TOP_K``).
    :returns: Chroma ``QueryResult`` with ``ids``, ``documents``, ``metadatas``
        and ``distances``, one inner list per query embedding.
    """

    vec = _as_vector(query_embedding)
    k = memory.TOP_K if top_k is None else int(top_k)

    def _run():
        col = _get_collection()
        return col.query(query_embeddings=[vec], n_results=k)

    return await asyncio.to_thread(_run)


async def retrieve_memory(query_embedding: Sequence[float], top_k: int | None = None) -> list[str]:
    """Return the documents of the ``top_k`` memories most similar to ``query_embedding``."""

    results = await query_memories(query_embedding, top_k)
    documents = results.get("documents") or []
    return [doc for batch in documents for doc in batch]
