"""Scoring helpers for vector search results."""

import math
from typing import Any


def cosine_similarity(vec_a: list[float], vec_b: list[float]) -> float:
    """Cosine similarity between two vectors; 0.0 when either is empty, zero or mismatched."""
    if not vec_a or not vec_b or len(vec_a) != len(vec_b):
        return 0.0

    dot_product = math.fsum(a * b for a, b in zip(vec_a, vec_b))
    norm = math.hypot(*vec_a) * math.hypot(*vec_b)
    if norm == 0:
        return 0.0

    return dot_product / norm


def result_score(result: dict[str, Any], query_embedding: list[float]) -> float:
    """Relevance of a raw search hit.

    Prefers the score RavenDB attaches in @metadata; falls back to cosine
    similarity against the stored embedding.
    """
    index_score = result.get("@metadata", {}).get("@index-score")
    if index_score is not None:
        return float(index_score)
    return cosine_similarity(query_embedding, result.get("embedding") or [])


def format_result(result: dict[str, Any], score: float) -> dict[str, Any]:
    """Shape a raw RavenDB hit into the retrieval result returned to callers."""
    metadata = result.get("@metadata", {})
    return {
        "id": metadata.get("@id", result.get("Id")),
        "source": result.get("source_filename", "Unknown"),
        "content": result.get("text", ""),
        "chunk_index": result.get("chunk_index", 0),
        "score": score,
        "metadata": result.get("metadata", {}),
        "collection": metadata.get("@collection", result.get("collection")),
    }
