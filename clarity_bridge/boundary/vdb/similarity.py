"""
Similarity ranking.

Cosine similarity, the shared metadata filter law, minimum-score thresholding
and top-K truncation. Used by the in-memory provider directly and by the
remote provider for filter-based deletes.

Dependencies: numpy
System role: Ranking primitives for vector search
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np

from clarity_bridge.boundary.vdb.vector_schemas import (
    VectorDocument,
    VectorSearchOptions,
    VectorSearchResult,
    normalize_filter,
)
from clarity_bridge.core.exceptions import DimensionMismatchError


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity dot(a, b) / (|a| * |b|).

    Returns NaN when either vector has zero norm; callers treat NaN as
    "not comparable" and drop the candidate.

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise DimensionMismatchError(expected=len(a), actual=len(b))

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    denominator = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denominator == 0.0:
        return math.nan
    return float(np.dot(va, vb) / denominator)


def matches_filter(metadata: Mapping[str, Any], filter_: Mapping[str, Any] | None) -> bool:
    """
    Evaluate the metadata filter law.

    Scalars match by equality, lists/tuples/sets by membership, keys are
    AND-ed and an empty filter matches everything.
    """
    if not filter_:
        return True

    for key, expected in filter_.items():
        actual = metadata.get(key)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def rank_documents(
    query: Sequence[float],
    documents: Iterable[VectorDocument],
    options: VectorSearchOptions,
) -> list[VectorSearchResult]:
    """
    Score, filter, threshold and truncate candidate documents.

    Filtering and thresholding happen before truncation, so up to top_k
    surviving documents are returned in non-increasing score order.
    """
    filter_ = normalize_filter(options.filter)
    results: list[VectorSearchResult] = []

    for doc in documents:
        if doc.embedding is None:
            continue
        if not matches_filter(doc.metadata.as_filterable(), filter_):
            continue

        score = cosine_similarity(query, doc.embedding)
        if math.isnan(score):
            continue
        if options.min_score is not None and score < options.min_score:
            continue

        results.append(
            VectorSearchResult(
                id=doc.id,
                score=score,
                metadata=doc.metadata if options.include_metadata else None,
                content=doc.content,
            )
        )

    results.sort(key=lambda result: result.score, reverse=True)
    return results[: options.top_k]
