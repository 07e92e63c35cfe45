"""
Cosine similarity and nearest-answer selection over small in-memory vector sets.
"""
from typing import Sequence

import numpy as np


class EmptyCandidateSet(ValueError):
    """Raised when a similarity search is asked to pick from nothing."""


def _as_matrix(x) -> np.ndarray:
    arr = np.asarray(x, dtype="float64")
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    return arr


def cosine_sim(a, b):
    """Compute cosine similarity between two vectors or matrices.

    a: (d,) or (n, d)
    b: (d,) or (m, d)
    returns: (n, m)
    """
    a = _as_matrix(a)
    b = _as_matrix(b)
    if a.shape[1] != b.shape[1]:
        raise ValueError(f"dimension mismatch: {a.shape[1]} != {b.shape[1]}")
    norms = np.linalg.norm(a, axis=1, keepdims=True) * np.linalg.norm(b, axis=1, keepdims=True).T
    dot = np.dot(a, b.T)
    # zero-norm rows score 0
    return np.divide(dot, norms, out=np.zeros_like(dot), where=norms > 0)


def cosine_similarity(a, b) -> float:
    return float(cosine_sim(a, b)[0, 0])


def best_match(query: Sequence[float], candidates: Sequence[Sequence[float]]) -> int:
    """
    Index of the candidate most similar to `query`.
    Ties keep the earliest candidate (np.argmax returns the first maximum).
    """
    if len(candidates) == 0:
        raise EmptyCandidateSet("no candidates to search")
    sims = cosine_sim(query, candidates).ravel()
    return int(np.argmax(sims))
