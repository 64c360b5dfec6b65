# tests/utils.py
"""
Small, reusable helpers used across the kselect test suite.

Functions:
- perm_invariant_accuracy(y_pred, y_true): best accuracy over label permutations.
- time_block(label, meta=None): context manager that prints wall-clock time.
- FixedClusterer: stand-in clusterer with preset centroids and labels.
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def perm_invariant_accuracy(y_pred, y_true) -> float:
    """
    Best accuracy of y_pred against y_true over all relabelings of y_pred.

    Keeps K small in tests; the search is over K! permutations.
    """
    y_pred = np.asarray(y_pred)
    y_true = np.asarray(y_true)
    if y_pred.shape != y_true.shape:
        raise ValueError(f"Shape mismatch: {y_pred.shape} vs {y_true.shape}")
    K = int(max(y_pred.max(), y_true.max())) + 1
    best = 0.0
    for perm in itertools.permutations(range(K)):
        mapped = np.asarray(perm)[y_pred]
        best = max(best, float(np.mean(mapped == y_true)))
    return best


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Output
    ------
    [timing] cascade {"n":200,"K":"2..6"} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        meta_str = " " + json.dumps(meta, separators=(",", ":")) if meta else ""
        print(f"[timing] {label}{meta_str} {dt:.3f}s")


class FixedClusterer:
    """
    Minimal clusterer: fixed centroids, nearest-centroid (Euclidean) predict.

    ``predict_calls`` counts how often the evaluator asked for assignments.
    """

    def __init__(self, centroids, labels=None):
        self.cluster_centers_ = torch.as_tensor(np.asarray(centroids), dtype=torch.float32)
        self.labels_ = None if labels is None else torch.as_tensor(labels, dtype=torch.long)
        self.predict_calls = 0

    def fit(self, X, y=None):
        return self

    def predict(self, X):
        self.predict_calls += 1
        X = torch.as_tensor(X, dtype=torch.float32)
        return torch.cdist(X, self.cluster_centers_).argmin(dim=1)
