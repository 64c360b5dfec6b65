# tests/test_validated_kmeans.py
"""
ValidatedKMeans: single-K and cascade runs end to end.
"""

from __future__ import annotations

import pytest
import torch

import kselect.algorithms.validated as validated_module
from kselect.algorithms import KMeans, ValidatedKMeans
from kselect.base.data_structures import SilhouetteResult
from kselect.base.interfaces import ClusterEvaluator
from kselect.config import ValidationConfig
from kselect.exceptions import InvalidInputError, NoSatisfactoryKError, NotFittedError
from kselect.visualization import CascadeChartSink

from data_gen import FOUR_POINTS, make_blobs_2d


@pytest.fixture(scope="module")
def blobs():
    X, y = make_blobs_2d(n_per=30, centers=[(0, 0), (20, 0), (0, 20)], seed=1)
    return X, y


def test_single_k_run_on_four_points():
    vk = ValidatedKMeans(n_clusters=2, init="farthest-first").fit(FOUR_POINTS)

    assert vk.n_clusters_ == 2
    assert isinstance(vk.model_, KMeans)
    assert vk.cascade_ is None
    assert vk.silhouette_.global_score == pytest.approx(1.800498, abs=1e-6)
    assert vk.labels_.tolist() in ([0, 0, 1, 1], [1, 1, 0, 0])


def test_overrides_apply_on_top_of_config():
    base = ValidationConfig(distance="manhattan")
    vk = ValidatedKMeans(base, n_clusters=4)
    assert vk.config.distance == "manhattan"
    assert vk.config.n_clusters == 4
    with pytest.raises(InvalidInputError):
        ValidatedKMeans(base, distance="cosine")


def test_cascade_selects_three(blobs):
    X, _ = blobs
    sink = CascadeChartSink()
    vk = ValidatedKMeans(cascade=True, min_k=2, max_k=6, init="farthest-first", sink=sink)
    vk.fit(X)

    assert vk.n_clusters_ == 3
    assert vk.cascade_.best_k == 3
    assert vk.model_ is vk.cascade_.model
    assert vk.silhouette_ is vk.cascade_.result_for(3)
    assert [k for k, _ in sink.pairs] == [k for k, _ in vk.cascade_.scores()]


def test_predict_uses_final_model(blobs):
    X, _ = blobs
    vk = ValidatedKMeans(n_clusters=3, init="farthest-first").fit(X)
    assert torch.equal(vk.predict(X), vk.labels_)
    assert vk.cluster_centers_.shape == (3, 2)
    assert torch.equal(vk.fit_predict(X), vk.labels_)


def test_no_satisfactory_k(blobs, monkeypatch):
    class Negative(ClusterEvaluator):
        def evaluate(self, clusterer, centroids, X, distance, labels=None, should_stop=None):
            k = centroids.shape[0]
            return SilhouetteResult(cluster_scores=(-0.2,) * k, global_score=-0.2,
                                    cluster_sizes=(0,) * k)

    monkeypatch.setattr(validated_module, "get_evaluator", lambda name: Negative())
    X, _ = blobs
    vk = ValidatedKMeans(cascade=True, min_k=2, max_k=4)
    with pytest.warns(UserWarning):
        with pytest.raises(NoSatisfactoryKError):
            vk.fit(X)
    assert vk.model_ is None
    assert vk.cascade_ is not None and not vk.cascade_.found


def test_not_fitted():
    vk = ValidatedKMeans()
    with pytest.raises(NotFittedError):
        vk.predict(FOUR_POINTS)
    with pytest.raises(NotFittedError):
        _ = vk.labels_
    assert vk.summary() == "No clusterer has been built yet."


def test_summary_single(blobs):
    X, _ = blobs
    text = str(ValidatedKMeans(n_clusters=3, init="farthest-first").fit(X))
    assert "=== Clustering validation, using: silhouette (euclidean distance) ===" in text
    assert "Mean:" in text
    assert "Number of clusters: 3" in text
    assert text.count("points): [") == 3


def test_summary_cascade(blobs):
    X, _ = blobs
    vk = ValidatedKMeans(cascade=True, min_k=2, max_k=4, init="farthest-first").fit(X)
    text = vk.summary()
    assert "<-- best" in text
    assert "Best k: 3" in text
