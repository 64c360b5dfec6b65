# tests/test_cascade.py
"""
CascadeSearch: scan order, best-K selection, degenerate K handling,
parallel scans, result sinks, cancellation and error propagation.
"""

from __future__ import annotations

import math
import threading

import pytest
import torch

from kselect.algorithms import KMeans
from kselect.base.data_structures import CascadeEntry, SilhouetteResult
from kselect.base.interfaces import ClusterEvaluator
from kselect.evaluation import CascadeSearch, SilhouetteIndex
from kselect.exceptions import (
    CascadeCancelledError, DegenerateClusterError, InvalidInputError
)

from data_gen import make_blobs_2d
from utils import time_block

THREE_BLOBS = [(0, 0), (20, 0), (0, 20)]


@pytest.fixture(scope="module")
def blobs():
    X, _ = make_blobs_2d(n_per=30, centers=THREE_BLOBS, seed=0)
    return torch.from_numpy(X)


class RecordingFactory:
    """KMeans factory that remembers every K it was asked for."""

    def __init__(self, init="farthest-first", fail_at=None, on_call=None):
        self.init = init
        self.fail_at = fail_at
        self.on_call = on_call
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, k):
        with self._lock:
            self.calls.append(k)
        if self.on_call is not None:
            self.on_call(k)
        if k == self.fail_at:
            raise RuntimeError(f"fit failed for k={k}")
        return KMeans(n_clusters=k, init=self.init, random_state=10)


class ScriptedEvaluator(ClusterEvaluator):
    """Returns preset global scores per K; raises for K listed in ``degenerate``."""

    def __init__(self, scores, degenerate=()):
        self.scores = scores
        self.degenerate = set(degenerate)

    def evaluate(self, clusterer, centroids, X, distance, labels=None, should_stop=None):
        k = centroids.shape[0]
        if k in self.degenerate:
            raise DegenerateClusterError(k - 1, 1)
        s = self.scores[k]
        return SilhouetteResult(cluster_scores=(s,) * k, global_score=s,
                                cluster_sizes=(1,) * k)


def test_one_entry_per_k_in_ascending_order(blobs):
    factory = RecordingFactory()
    outcome = CascadeSearch().run(blobs, 2, 6, factory)

    assert outcome.k_values == [2, 3, 4, 5, 6]
    assert len(outcome.entries) == 5
    assert outcome.best_k == 3
    assert outcome.best_score == pytest.approx(outcome.result_for(3).global_score)
    # Every K once, then the re-fit at the best K
    assert factory.calls == [2, 3, 4, 5, 6, 3]


def test_returned_model_is_refit_at_best_k(blobs):
    outcome = CascadeSearch().run(blobs, 2, 5, RecordingFactory())
    assert isinstance(outcome.model, KMeans)
    assert outcome.model.n_clusters == outcome.best_k
    assert outcome.model.fitted_


def test_single_k_range_matches_direct_evaluation(blobs):
    outcome = CascadeSearch().run(blobs, 2, 2, RecordingFactory())

    model = KMeans(n_clusters=2, init="farthest-first", random_state=10).fit(blobs)
    direct = SilhouetteIndex().evaluate(model, model.cluster_centers_, blobs, "euclidean",
                                        labels=model.labels_)
    assert outcome.k_values == [2]
    assert outcome.result_for(2) == direct


@pytest.mark.parametrize("min_k,max_k", [(1, 4), (0, 3), (5, 4), (2, 1000)])
def test_invalid_bounds_rejected_before_any_fit(blobs, min_k, max_k):
    factory = RecordingFactory()
    with pytest.raises(InvalidInputError, match="cascade bounds invalid"):
        CascadeSearch().run(blobs, min_k, max_k, factory)
    assert factory.calls == []


def test_invalid_options_rejected():
    with pytest.raises(InvalidInputError):
        CascadeSearch(on_degenerate="ignore")
    with pytest.raises(InvalidInputError):
        CascadeSearch(n_jobs=0)
    with pytest.raises(InvalidInputError):
        CascadeSearch(evaluator="davies-bouldin")
    with pytest.raises(InvalidInputError, match="callable"):
        CascadeSearch().run(torch.randn(10, 2), 2, 3, clusterer_factory=None)


def test_first_maximum_wins(blobs):
    evaluator = ScriptedEvaluator({2: 0.5, 3: 0.7, 4: 0.7, 5: 0.2})
    factory = RecordingFactory()
    outcome = CascadeSearch(evaluator=evaluator).run(blobs, 2, 5, factory)
    assert outcome.best_k == 3
    assert outcome.best_score == 0.7
    assert factory.calls[-1] == 3


def test_no_positive_score_selects_nothing(blobs):
    evaluator = ScriptedEvaluator({2: -0.1, 3: 0.0, 4: -0.3})
    factory = RecordingFactory()
    with pytest.warns(UserWarning, match="no K was selected"):
        outcome = CascadeSearch(evaluator=evaluator).run(blobs, 2, 4, factory)

    assert not outcome.found
    assert outcome.best_k is None and outcome.model is None
    assert math.isnan(outcome.best_score)
    assert len(outcome.entries) == 3
    # No re-fit without a winner
    assert factory.calls == [2, 3, 4]


def test_degenerate_k_is_skipped(blobs):
    evaluator = ScriptedEvaluator({2: 0.4, 4: 0.3}, degenerate={3})
    outcome = CascadeSearch(evaluator=evaluator).run(blobs, 2, 4, RecordingFactory())

    entry = outcome.entries[1]
    assert entry.k == 3 and not entry.valid
    assert "single member" in entry.error
    assert math.isnan(entry.score)
    assert outcome.result_for(3) is None
    assert outcome.scores() == [(2, 0.4), (4, 0.3)]
    assert outcome.best_k == 2


def test_degenerate_k_can_abort(blobs):
    evaluator = ScriptedEvaluator({2: 0.4, 4: 0.3}, degenerate={3})
    factory = RecordingFactory()
    with pytest.raises(DegenerateClusterError):
        CascadeSearch(evaluator=evaluator, on_degenerate="raise").run(blobs, 2, 4, factory)
    assert factory.calls == [2, 3]


def test_parallel_scan_matches_sequential(blobs):
    sequential = CascadeSearch(n_jobs=1).run(blobs, 2, 7, RecordingFactory("k-means++"))
    with time_block("cascade", {"n": blobs.shape[0], "K": "2..7", "n_jobs": 4}):
        parallel = CascadeSearch(n_jobs=4).run(blobs, 2, 7, RecordingFactory("k-means++"))

    assert parallel.entries == sequential.entries
    assert parallel.best_k == sequential.best_k
    assert parallel.best_score == sequential.best_score


def test_sink_receives_valid_results_in_ascending_k(blobs):
    seen = []
    evaluator = ScriptedEvaluator({2: 0.4, 3: 0.9, 5: 0.1, 6: 0.2}, degenerate={4})
    CascadeSearch(evaluator=evaluator, n_jobs=3,
                  sink=lambda k, r: seen.append((k, r.global_score))).run(
        blobs, 2, 6, RecordingFactory())
    assert seen == [(2, 0.4), (3, 0.9), (5, 0.1), (6, 0.2)]


def test_cancel_before_start(blobs):
    event = threading.Event()
    event.set()
    factory = RecordingFactory()
    with pytest.raises(CascadeCancelledError):
        CascadeSearch(cancel_event=event).run(blobs, 2, 5, factory)
    assert factory.calls == []


def test_cancel_during_scan(blobs):
    event = threading.Event()

    def cancel_at_three(k):
        if k == 3:
            event.set()

    factory = RecordingFactory(on_call=cancel_at_three)
    with pytest.raises(CascadeCancelledError):
        CascadeSearch(cancel_event=event).run(blobs, 2, 6, factory)
    assert factory.calls == [2, 3]


@pytest.mark.parametrize("n_jobs", [1, 3])
def test_clusterer_failure_aborts_scan(blobs, n_jobs):
    factory = RecordingFactory(fail_at=3)
    with pytest.raises(RuntimeError, match="fit failed for k=3"):
        CascadeSearch(n_jobs=n_jobs).run(blobs, 2, 6, factory)
    if n_jobs == 1:
        assert factory.calls == [2, 3]


def test_manhattan_cascade(blobs):
    factory = lambda k: KMeans(n_clusters=k, init="farthest-first", distance="manhattan")
    outcome = CascadeSearch().run(blobs, 2, 5, factory, distance="manhattan")
    assert outcome.best_k == 3


def test_verbose_reports_each_k(blobs, capsys):
    CascadeSearch(verbose=1).run(blobs, 2, 4, RecordingFactory())
    out = capsys.readouterr().out
    assert "k=  2: silhouette =" in out
    assert "k=  4:" in out
    assert "best: k=3" in out


def test_cascade_entry_defaults():
    entry = CascadeEntry(k=4, result=None, error="cluster 1 is empty")
    assert not entry.valid
    assert math.isnan(entry.score)
