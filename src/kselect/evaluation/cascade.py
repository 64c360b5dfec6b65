"""
Cascade search over candidate cluster counts.

Fits a fresh clusterer for every K in [min_k, max_k], scores each with a
cluster-validity evaluator and keeps the K with the highest mean silhouette.
The winning K is fitted once more for the returned model, so only one fitted
model is alive at the end of the scan.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, List, Optional, Union
import math
import threading
import time
import warnings
from torch import Tensor

from ..base.data_structures import CascadeEntry, CascadeOutcome, SilhouetteResult
from ..base.interfaces import ClusterEvaluator, DistanceMetric
from ..distances import get_distance
from ..exceptions import (
    CascadeCancelledError, DegenerateClusterError, InvalidInputError
)
from ..utils.validation import check_cascade_bounds, validate_data
from .silhouette import get_evaluator, silhouette_verdict

ClustererFactory = Callable[[int], Any]
ResultSink = Callable[[int, SilhouetteResult], None]

ON_DEGENERATE = ('skip', 'raise')


class CascadeSearch:
    """Repeated fit + evaluate across a range of K.

    Parameters
    ----------
    evaluator : str or ClusterEvaluator, default='silhouette'
        Validity index used to score every K
    n_jobs : int, default=1
        Worker threads for the scan. Results are collected by K, so the
        outcome is identical to a sequential scan.
    on_degenerate : {'skip', 'raise'}, default='skip'
        What to do when a K produces a cluster with fewer than two points:
        record the K as skipped, or abort the scan
    verbose : int, default=0
        Verbosity level
    sink : callable, optional
        Called as ``sink(k, result)`` for every scored K, in ascending K,
        once the scan has finished
    cancel_event : threading.Event, optional
        Checked before every K and between clusters during evaluation

    Example:
        >>> search = CascadeSearch()
        >>> outcome = search.run(X, 2, 8, lambda k: KMeans(n_clusters=k), 'euclidean')
        >>> outcome.best_k, outcome.scores()
    """

    def __init__(self,
                 evaluator: Union[str, ClusterEvaluator] = 'silhouette',
                 n_jobs: int = 1,
                 on_degenerate: str = 'skip',
                 verbose: int = 0,
                 sink: Optional[ResultSink] = None,
                 cancel_event: Optional[threading.Event] = None):
        if on_degenerate not in ON_DEGENERATE:
            raise InvalidInputError(
                f"on_degenerate must be one of {ON_DEGENERATE}, got {on_degenerate!r}")
        if not isinstance(n_jobs, int) or n_jobs < 1:
            raise InvalidInputError(f"n_jobs must be an integer >= 1, got {n_jobs!r}")

        self.evaluator = get_evaluator(evaluator)
        self.n_jobs = n_jobs
        self.on_degenerate = on_degenerate
        self.verbose = verbose
        self.sink = sink
        self.cancel_event = cancel_event

    def run(self, X: Tensor, min_k: int, max_k: int,
            clusterer_factory: ClustererFactory,
            distance: Union[str, DistanceMetric] = 'euclidean') -> CascadeOutcome:
        """Scan K = min_k..max_k and select the best-scoring K.

        Args:
            X: (n, d) dataset
            min_k: Smallest K (>= 2)
            max_k: Largest K (>= min_k; equal bounds evaluate a single K)
            clusterer_factory: ``factory(k)`` returning an unfitted clusterer
                with ``fit``, ``predict`` and ``cluster_centers_``. It must
                configure every K identically (seed, init, iterations).
            distance: Metric used for evaluation

        Returns:
            CascadeOutcome with one entry per K in ascending order

        Raises:
            InvalidInputError: Invalid bounds or data, raised before any fit
            DegenerateClusterError: With ``on_degenerate='raise'``
            CascadeCancelledError: The cancel event was set
        """
        check_cascade_bounds(min_k, max_k, strict=False)
        if not callable(clusterer_factory):
            raise InvalidInputError("cascade: clusterer_factory must be callable")
        X = validate_data(X)
        if max_k > X.shape[0]:
            raise InvalidInputError(
                f"cascade bounds invalid: max_k ({max_k}) exceeds the number of "
                f"samples ({X.shape[0]})")
        metric = get_distance(distance)

        ks = list(range(min_k, max_k + 1))
        entries: List[Optional[CascadeEntry]] = [None] * len(ks)
        abort = threading.Event()

        def should_stop() -> bool:
            return abort.is_set() or (self.cancel_event is not None
                                      and self.cancel_event.is_set())

        start_time = time.time()
        if self.n_jobs == 1 or len(ks) == 1:
            for pos, k in enumerate(ks):
                entries[pos] = self._scan_one(X, k, clusterer_factory, metric, should_stop)
                self._report(entries[pos])
        else:
            with ThreadPoolExecutor(max_workers=min(self.n_jobs, len(ks))) as pool:
                futures = {
                    pool.submit(self._scan_one, X, k, clusterer_factory, metric, should_stop): pos
                    for pos, k in enumerate(ks)
                }
                try:
                    for future in as_completed(futures):
                        entries[futures[future]] = future.result()
                except Exception:
                    # Stop queued and running K values before re-raising
                    abort.set()
                    for future in futures:
                        future.cancel()
                    raise
            for entry in entries:
                self._report(entry)

        best_k, best_score = self._select_best(entries)

        model = None
        if best_k is None:
            warnings.warn(
                f"No cluster count in [{min_k}, {max_k}] scored a mean silhouette above 0; "
                f"no K was selected"
            )
        else:
            if should_stop():
                raise CascadeCancelledError(f"cascade cancelled before re-fitting k={best_k}")
            model = clusterer_factory(best_k)
            model.fit(X)

        if self.verbose:
            chosen = "none" if best_k is None else f"k={best_k} ({best_score:.4f})"
            print(f"Cascade {min_k}..{max_k} finished in {time.time() - start_time:.3f}s, "
                  f"best: {chosen}")

        if self.sink is not None:
            for entry in entries:
                if entry.valid:
                    self.sink(entry.k, entry.result)

        return CascadeOutcome(
            entries=tuple(entries),
            best_k=best_k,
            best_score=best_score,
            model=model
        )

    def _scan_one(self, X: Tensor, k: int, clusterer_factory: ClustererFactory,
                  metric: DistanceMetric, should_stop: Callable[[], bool]) -> CascadeEntry:
        """Fit and score a single K."""
        if should_stop():
            raise CascadeCancelledError(f"cascade cancelled before k={k}")

        model = clusterer_factory(k)
        model.fit(X)
        try:
            result = self.evaluator.evaluate(
                model, model.cluster_centers_, X, metric,
                labels=getattr(model, 'labels_', None),
                should_stop=should_stop
            )
        except DegenerateClusterError as e:
            if self.on_degenerate == 'raise':
                raise
            return CascadeEntry(k=k, result=None, error=str(e))
        return CascadeEntry(k=k, result=result)

    @staticmethod
    def _select_best(entries: List[CascadeEntry]):
        """First K whose score beats every earlier one and 0."""
        best_k = None
        best_score = 0.0
        for entry in entries:
            if entry.valid and entry.score > best_score:
                best_k = entry.k
                best_score = entry.score
        if best_k is None:
            return None, math.nan
        return best_k, best_score

    def _report(self, entry: CascadeEntry) -> None:
        if not self.verbose:
            return
        if entry.valid:
            print(f"k={entry.k:3d}: silhouette = {entry.score:.4f} "
                  f"({silhouette_verdict(entry.score)})")
        else:
            print(f"k={entry.k:3d}: skipped ({entry.error})")
