"""
K-means with cluster validation.

``ValidatedKMeans`` fits k-means at a fixed K, or scans a range of K in
cascade mode, and keeps the silhouette evaluation of the final model.
"""

from typing import Optional, Union
import torch
from torch import Tensor

from .kmeans import KMeans
from ..base.data_structures import CascadeOutcome, SilhouetteResult
from ..config import ValidationConfig
from ..distances import get_distance
from ..evaluation.cascade import CascadeSearch, ResultSink
from ..evaluation.report import format_cascade_report, format_silhouette_report
from ..evaluation.silhouette import get_evaluator
from ..exceptions import NoSatisfactoryKError, NotFittedError
from ..utils.validation import validate_data


class ValidatedKMeans:
    """K-means whose result is scored with a cluster-validity index.

    Parameters
    ----------
    config : ValidationConfig, optional
        Run settings; defaults to ``ValidationConfig()``
    sink : callable, optional
        Receives ``(k, result)`` for every scored K of a cascade
    device : torch.device, optional
        Device for k-means
    **overrides
        Field overrides applied on top of ``config``

    Attributes
    ----------
    model_ : KMeans
        Final fitted model (at the selected K in cascade mode)
    silhouette_ : SilhouetteResult
        Evaluation of ``model_``
    cascade_ : CascadeOutcome or None
        Full scan, in cascade mode only
    n_clusters_ : int
        K of ``model_``

    Example:
        >>> vk = ValidatedKMeans(cascade=True, min_k=2, max_k=6).fit(X)
        >>> vk.n_clusters_, vk.silhouette_.global_score
    """

    def __init__(self, config: Optional[ValidationConfig] = None,
                 sink: Optional[ResultSink] = None,
                 device: Optional[torch.device] = None,
                 **overrides):
        config = config if config is not None else ValidationConfig()
        self.config = config.replace(**overrides) if overrides else config
        self.sink = sink
        self.device = device

        self.model_: Optional[KMeans] = None
        self.silhouette_: Optional[SilhouetteResult] = None
        self.cascade_: Optional[CascadeOutcome] = None
        self.n_clusters_: Optional[int] = None

    def _make_kmeans(self, n_clusters: int) -> KMeans:
        cfg = self.config
        return KMeans(
            n_clusters=n_clusters,
            init=cfg.init,
            distance=cfg.distance,
            max_iter=cfg.max_iter,
            verbose=max(cfg.verbose - 1, 0),
            random_state=cfg.random_state,
            device=self.device
        )

    def fit(self, X: Union[Tensor, list], y: Optional[Tensor] = None) -> 'ValidatedKMeans':
        """Fit k-means (or scan K) and evaluate the final model.

        Raises:
            NoSatisfactoryKError: Cascade mode found no K scoring above 0
        """
        cfg = self.config
        X = validate_data(X, device=self.device)
        metric = get_distance(cfg.distance)
        evaluator = get_evaluator(cfg.validation)

        self.model_ = None
        self.silhouette_ = None
        self.cascade_ = None
        self.n_clusters_ = None

        if cfg.cascade:
            search = CascadeSearch(
                evaluator=evaluator,
                n_jobs=cfg.n_jobs,
                on_degenerate=cfg.on_degenerate,
                verbose=cfg.verbose,
                sink=self.sink
            )
            outcome = search.run(X, cfg.min_k, cfg.max_k, self._make_kmeans, metric)
            self.cascade_ = outcome
            if not outcome.found:
                raise NoSatisfactoryKError(
                    f"no K in [{cfg.min_k}, {cfg.max_k}] produced a mean silhouette above 0"
                )
            self.model_ = outcome.model
            self.n_clusters_ = outcome.best_k
            self.silhouette_ = outcome.result_for(outcome.best_k)
        else:
            model = self._make_kmeans(cfg.n_clusters).fit(X)
            self.model_ = model
            self.n_clusters_ = cfg.n_clusters
            self.silhouette_ = evaluator.evaluate(
                model, model.cluster_centers_, X, metric, labels=model.labels_
            )

        return self

    def predict(self, X: Union[Tensor, list]) -> Tensor:
        """Cluster index for each row of X."""
        if self.model_ is None:
            raise NotFittedError("The clusterer was not built yet")
        return self.model_.predict(X)

    def fit_predict(self, X: Union[Tensor, list], y: Optional[Tensor] = None) -> Tensor:
        return self.fit(X).model_.labels_

    @property
    def labels_(self) -> Tensor:
        if self.model_ is None:
            raise NotFittedError("The clusterer was not built yet")
        return self.model_.labels_

    @property
    def cluster_centers_(self) -> Tensor:
        if self.model_ is None:
            raise NotFittedError("The clusterer was not built yet")
        return self.model_.cluster_centers_

    def summary(self) -> str:
        """Text report of the validation and the fitted model."""
        if self.model_ is None:
            return "No clusterer has been built yet."

        cfg = self.config
        lines = [
            "Validated k-means",
            "=================",
            "",
            f"=== Clustering validation, using: {cfg.validation} ({cfg.distance} distance) ===",
            "",
        ]
        if self.cascade_ is not None:
            lines.append(format_cascade_report(self.cascade_, title=None))
        else:
            lines.append(format_silhouette_report(self.silhouette_))

        lines += [
            "",
            f"Number of clusters: {self.n_clusters_}",
            f"Iterations: {self.model_.n_iter_}",
            f"Within-cluster cost: {self.model_.inertia_:.4f}",
            "Cluster centroids:",
        ]
        for k, (center, size) in enumerate(zip(self.model_.cluster_centers_.tolist(),
                                               self.silhouette_.cluster_sizes)):
            coords = ", ".join(f"{c:.4f}" for c in center)
            lines.append(f"   Cluster {k} ({size} points): [{coords}]")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()
