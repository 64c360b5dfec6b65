"""
Plain-text reports for silhouette results and cascade scans.
"""

from typing import Optional

from ..base.data_structures import CascadeOutcome, SilhouetteResult
from .silhouette import silhouette_verdict


def format_silhouette_report(result: SilhouetteResult, indent: str = "") -> str:
    """One line per cluster followed by the mean.

    Example output::

        Cluster 0: 0.8123, verdict: strong structure
        Cluster 1: 0.6010, verdict: reasonable structure
        Mean: 0.7067, verdict: strong structure
    """
    lines = [
        f"{indent}Cluster {i}: {score:.4f}, verdict: {silhouette_verdict(score)}"
        for i, score in enumerate(result.cluster_scores)
    ]
    lines.append(f"{indent}Mean: {result.global_score:.4f}, verdict: {result.verdict}")
    return "\n".join(lines)


def format_cascade_report(outcome: CascadeOutcome,
                          title: Optional[str] = "Cascade (Silhouette Index)") -> str:
    """Per-K mean silhouette, skipped K values and the selected K."""
    lines = []
    if title:
        lines.append(f"=== {title} ===")

    for entry in outcome.entries:
        if entry.valid:
            marker = "  <-- best" if entry.k == outcome.best_k else ""
            lines.append(f"k={entry.k:3d}: {entry.score:.4f}, "
                         f"verdict: {silhouette_verdict(entry.score)}{marker}")
        else:
            lines.append(f"k={entry.k:3d}: skipped, {entry.error}")

    if outcome.found:
        lines.append(f"Best k: {outcome.best_k} (mean silhouette {outcome.best_score:.4f})")
        best = outcome.result_for(outcome.best_k)
        lines.append(format_silhouette_report(best, indent="   "))
    else:
        lines.append("Best k: none, no cluster count scored a mean silhouette above 0")

    return "\n".join(lines)
