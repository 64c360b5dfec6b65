# tests/test_report.py
"""
Plain-text reports for silhouette results and cascade outcomes.
"""

from __future__ import annotations

import math

from kselect.base.data_structures import CascadeEntry, CascadeOutcome, SilhouetteResult
from kselect.evaluation import format_cascade_report, format_silhouette_report


def _result(scores):
    return SilhouetteResult(cluster_scores=tuple(scores),
                            global_score=sum(scores) / len(scores),
                            cluster_sizes=(10,) * len(scores))


def test_silhouette_report_lines():
    text = format_silhouette_report(_result([0.8, 0.5]))
    assert text.splitlines() == [
        "Cluster 0: 0.8000, verdict: strong structure",
        "Cluster 1: 0.5000, verdict: weak structure",
        "Mean: 0.6500, verdict: reasonable structure",
    ]


def test_silhouette_report_indent():
    text = format_silhouette_report(_result([0.3, 0.1]), indent="   ")
    assert all(line.startswith("   ") for line in text.splitlines())


def test_cascade_report_marks_best_and_skipped():
    outcome = CascadeOutcome(
        entries=(
            CascadeEntry(2, _result([0.5, 0.5])),
            CascadeEntry(3, _result([0.9, 0.8, 0.7])),
            CascadeEntry(4, None, error="cluster 3 is empty"),
        ),
        best_k=3,
        best_score=0.8,
    )
    lines = format_cascade_report(outcome).splitlines()
    assert lines[0] == "=== Cascade (Silhouette Index) ==="
    assert lines[1].startswith("k=  2: 0.5000")
    assert not lines[1].endswith("<-- best")
    assert lines[2].endswith("<-- best")
    assert lines[3] == "k=  4: skipped, cluster 3 is empty"
    assert lines[4] == "Best k: 3 (mean silhouette 0.8000)"
    assert lines[5].startswith("   Cluster 0:")


def test_cascade_report_without_winner():
    outcome = CascadeOutcome(
        entries=(CascadeEntry(2, _result([-0.1, -0.2])),),
        best_k=None,
        best_score=math.nan,
    )
    text = format_cascade_report(outcome, title=None)
    assert not text.startswith("===")
    assert text.splitlines()[-1].startswith("Best k: none")
