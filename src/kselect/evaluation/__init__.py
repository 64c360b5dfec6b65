"""
Cluster validation for kselect.

Provides:
- Silhouette Index evaluator and verdict bands
- Cascade search over a range of cluster counts
- Plain-text reports
"""

from .silhouette import (
    SilhouetteIndex,
    silhouette_verdict,
    get_evaluator,
    EVALUATORS
)
from .cascade import CascadeSearch
from .report import format_silhouette_report, format_cascade_report

__all__ = [
    'SilhouetteIndex',
    'silhouette_verdict',
    'get_evaluator',
    'EVALUATORS',
    'CascadeSearch',
    'format_silhouette_report',
    'format_cascade_report'
]
