"""Clustering algorithm implementations."""

from .kmeans import KMeans, KMeansObjective
from .validated import ValidatedKMeans

__all__ = [
    'KMeans',
    'KMeansObjective',
    'ValidatedKMeans'
]
