"""Initialization strategies for clustering algorithms."""

from .random import RandomInit
from .kmeans_plusplus import KMeansPlusPlusInit
from .farthest_first import FarthestFirstInit
from .from_previous import FromPreviousInit

INITIALIZERS = {
    'random': RandomInit,
    'k-means++': KMeansPlusPlusInit,
    'farthest-first': FarthestFirstInit,
}

__all__ = [
    'RandomInit',
    'KMeansPlusPlusInit',
    'FarthestFirstInit',
    'FromPreviousInit',
    'INITIALIZERS'
]
