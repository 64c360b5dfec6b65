"""Base classes and interfaces for kselect."""

from .interfaces import (
    DistanceMetric,
    ClusterRepresentation,
    AssignmentStrategy,
    ParameterUpdater,
    InitializationStrategy,
    ConvergenceCriterion,
    ClusteringObjective,
    ClusterEvaluator
)

from .data_structures import (
    ClusterState,
    AssignmentMatrix,
    AlgorithmState,
    SilhouetteResult,
    CascadeEntry,
    CascadeOutcome
)

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'DistanceMetric',
    'ClusterRepresentation',
    'AssignmentStrategy',
    'ParameterUpdater',
    'InitializationStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',
    'ClusterEvaluator',

    # Data structures
    'ClusterState',
    'AssignmentMatrix',
    'AlgorithmState',
    'SilhouetteResult',
    'CascadeEntry',
    'CascadeOutcome',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
