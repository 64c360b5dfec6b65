"""Distance metrics for clustering and validation."""

from typing import Union

from ..base.interfaces import DistanceMetric
from ..exceptions import InvalidInputError
from .euclidean import EuclideanDistance
from .manhattan import ManhattanDistance

DISTANCES = {
    'euclidean': EuclideanDistance,
    'manhattan': ManhattanDistance,
}


def get_distance(distance: Union[str, DistanceMetric]) -> DistanceMetric:
    """Resolve a distance name or pass a metric instance through.

    Args:
        distance: 'euclidean', 'manhattan' or a DistanceMetric

    Returns:
        DistanceMetric instance

    Raises:
        InvalidInputError: For any other value
    """
    if isinstance(distance, DistanceMetric):
        return distance
    if isinstance(distance, str):
        cls = DISTANCES.get(distance.strip().lower())
        if cls is not None:
            return cls()
    raise InvalidInputError(
        f"unsupported distance function {distance!r}; "
        f"expected one of {sorted(DISTANCES)}"
    )


__all__ = [
    'EuclideanDistance',
    'ManhattanDistance',
    'DISTANCES',
    'get_distance'
]
