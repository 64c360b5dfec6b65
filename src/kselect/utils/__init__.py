"""Utility functions for kselect."""

from .convergence import ChangeInAssignments

from .validation import (
    validate_data,
    check_n_clusters,
    check_max_iter,
    check_cascade_bounds,
    check_random_state
)

__all__ = [
    # Convergence criteria
    'ChangeInAssignments',

    # Validation
    'validate_data',
    'check_n_clusters',
    'check_max_iter',
    'check_cascade_bounds',
    'check_random_state'
]
