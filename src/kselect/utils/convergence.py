"""
Convergence criteria for the k-means loop.
"""

from typing import Any, Dict, Optional
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion
from ..exceptions import InvalidInputError


class ChangeInAssignments(ConvergenceCriterion):
    """Stops once the share of points that switch cluster stays small.

    A step is stable when fewer than ``min_change_fraction`` of the points
    changed cluster since the previous step; the loop has converged after
    ``patience`` consecutive stable steps. The first call only records a
    baseline. Any threshold below 1/n reduces to "no point moved".
    """

    def __init__(self, min_change_fraction: float = 1e-4, patience: int = 1):
        super().__init__()
        if not 0.0 <= min_change_fraction <= 1.0:
            raise InvalidInputError(
                f"min_change_fraction must lie in [0, 1], got {min_change_fraction}")
        if patience < 1:
            raise InvalidInputError(f"patience must be >= 1, got {patience}")
        self.min_change_fraction = min_change_fraction
        self.patience = patience
        self._previous: Optional[Tensor] = None
        self._stable_steps = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        labels = current_state['assignments']
        if not isinstance(labels, Tensor):
            labels = labels.get_hard()

        previous, self._previous = self._previous, labels.clone()
        if previous is None:
            return False

        n_changed = int((labels != previous).sum())
        fraction = n_changed / max(labels.numel(), 1)
        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'n_changed': n_changed,
            'change_fraction': fraction
        })

        self._stable_steps = self._stable_steps + 1 if fraction < self.min_change_fraction else 0
        return self._stable_steps >= self.patience

    def reset(self):
        super().reset()
        self._previous = None
        self._stable_steps = 0
