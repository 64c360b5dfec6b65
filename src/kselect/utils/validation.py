"""
Input validation utilities.

Every check raises ``InvalidInputError`` with a message naming the violated
precondition, before any clustering work starts.
"""

from typing import Optional, Union
import torch
from torch import Tensor
import numpy as np

from ..exceptions import InvalidInputError


def validate_data(X: Union[Tensor, np.ndarray, list],
                  dtype: torch.dtype = torch.float32,
                  device: Optional[torch.device] = None,
                  ensure_finite: bool = True,
                  ensure_min_samples: int = 1,
                  ensure_min_features: int = 1) -> Tensor:
    """Validate and convert a dataset to a 2D tensor.

    Args:
        X: Input data (tensor, numpy array, or list of feature vectors)
        dtype: Target data type
        device: Target device
        ensure_finite: Whether to reject inf/nan
        ensure_min_samples: Minimum number of samples required
        ensure_min_features: Minimum number of features required

    Returns:
        Validated (n, d) tensor

    Raises:
        InvalidInputError: If validation fails
    """
    if X is None:
        raise InvalidInputError("dataset is missing")

    if isinstance(X, Tensor):
        if X.dtype != dtype or (device is not None and X.device != device):
            X = X.to(dtype=dtype, device=device)
    elif isinstance(X, np.ndarray):
        X = torch.from_numpy(np.ascontiguousarray(X)).to(dtype=dtype, device=device)
    elif isinstance(X, (list, tuple)):
        if len(X) == 0:
            raise InvalidInputError("dataset is empty")
        try:
            X = torch.tensor(X, dtype=dtype, device=device)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"dataset is not a numeric matrix: {e}") from e
    else:
        raise InvalidInputError(f"cannot convert {type(X).__name__} to a dataset tensor")

    if X.dim() == 1:
        X = X.unsqueeze(1)
    elif X.dim() != 2:
        raise InvalidInputError(f"expected a 2D dataset, got {X.dim()}D")

    n_samples, n_features = X.shape
    if n_samples == 0:
        raise InvalidInputError("dataset is empty")
    if n_samples < ensure_min_samples:
        raise InvalidInputError(f"found {n_samples} samples, but need at least "
                                f"{ensure_min_samples}")
    if n_features < ensure_min_features:
        raise InvalidInputError(f"found {n_features} features, but need at least "
                                f"{ensure_min_features}")

    if ensure_finite:
        if torch.isnan(X).any():
            raise InvalidInputError("dataset contains NaN values")
        if torch.isinf(X).any():
            raise InvalidInputError("dataset contains infinite values")

    return X


def check_n_clusters(n_clusters: int, n_samples: Optional[int] = None) -> None:
    """Validate number of clusters (>= 1, and no more than the samples)."""
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InvalidInputError(f"n_clusters must be int, got {type(n_clusters).__name__}")

    if n_clusters < 1:
        raise InvalidInputError(f"n_clusters must be >= 1, got {n_clusters}")

    if n_samples is not None and n_clusters > n_samples:
        raise InvalidInputError(f"n_clusters ({n_clusters}) cannot be larger than "
                                f"n_samples ({n_samples})")


def check_max_iter(max_iter: int) -> None:
    """Validate the iteration budget (>= 1)."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)) or max_iter < 1:
        raise InvalidInputError(f"max_iter must be an integer >= 1, got {max_iter!r}")


def check_cascade_bounds(min_k: int, max_k: int, strict: bool = True) -> None:
    """Validate the candidate range of a cascade scan.

    Args:
        min_k: Smallest cluster count to try (>= 2)
        max_k: Largest cluster count to try
        strict: Also require max_k >= 3 and min_k < max_k. Without it a
            single-element range (min_k == max_k) is accepted.

    Raises:
        InvalidInputError: Naming the first violated bound
    """
    for name, value in (('min_k', min_k), ('max_k', max_k)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidInputError(
                f"cascade bounds invalid: {name} must be an integer, got {value!r}")

    if min_k < 2:
        raise InvalidInputError(
            f"cascade bounds invalid: min_k must be >= 2, got {min_k}")
    if strict:
        if max_k < 3:
            raise InvalidInputError(
                f"cascade bounds invalid: max_k must be >= 3, got {max_k}")
        if min_k >= max_k:
            raise InvalidInputError(
                f"cascade bounds invalid: min_k must be < max_k, got {min_k} >= {max_k}")
    elif min_k > max_k:
        raise InvalidInputError(
            f"cascade bounds invalid: min_k must be <= max_k, got {min_k} > {max_k}")


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> torch.Generator:
    """Create a private generator from a seed.

    Args:
        random_state: Seed, existing generator, or None for a fresh random seed

    Returns:
        torch.Generator (CPU)
    """
    if isinstance(random_state, torch.Generator):
        return random_state
    generator = torch.Generator()
    if random_state is None:
        generator.seed()
    elif isinstance(random_state, (int, np.integer)) and not isinstance(random_state, bool):
        generator.manual_seed(int(random_state))
    else:
        raise InvalidInputError(f"random_state must be int, Generator or None, "
                                f"got {type(random_state).__name__}")
    return generator
