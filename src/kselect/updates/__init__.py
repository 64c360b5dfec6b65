"""Parameter update strategies."""

from .centre import CentreUpdater, MeanUpdater, MedianUpdater, updater_for

__all__ = [
    'CentreUpdater',
    'MeanUpdater',
    'MedianUpdater',
    'updater_for'
]
