"""ALS correction engine."""

from .corrector import apply_correction, batch_correction, MIN_POINTS
from .statistics import describe, analyze_frequency_components, calculate_statistics, format_statistics

__all__ = [
    'apply_correction',
    'batch_correction',
    'MIN_POINTS',
    'describe',
    'analyze_frequency_components',
    'calculate_statistics',
    'format_statistics',
]
