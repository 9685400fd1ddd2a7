"""Track geometry ALS correction and upward-priority plan-line optimization."""

from . import kernels
from . import baseline
from . import correction
from . import optimizer
from . import data_import
from . import data_preprocessing
from .config import ALS_DEFAULTS, OPTIMIZER_DEFAULTS, SUPPORTED_METHODS
from .correction import apply_correction, batch_correction
from .optimizer import UpwardPriorityOptimizer, optimize_plan_line
from .errors import (TrackALSError, ValidationError, ConfigurationError,
                     UnsupportedMethodError, NumericalError)

__version__ = '0.1.0'

__all__ = [
    'kernels',
    'baseline',
    'correction',
    'optimizer',
    'data_import',
    'data_preprocessing',
    'ALS_DEFAULTS',
    'OPTIMIZER_DEFAULTS',
    'SUPPORTED_METHODS',
    'apply_correction',
    'batch_correction',
    'UpwardPriorityOptimizer',
    'optimize_plan_line',
    'TrackALSError',
    'ValidationError',
    'ConfigurationError',
    'UnsupportedMethodError',
    'NumericalError',
]
