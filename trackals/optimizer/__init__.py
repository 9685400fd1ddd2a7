"""Upward-priority plan-line optimizer."""

from .upward_priority import UpwardPriorityOptimizer, optimize_plan_line, PLAN_SMOOTHING_HALF_WINDOW
from .evaluation import evaluate_movements, calculate_score, movements
from .constraints import find_violations
from .report import generate_report, get_recommendation, format_report

__all__ = [
    'UpwardPriorityOptimizer',
    'optimize_plan_line',
    'PLAN_SMOOTHING_HALF_WINDOW',
    'evaluate_movements',
    'calculate_score',
    'movements',
    'find_violations',
    'generate_report',
    'get_recommendation',
    'format_report',
]
