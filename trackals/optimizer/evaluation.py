"""
Movement classification and scoring of a plan line.

Movement at a position is ``plan - restored``: positive is a lift
(upward), negative is a lowering (downward).
"""

import numpy as np


def movements(restored_values, plan_values):
    return np.asarray(plan_values, dtype=float) - np.asarray(restored_values, dtype=float)


def calculate_score(stats, max_upward, max_downward):
    """
    Composite score: upward ratio first, penalties for exceeding limits,
    and a small bonus for net lift.
    """
    score = stats['upward_ratio'] * 100
    score -= 2 * max(0.0, stats['max_downward'] - max_downward)
    score -= max(0.0, stats['max_upward'] - max_upward)
    score += 0.01 * (stats['total_upward'] - stats['total_downward'])
    return float(score)


def evaluate_movements(movement, max_upward, max_downward):
    """
    Summarise an array of movements.

    Returns
    -------
    dict
        Point counts per class, total/max/average lift and lowering (as
        magnitudes), ``upward_ratio`` and ``score``.
    """
    movement = np.asarray(movement, dtype=float)
    up = movement[movement > 0]
    down = -movement[movement < 0]
    total = len(movement)

    stats = {
        'total_points': total,
        'upward_points': int(len(up)),
        'downward_points': int(len(down)),
        'zero_points': int(total - len(up) - len(down)),
        'total_upward': float(up.sum()),
        'total_downward': float(down.sum()),
        'max_upward': float(up.max()) if len(up) else 0.0,
        'max_downward': float(down.max()) if len(down) else 0.0,
        'avg_upward': float(up.mean()) if len(up) else 0.0,
        'avg_downward': float(down.mean()) if len(down) else 0.0,
        'upward_ratio': len(up) / total if total else 0.0,
    }
    stats['score'] = calculate_score(stats, max_upward, max_downward)
    return stats
