"""
Movement limit checks for a plan line (reporting only).
"""

import numpy as np


def find_violations(positions, movement, max_upward, max_downward):
    """
    List positions whose movement exceeds the lift or lowering limit.

    Parameters
    ----------
    positions : array_like
        Position of each point (m)
    movement : array_like
        ``plan - restored`` at each point (mm)
    max_upward : float
        Largest allowed lift (mm)
    max_downward : float
        Largest allowed lowering magnitude (mm)

    Returns
    -------
    dict
        ``upward_violations`` and ``downward_violations`` (lists of
        ``{'position', 'movement', 'excess'}``), ``total_violations`` and
        ``max_violation`` (largest excess, 0 if none)
    """
    positions = np.asarray(positions, dtype=float)
    movement = np.asarray(movement, dtype=float)

    upward = [
        {'position': float(positions[i]), 'movement': float(movement[i]),
         'excess': float(movement[i] - max_upward)}
        for i in np.flatnonzero(movement > max_upward)
    ]
    downward = [
        {'position': float(positions[i]), 'movement': float(movement[i]),
         'excess': float(-movement[i] - max_downward)}
        for i in np.flatnonzero(movement < -max_downward)
    ]

    excesses = [v['excess'] for v in upward + downward]
    return {
        'upward_violations': upward,
        'downward_violations': downward,
        'total_violations': len(upward) + len(downward),
        'max_violation': max(excesses) if excesses else 0.0,
    }
