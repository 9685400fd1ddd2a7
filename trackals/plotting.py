"""
Matplotlib figures for correction and optimization results.
"""

import numpy as np
from matplotlib.figure import Figure

from .data_model import line_values, line_positions


def plot_correction(result, title="ALS Correction"):
    """
    Original/baseline on top, corrected series below.

    Parameters
    ----------
    result : dict
        Return value of :func:`trackals.correction.apply_correction`
    title : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    positions = result['positions']
    original = np.array([row['original_value'] for row in result['data']])

    fig = Figure(figsize=(10, 8), dpi=100)
    ax1 = fig.add_subplot(2, 1, 1)
    ax2 = fig.add_subplot(2, 1, 2, sharex=ax1)

    ax1.plot(positions, original, '-', linewidth=1, label='Original', color='#34495e')
    ax1.plot(positions, result['baseline'], '-', linewidth=2, label='Baseline', color='#c0392b')
    ax1.set_ylabel('Irregularity (mm)')
    ax1.set_title(f"{title} ({result['parameters']['method']})", fontweight='bold')
    ax1.legend(loc='best', fontsize=9)
    ax1.grid(True, alpha=0.3)

    stats = result['statistics']
    ax2.plot(positions, result['corrected'], '-', linewidth=1, color='#2980b9',
             label=f"Corrected (improvement {stats['improvement']:.1f}%)")
    ax2.axhline(0, color='black', linewidth=0.8)
    ax2.set_xlabel('Position (m)')
    ax2.set_ylabel('Corrected (mm)')
    ax2.legend(loc='best', fontsize=9)
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig


def plot_optimization(restored_waveform, initial_plan_line, result, title="Upward Priority Optimization"):
    """
    Restored waveform with initial and optimized plan lines, and the
    movements of both plan lines.

    Returns
    -------
    matplotlib.figure.Figure
    """
    n = len(initial_plan_line)
    positions = line_positions(initial_plan_line, restored_waveform)
    restored = line_values(restored_waveform, n)
    initial = line_values(initial_plan_line, n)
    optimized = line_values(result['optimized_plan_line'], n)

    fig = Figure(figsize=(10, 8), dpi=100)
    ax1 = fig.add_subplot(2, 1, 1)
    ax2 = fig.add_subplot(2, 1, 2, sharex=ax1)

    ax1.plot(positions, restored, '-', linewidth=1, label='Restored waveform', color='#34495e')
    ax1.plot(positions, initial, '--', linewidth=1.5, label='Initial plan line', color='#7f8c8d')
    ax1.plot(positions, optimized, '-', linewidth=2, label='Optimized plan line', color='#27ae60')
    ax1.set_ylabel('Level (mm)')
    ax1.set_title(title, fontweight='bold')
    ax1.legend(loc='best', fontsize=9)
    ax1.grid(True, alpha=0.3)

    ax2.plot(positions, initial - restored, '--', linewidth=1.5, label='Initial movement', color='#7f8c8d')
    ax2.plot(positions, optimized - restored, '-', linewidth=2, label='Optimized movement', color='#27ae60')
    ax2.axhline(0, color='black', linewidth=0.8)
    ax2.set_xlabel('Position (m)')
    ax2.set_ylabel('Movement (mm, + = lift)')
    ax2.legend(loc='best', fontsize=9)
    ax2.grid(True, alpha=0.3)

    fig.tight_layout()
    return fig
