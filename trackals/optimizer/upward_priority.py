"""
Upward-priority plan-line optimizer.

Reshapes a proposed plan line so that, within the movement limits, as many
positions as possible are lifted rather than lowered.
"""

import time
from types import MappingProxyType

import numpy as np

from ..config import resolve_optimizer_options
from ..data_model import line_values, line_positions, to_points
from ..kernels import moving_average, three_point_smooth
from ..utils.logger import log_debug, log_info, log_warning
from .constraints import find_violations
from .evaluation import evaluate_movements
from .report import generate_report, get_recommendation


# Points on each side in the final plan-line smoothing pass
PLAN_SMOOTHING_HALF_WINDOW = 5


class UpwardPriorityOptimizer:
    """
    Greedy local search over plan lines, keeping the best-scoring one.

    The configuration is fixed at construction and read-only; every method
    works only on its arguments, so one instance can serve concurrent calls.

    Parameters
    ----------
    options : mapping, optional
        See :data:`trackals.config.OPTIMIZER_DEFAULTS`
    **config
        Options as keyword arguments (``max_upward``, ``max_downward``,
        ``target_upward_ratio``, ``iteration_limit``,
        ``convergence_threshold``, ``lift_margin``, ``enable_lift``,
        ``data_interval``)

    Examples
    --------
    >>> optimizer = UpwardPriorityOptimizer(max_downward=10, target_upward_ratio=0.7)
    >>> result = optimizer.optimize_plan_line(restored, plan)
    >>> result['statistics']['upward_ratio'], result['recommendation']
    """

    def __init__(self, options=None, **config):
        self.config = MappingProxyType(resolve_optimizer_options(options, **config))

    @property
    def max_upward(self):
        return self.config['max_upward']

    @property
    def max_downward(self):
        return self.config['max_downward']

    @property
    def target_upward_ratio(self):
        return self.config['target_upward_ratio']

    # ===================== Evaluation =====================
    def _aligned(self, restored_waveform, plan_line):
        n = len(plan_line)
        return line_values(restored_waveform, n), line_values(plan_line, n)

    def _evaluate(self, restored, plan):
        return evaluate_movements(plan - restored, self.max_upward, self.max_downward)

    def evaluate_plan_line(self, restored_waveform, plan_line):
        """
        Movement statistics and score of ``plan_line``.

        Samples missing from either line (``None`` or past the end of the
        restored waveform) count as value 0.
        """
        restored, plan = self._aligned(restored_waveform, plan_line)
        return self._evaluate(restored, plan)

    # ===================== Adjustment =====================
    def adjust_movements(self, movement):
        """
        Shrink lowering and amplify small lifts, point by point.

        Lowering beyond ``max_downward`` is clamped to it, lowering under 30%
        of it is dropped, anything in between is halved. Lifts under half of
        ``max_upward`` that are also under half the target lift
        (``max_upward * target_upward_ratio``) grow by 1.5x, capped at the
        target lift.
        """
        movement = np.asarray(movement, dtype=float)
        adjusted = movement.copy()
        max_down = self.max_downward

        down = movement < 0
        magnitude = -movement
        adjusted[down & (magnitude > max_down)] = -max_down
        adjusted[down & (magnitude < max_down * 0.3)] = 0.0
        halve = down & (magnitude <= max_down) & (magnitude >= max_down * 0.3)
        adjusted[halve] = movement[halve] * 0.5

        target_upward = self.max_upward * self.target_upward_ratio
        small_up = (movement >= 0) & (movement < self.max_upward * 0.5) & (movement < target_upward * 0.5)
        adjusted[small_up] = np.minimum(movement[small_up] * 1.5, target_upward)

        return adjusted

    def _lift(self, restored, plan):
        # Raise the whole line so the (1 - target) quantile of movements sits
        # at lift_margin, without pushing any point past max_upward
        movement = plan - restored
        if not len(movement) or np.mean(movement > 0) >= self.target_upward_ratio:
            return plan

        level = np.quantile(movement, 1 - self.target_upward_ratio)
        raise_by = min(self.config['lift_margin'] - level, self.max_upward - movement.max())
        if raise_by <= 0:
            return plan
        return plan + raise_by

    def _adjust_values(self, restored, plan):
        current = plan - restored
        adjusted = self.adjust_movements(current)
        smoothed = three_point_smooth(adjusted, current)

        values = moving_average(restored + smoothed, PLAN_SMOOTHING_HALF_WINDOW)
        if self.config['enable_lift']:
            values = self._lift(restored, values)
        return values

    def adjust_plan_line(self, restored_waveform, plan_line):
        """
        One adjustment step.

        Per-point movement adjustment (:meth:`adjust_movements`), 3-point
        smoothing of each interior movement against its neighbours' current
        movements (0.25 / 0.5 / 0.25), a +/-5 point moving average over the
        plan values and, when enabled and the upward ratio is still below
        target, a uniform lift.

        Returns
        -------
        list of dict
            Adjusted plan line as ``{'position', 'value'}`` points
        """
        restored, plan = self._aligned(restored_waveform, plan_line)
        positions = line_positions(plan_line, restored_waveform, self.config['data_interval'])
        return to_points(positions, self._adjust_values(restored, plan))

    # ===================== Optimization =====================
    def optimize_plan_line(self, restored_waveform, initial_plan_line, timeout=None, cancel_event=None):
        """
        Optimize a plan line for upward priority.

        Parameters
        ----------
        restored_waveform : sequence
            Restored waveform samples, aligned index-by-index with the plan
        initial_plan_line : sequence
            Proposed plan line samples
        timeout : float, optional
            Wall-clock budget in seconds, checked between iterations
        cancel_event : threading.Event, optional
            Stops the search between iterations once set

        Returns
        -------
        result : dict
            - 'optimized_plan_line': best-scoring plan line seen
            - 'movements': its movements (ndarray)
            - 'statistics' / 'initial_statistics': evaluation dicts
            - 'iterations', 'converged'
            - 'improvement': change in ``upward_ratio`` and ``score``
            - 'history': per-iteration ``upward_ratio`` and ``score``
            - 'stopped': None, 'timeout' or 'cancelled'
            - 'recommendation': text
        """
        config = self.config

        restored, initial = self._aligned(restored_waveform, initial_plan_line)
        initial_stats = self._evaluate(restored, initial)
        log_info(f"Initial upward ratio: {initial_stats['upward_ratio'] * 100:.1f}%")

        if initial_stats['upward_ratio'] >= config['target_upward_ratio']:
            return {
                'optimized_plan_line': list(initial_plan_line),
                'movements': initial - restored,
                'statistics': initial_stats,
                'initial_statistics': initial_stats,
                'iterations': 0,
                'converged': True,
                'improvement': {'upward_ratio': 0.0, 'score': 0.0},
                'history': [],
                'stopped': None,
                'recommendation': get_recommendation(
                    initial_stats, config['target_upward_ratio'], config['max_downward']),
                'message': 'Target upward ratio already achieved',
            }

        deadline = time.monotonic() + timeout if timeout is not None else None
        current = initial
        best = initial
        best_score = initial_stats['score']
        history = []
        iteration = 0
        converged = False
        stopped = None

        while iteration < config['iteration_limit'] and not converged:
            if cancel_event is not None and cancel_event.is_set():
                stopped = 'cancelled'
                break
            if deadline is not None and time.monotonic() >= deadline:
                stopped = 'timeout'
                break

            adjusted = self._adjust_values(restored, current)
            stats = self._evaluate(restored, adjusted)
            history.append({'upward_ratio': stats['upward_ratio'], 'score': stats['score']})

            if stats['score'] > best_score:
                best = adjusted
                best_score = stats['score']

            # Plateau check is against the initial ratio, not the previous iteration
            change = abs(stats['upward_ratio'] - initial_stats['upward_ratio'])
            if stats['upward_ratio'] >= config['target_upward_ratio'] or change < config['convergence_threshold']:
                converged = True

            current = adjusted
            iteration += 1

            if iteration % 10 == 0:
                log_debug(f"Iteration {iteration}: upward ratio {stats['upward_ratio'] * 100:.1f}%")

        if stopped:
            log_warning(f"Plan-line optimization stopped ({stopped}) after {iteration} iterations")

        final_stats = self._evaluate(restored, best)
        positions = line_positions(initial_plan_line, restored_waveform, config['data_interval'])
        log_info(f"Final upward ratio: {final_stats['upward_ratio'] * 100:.1f}% "
                 f"after {iteration} iterations (converged={converged})")

        return {
            'optimized_plan_line': to_points(positions, best),
            'movements': best - restored,
            'statistics': final_stats,
            'initial_statistics': initial_stats,
            'iterations': iteration,
            'converged': converged,
            'improvement': {
                'upward_ratio': final_stats['upward_ratio'] - initial_stats['upward_ratio'],
                'score': final_stats['score'] - initial_stats['score'],
            },
            'history': history,
            'stopped': stopped,
            'recommendation': get_recommendation(
                final_stats, config['target_upward_ratio'], config['max_downward']),
        }

    # ===================== Reporting =====================
    def check_constraints(self, plan_line, restored_waveform):
        """Positions where the plan line exceeds the lift or lowering limit."""
        restored, plan = self._aligned(restored_waveform, plan_line)
        positions = line_positions(plan_line, restored_waveform, self.config['data_interval'])
        return find_violations(positions, plan - restored, self.max_upward, self.max_downward)

    def get_recommendation(self, stats):
        return get_recommendation(stats, self.target_upward_ratio, self.max_downward)

    def generate_report(self, result):
        return generate_report(result, self.target_upward_ratio, self.max_downward)


def optimize_plan_line(restored_waveform, initial_plan_line, timeout=None, cancel_event=None, **config):
    """Run :meth:`UpwardPriorityOptimizer.optimize_plan_line` with a one-off configuration."""
    optimizer = UpwardPriorityOptimizer(**config)
    return optimizer.optimize_plan_line(restored_waveform, initial_plan_line,
                                        timeout=timeout, cancel_event=cancel_event)
