from __future__ import annotations

import threading
import unittest

import numpy as np
from numpy.testing import assert_allclose

from trackals.errors import ConfigurationError
from trackals.optimizer import (
    UpwardPriorityOptimizer,
    evaluate_movements,
    format_report,
    get_recommendation,
    optimize_plan_line,
)


def line(values, interval=0.25):
    return [{'position': i * interval, 'value': float(v)} for i, v in enumerate(values)]


class TestEvaluation(unittest.TestCase):
    def test_score(self) -> None:
        stats = evaluate_movements([1, -2, 0, 60, -15], max_upward=50, max_downward=10)
        self.assertEqual(stats['upward_points'], 2)
        self.assertEqual(stats['downward_points'], 2)
        self.assertEqual(stats['zero_points'], 1)
        self.assertEqual(stats['max_upward'], 60.0)
        self.assertEqual(stats['max_downward'], 15.0)
        self.assertAlmostEqual(stats['avg_downward'], 8.5)
        self.assertAlmostEqual(stats['upward_ratio'], 0.4)
        # 40 - 2*5 - 10 + 0.01*(61 - 17)
        self.assertAlmostEqual(stats['score'], 20.44)

    def test_empty(self) -> None:
        stats = evaluate_movements([], max_upward=50, max_downward=10)
        self.assertEqual(stats['upward_ratio'], 0.0)
        self.assertEqual(stats['score'], 0.0)

    def test_missing_samples_count_as_zero(self) -> None:
        optimizer = UpwardPriorityOptimizer()
        restored = [{'position': 0.0, 'value': 1.0}, None]
        plan = line([2.0, -1.0, 3.0])
        stats = optimizer.evaluate_plan_line(restored, plan)
        self.assertEqual(stats['total_points'], 3)
        self.assertEqual(stats['upward_points'], 2)
        self.assertEqual(stats['downward_points'], 1)
        self.assertAlmostEqual(stats['upward_ratio'], 2 / 3)


class TestAdjustment(unittest.TestCase):
    def test_adjust_movements_rules(self) -> None:
        optimizer = UpwardPriorityOptimizer(max_upward=50, max_downward=10, target_upward_ratio=0.7)
        adjusted = optimizer.adjust_movements([-20, -2, -6, 0, 5, 20, 30])
        assert_allclose(adjusted, [-10, 0, -3, 0, 7.5, 20, 30])

    def test_small_lift_threshold_follows_target(self) -> None:
        optimizer = UpwardPriorityOptimizer(max_upward=50, target_upward_ratio=0.1)
        # target lift 5, so only lifts below 2.5 grow
        assert_allclose(optimizer.adjust_movements([2, 3]), [3, 3])

    def test_adjust_plan_line_keeps_positions(self) -> None:
        optimizer = UpwardPriorityOptimizer(enable_lift=False)
        restored = line(np.zeros(30), interval=0.5)
        plan = line(np.full(30, -5.0), interval=0.5)
        adjusted = optimizer.adjust_plan_line(restored, plan)
        self.assertEqual([p['position'] for p in adjusted], [p['position'] for p in plan])
        values = np.array([p['value'] for p in adjusted])
        # halved lowering, smoothed against the neighbours' -5
        self.assertAlmostEqual(values[15], -3.75)
        self.assertTrue(np.all(values < 0))


class TestOptimizePlanLine(unittest.TestCase):
    def setUp(self) -> None:
        self.restored = line(np.zeros(100))
        self.plan = line(np.full(100, -5.0))

    def test_target_already_met_returns_input(self) -> None:
        plan = line(np.ones(100))
        result = UpwardPriorityOptimizer().optimize_plan_line(self.restored, plan)
        self.assertEqual(result['iterations'], 0)
        self.assertTrue(result['converged'])
        self.assertEqual(result['optimized_plan_line'], plan)
        self.assertEqual(result['improvement'], {'upward_ratio': 0.0, 'score': 0.0})
        self.assertIn('message', result)

    def test_lowered_plan_is_lifted(self) -> None:
        optimizer = UpwardPriorityOptimizer(max_upward=50, max_downward=10, target_upward_ratio=0.7)
        result = optimizer.optimize_plan_line(self.restored, self.plan)

        self.assertEqual(result['initial_statistics']['upward_ratio'], 0.0)
        self.assertTrue(result['converged'])
        self.assertEqual(result['iterations'], 1)
        self.assertIsNone(result['stopped'])

        stats = result['statistics']
        self.assertGreaterEqual(stats['upward_ratio'], 0.7)
        self.assertEqual(stats['max_downward'], 0.0)
        self.assertLessEqual(stats['max_upward'], 50.0)
        self.assertGreater(result['improvement']['score'], 0)
        self.assertTrue(np.all(result['movements'] > 0.5))
        self.assertEqual([p['position'] for p in result['optimized_plan_line']],
                         [p['position'] for p in self.plan])
        self.assertTrue(result['recommendation'].startswith("Target upward ratio achieved"))

    def test_without_lift_stops_on_plateau(self) -> None:
        result = optimize_plan_line(self.restored, self.plan, enable_lift=False)
        self.assertEqual(result['iterations'], 1)
        self.assertTrue(result['converged'])
        self.assertEqual(result['statistics']['upward_ratio'], 0.0)
        # smaller lowering still scores better than the initial plan
        self.assertGreater(result['statistics']['score'], result['initial_statistics']['score'])
        self.assertTrue(result['recommendation'].startswith("Further optimization is required"))

    def test_keeps_best_scoring_line(self) -> None:
        rng = np.random.default_rng(3)
        restored = line(rng.normal(scale=4, size=200))
        plan = line(rng.normal(loc=-6, scale=8, size=200))
        result = optimize_plan_line(restored, plan, iteration_limit=20, convergence_threshold=0.0)

        scores = [result['initial_statistics']['score']] + [h['score'] for h in result['history']]
        self.assertEqual(len(result['history']), result['iterations'])
        self.assertAlmostEqual(result['statistics']['score'], max(scores))

    def test_ten_point_lowered_plan(self) -> None:
        restored = line(np.zeros(10))
        plan = line(np.full(10, -5.0))
        result = optimize_plan_line(restored, plan, max_downward=10, target_upward_ratio=0.7)

        self.assertEqual(len(result['optimized_plan_line']), 10)
        self.assertTrue(np.all(result['movements'] >= -10))
        self.assertGreater(result['statistics']['upward_ratio'], 0.0)
        self.assertTrue(result['converged'])

    def test_iteration_limit_zero(self) -> None:
        result = optimize_plan_line(self.restored, self.plan, iteration_limit=0)
        self.assertEqual(result['iterations'], 0)
        self.assertFalse(result['converged'])
        assert_allclose([p['value'] for p in result['optimized_plan_line']], -5.0)

    def test_timeout(self) -> None:
        result = optimize_plan_line(self.restored, self.plan, timeout=0)
        self.assertEqual(result['stopped'], 'timeout')
        self.assertEqual(result['iterations'], 0)
        assert_allclose(result['movements'], -5.0)

    def test_cancel(self) -> None:
        event = threading.Event()
        event.set()
        result = UpwardPriorityOptimizer().optimize_plan_line(self.restored, self.plan, cancel_event=event)
        self.assertEqual(result['stopped'], 'cancelled')
        self.assertFalse(result['converged'])

    def test_module_function_matches_class(self) -> None:
        by_function = optimize_plan_line(self.restored, self.plan, max_downward=8)
        by_class = UpwardPriorityOptimizer({'maxDownward': 8}).optimize_plan_line(self.restored, self.plan)
        assert_allclose(by_function['movements'], by_class['movements'])


class TestConstraintsAndReport(unittest.TestCase):
    def test_check_constraints(self) -> None:
        optimizer = UpwardPriorityOptimizer(max_upward=50, max_downward=10)
        restored = line([0, 0, 0])
        plan = line([60, -15, 5])
        violations = optimizer.check_constraints(plan, restored)
        self.assertEqual(violations['total_violations'], 2)
        self.assertEqual(violations['upward_violations'][0]['position'], 0.0)
        self.assertAlmostEqual(violations['upward_violations'][0]['excess'], 10.0)
        self.assertAlmostEqual(violations['downward_violations'][0]['excess'], 5.0)
        self.assertAlmostEqual(violations['max_violation'], 10.0)

    def test_no_violations(self) -> None:
        violations = UpwardPriorityOptimizer().check_constraints(line([1, 2]), line([0, 0]))
        self.assertEqual(violations['total_violations'], 0)
        self.assertEqual(violations['max_violation'], 0.0)

    def test_recommendation_branches(self) -> None:
        cases = [
            ({'upward_ratio': 0.8, 'max_downward': 20.0}, "Target upward ratio achieved"),
            ({'upward_ratio': 0.65, 'max_downward': 20.0}, "Upward ratio is close to the target"),
            ({'upward_ratio': 0.3, 'max_downward': 12.0}, "Lowering exceeds the allowed limit"),
            ({'upward_ratio': 0.3, 'max_downward': 5.0}, "Further optimization is required"),
        ]
        for stats, expected in cases:
            with self.subTest(stats=stats):
                self.assertTrue(get_recommendation(stats, 0.7, 10.0).startswith(expected))

    def test_report(self) -> None:
        optimizer = UpwardPriorityOptimizer()
        result = optimizer.optimize_plan_line(line(np.zeros(50)), line(np.full(50, -5.0)))
        report = optimizer.generate_report(result)
        self.assertTrue(report['summary']['optimized'])
        self.assertTrue(report['summary']['target_achieved'])
        self.assertEqual(report['summary']['upward_ratio'], "100.0%")
        self.assertEqual(report['improvement']['upward_ratio_increase'], "100.0%")
        self.assertIn("Recommendation: Target upward ratio achieved", format_report(report))


class TestConfiguration(unittest.TestCase):
    def test_defaults(self) -> None:
        optimizer = UpwardPriorityOptimizer()
        self.assertEqual(optimizer.max_upward, 50.0)
        self.assertEqual(optimizer.max_downward, 10.0)
        self.assertEqual(optimizer.target_upward_ratio, 0.7)

    def test_config_is_read_only(self) -> None:
        optimizer = UpwardPriorityOptimizer()
        with self.assertRaises(TypeError):
            optimizer.config['max_upward'] = 1.0

    def test_invalid_options(self) -> None:
        for bad in ({'target_upward_ratio': 0}, {'target_upward_ratio': 1.5},
                    {'max_upward': -1}, {'iteration_limit': 2.5}, {'tolerance': 1}):
            with self.subTest(options=bad):
                with self.assertRaises(ConfigurationError):
                    UpwardPriorityOptimizer(bad)


if __name__ == "__main__":
    unittest.main()
