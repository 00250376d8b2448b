import importlib.util
import unittest

import numpy as np

from ahpcore.consistency import analyze_consistency, random_index
from ahpcore.judgments import JudgmentSet
from ahpcore.pipeline import derive_priorities
from ahpcore.priority import compute_priorities, equal_priorities

TEXTBOOK_MATRIX = [
    [1.0, 1.0, 5.0],
    [1.0, 1.0, 1.0 / 3.0],
    [1.0 / 5.0, 3.0, 1.0],
]


class TestComputePriorities(unittest.TestCase):
    def test_two_criteria_basic(self) -> None:
        result = compute_priorities(["Cost", "Quality"], np.array([[1.0, 3.0], [1.0 / 3.0, 1.0]]))
        self.assertAlmostEqual(result.weight_of("Cost"), 0.75, places=9)
        self.assertAlmostEqual(result.weight_of("Quality"), 0.25, places=9)
        self.assertAlmostEqual(sum(result.priorities.values()), 1.0, places=9)

    def test_all_ones_matrix_gives_equal_weights(self) -> None:
        for n_items in range(1, 8):
            ids = [f"c{i}" for i in range(n_items)]
            result = compute_priorities(ids, np.ones((n_items, n_items)))
            for value in result.priorities.values():
                self.assertAlmostEqual(value, 1.0 / n_items, places=12)

    def test_textbook_example(self) -> None:
        result = compute_priorities(["a", "b", "c"], np.array(TEXTBOOK_MATRIX))
        self.assertAlmostEqual(result.weight_of("a"), 1509 / 3135, places=9)
        self.assertAlmostEqual(result.weight_of("b"), 739 / 3135, places=9)
        self.assertAlmostEqual(result.weight_of("c"), 887 / 3135, places=9)
        np.testing.assert_allclose(result.normalized.sum(axis=0), np.ones(3))

    def test_empty_matrix(self) -> None:
        result = compute_priorities([], np.zeros((0, 0)))
        self.assertEqual(result.priorities, {})
        self.assertEqual(result.matrix.shape, (0, 0))
        self.assertEqual(result.normalized.shape, (0, 0))

    def test_equal_priorities_is_flagged(self) -> None:
        result = equal_priorities(["s1", "s2", "s3", "s4"])
        self.assertTrue(result.defaulted)
        self.assertEqual(list(result.priorities.values()), [0.25] * 4)


class TestConsistency(unittest.TestCase):
    def test_random_index_table(self) -> None:
        self.assertEqual(random_index(1), 0.0)
        self.assertEqual(random_index(2), 0.0)
        self.assertEqual(random_index(3), 0.58)
        self.assertEqual(random_index(10), 1.49)
        self.assertEqual(random_index(11), 1.12)
        self.assertEqual(random_index(0), 0.0)

    def test_textbook_consistency(self) -> None:
        result = compute_priorities(["a", "b", "c"], np.array(TEXTBOOK_MATRIX))
        metrics = analyze_consistency(result.matrix, result.vector)
        self.assertAlmostEqual(metrics.lambda_max, 3.9034946, places=4)
        self.assertAlmostEqual(metrics.ci, 0.4517473, places=4)
        self.assertAlmostEqual(metrics.cr, 0.778875, places=4)
        self.assertEqual(metrics.ri, 0.58)
        self.assertFalse(metrics.is_consistent)

    def test_perfectly_consistent_matrix(self) -> None:
        matrix = np.array([[1.0, 2.0, 4.0], [0.5, 1.0, 2.0], [0.25, 0.5, 1.0]])
        result = compute_priorities(["x", "y", "z"], matrix)
        metrics = analyze_consistency(result.matrix, result.vector)
        self.assertAlmostEqual(result.weight_of("x"), 4.0 / 7.0, places=12)
        self.assertAlmostEqual(metrics.lambda_max, 3.0, places=9)
        self.assertAlmostEqual(metrics.cr, 0.0, places=9)
        self.assertTrue(metrics.is_consistent)

    def test_single_criterion(self) -> None:
        analysis = derive_priorities(["only"], JudgmentSet().judge())
        self.assertEqual(analysis.priorities.weight_of("only"), 1.0)
        self.assertEqual(analysis.consistency.cr, 0.0)
        self.assertEqual(analysis.consistency.ci, 0.0)

    def test_two_criteria_have_zero_ratio(self) -> None:
        judgments = JudgmentSet()
        judgments.set("a", "b", 9.0)
        analysis = derive_priorities(["a", "b"], judgments.judge())
        self.assertEqual(analysis.consistency.ri, 0.0)
        self.assertEqual(analysis.consistency.cr, 0.0)
        self.assertTrue(analysis.consistency.is_consistent)

    def test_custom_threshold(self) -> None:
        result = compute_priorities(["a", "b", "c"], np.array(TEXTBOOK_MATRIX))
        metrics = analyze_consistency(result.matrix, result.vector, threshold=0.9)
        self.assertTrue(metrics.is_consistent)

    def test_empty_consistency(self) -> None:
        metrics = analyze_consistency(np.zeros((0, 0)), np.zeros(0))
        self.assertEqual((metrics.lambda_max, metrics.ci, metrics.ri, metrics.cr), (0.0, 0.0, 0.0, 0.0))


@unittest.skipUnless(importlib.util.find_spec("pyDecision"), "pyDecision not installed")
class TestAgainstPyDecision(unittest.TestCase):
    def test_mean_weight_derivation_matches(self) -> None:
        from pyDecision.algorithm import ahp_method

        matrix = np.array(
            [
                [1.0, 3.0, 5.0, 7.0],
                [1.0 / 3.0, 1.0, 3.0, 5.0],
                [1.0 / 5.0, 1.0 / 3.0, 1.0, 3.0],
                [1.0 / 7.0, 1.0 / 5.0, 1.0 / 3.0, 1.0],
            ]
        )
        expected, _ = ahp_method(matrix, wd="mean")
        result = compute_priorities(["a", "b", "c", "d"], matrix)
        np.testing.assert_allclose(result.vector, np.asarray(expected, dtype=float), atol=1e-9)
