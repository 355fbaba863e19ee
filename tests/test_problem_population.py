"""
Tests for Problems, Populations and Distance Helpers
====================================================

Run with: python -m pytest tests/test_problem_population.py -v
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import numpy as np
import unittest

from firefly_opt.distance import (
    attractiveness,
    diversity,
    max_pairwise_distance,
    squared_distance,
)
from firefly_opt.population import Population, PopulationLike
from firefly_opt.problem import BoxProblem, ProblemLike


# =============================================================================
# Test Functions
# =============================================================================

def sphere(x):
    """Sphere function for a single decision vector."""
    return float(np.sum(x ** 2))


def two_objectives(x):
    return [float(x[0]), float(x[1])]


# =============================================================================
# BoxProblem
# =============================================================================

class TestBoxProblem(unittest.TestCase):
    """Bounds, evaluation and fitness comparison."""

    def test_dimensions(self):
        prob = BoxProblem(sphere, [-1, -2, -3], [1, 2, 3], i_dimension=1)
        self.assertEqual(prob.dimension, 3)
        self.assertEqual(prob.i_dimension, 1)
        self.assertEqual(prob.c_dimension, 0)
        self.assertEqual(prob.f_dimension, 1)
        self.assertIsInstance(prob, ProblemLike)

    def test_bounds_validation(self):
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [0, 0], [1])
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [1, 0], [0, 1])
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [], [])
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [0, -np.inf], [1, 1])

    def test_bounds_read_only(self):
        prob = BoxProblem(sphere, [0, 0], [1, 1])
        with self.assertRaises(ValueError):
            prob.lb[0] = 5.0

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [0], [1], sense='best')
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [0], [1], i_dimension=2)
        with self.assertRaises(ValueError):
            BoxProblem(sphere, [0], [1], f_dimension=0)

    def test_objfun_and_fevals(self):
        prob = BoxProblem(sphere, [-5, -5], [5, 5])
        f = prob.objfun(np.array([1.0, 2.0]))
        np.testing.assert_array_equal(f, [5.0])
        prob.objfun([0.0, 0.0])
        self.assertEqual(prob.fevals, 2)

    def test_objfun_wrong_length(self):
        prob = BoxProblem(sphere, [-5, -5], [5, 5])
        with self.assertRaises(ValueError):
            prob.objfun([1.0, 2.0, 3.0])

    def test_objfun_wrong_fitness_shape(self):
        prob = BoxProblem(sphere, [-5, -5], [5, 5], f_dimension=2)
        with self.assertRaises(ValueError):
            prob.objfun([1.0, 2.0])

    def test_compare_minimize(self):
        prob = BoxProblem(sphere, [0], [1])
        self.assertTrue(prob.compare_fitness([1.0], [2.0]))
        self.assertFalse(prob.compare_fitness([2.0], [1.0]))
        self.assertFalse(prob.compare_fitness([1.0], [1.0]))

    def test_compare_maximize(self):
        prob = BoxProblem(sphere, [0], [1], sense='max')
        self.assertTrue(prob.compare_fitness([2.0], [1.0]))
        self.assertFalse(prob.compare_fitness([1.0], [1.0]))

    def test_compare_pareto(self):
        prob = BoxProblem(two_objectives, [0, 0], [1, 1], f_dimension=2)
        self.assertTrue(prob.compare_fitness([0.0, 1.0], [1.0, 1.0]))
        self.assertFalse(prob.compare_fitness([0.0, 2.0], [1.0, 1.0]))
        self.assertFalse(prob.compare_fitness([1.0, 1.0], [1.0, 1.0]))


# =============================================================================
# Population
# =============================================================================

class TestPopulation(unittest.TestCase):
    """Population storage, writes and champion."""

    def setUp(self):
        self.prob = BoxProblem(sphere, [-2, -1, 0], [2, 1, 3])

    def test_random_init_within_bounds(self):
        pop = Population(self.prob, size=30, seed=1)
        self.assertEqual(len(pop), 30)
        X = pop.positions()
        self.assertEqual(X.shape, (30, 3))
        self.assertTrue(np.all(X >= self.prob.lb))
        self.assertTrue(np.all(X <= self.prob.ub))
        self.assertIsInstance(pop, PopulationLike)

    def test_seeded_init_reproducible(self):
        a = Population(self.prob, size=5, seed=7)
        b = Population(self.prob, size=5, seed=7)
        np.testing.assert_array_equal(a.positions(), b.positions())

    def test_fitness_matches_objective(self):
        pop = Population(self.prob, size=4, seed=3)
        for ind in pop:
            self.assertAlmostEqual(ind.cur_f[0], sphere(ind.cur_x))

    def test_set_x_returns_new_fitness(self):
        pop = Population(self.prob)
        pop.push_back([1.0, 1.0, 1.0])
        f = pop.set_x(0, [0.5, 0.0, 0.0])
        np.testing.assert_array_equal(f, [0.25])
        np.testing.assert_array_equal(pop.get_individual(0).cur_x, [0.5, 0.0, 0.0])

    def test_set_x_stores_copy(self):
        pop = Population(self.prob)
        pop.push_back([1.0, 1.0, 1.0])
        x = np.array([0.5, 0.5, 0.5])
        pop.set_x(0, x)
        x[0] = 99.0
        self.assertEqual(pop.get_individual(0).cur_x[0], 0.5)

    def test_personal_best_only_improves(self):
        pop = Population(self.prob)
        pop.push_back([1.0, 0.0, 0.0])
        pop.set_x(0, [2.0, 0.0, 0.0])
        ind = pop.get_individual(0)
        np.testing.assert_array_equal(ind.best_x, [1.0, 0.0, 0.0])
        np.testing.assert_array_equal(ind.best_f, [1.0])

        pop.set_x(0, [0.0, 0.0, 0.0])
        np.testing.assert_array_equal(pop.get_individual(0).best_f, [0.0])

    def test_index_errors(self):
        pop = Population(self.prob, size=2, seed=0)
        with self.assertRaises(IndexError):
            pop.get_individual(2)
        with self.assertRaises(IndexError):
            pop.set_x(-1, [0.0, 0.0, 0.0])

    def test_push_back_wrong_length(self):
        pop = Population(self.prob)
        with self.assertRaises(ValueError):
            pop.push_back([0.0, 0.0])

    def test_champion_first_index_wins_ties(self):
        pop = Population(self.prob)
        pop.push_back([1.0, 0.0, 0.0])
        pop.push_back([0.0, 1.0, 0.0])
        pop.push_back([0.0, 0.0, 2.0])
        champ = pop.champion()
        np.testing.assert_array_equal(champ.x, [1.0, 0.0, 0.0])
        self.assertEqual(pop.best_index(), 0)

    def test_empty_population(self):
        pop = Population(self.prob)
        self.assertEqual(len(pop), 0)
        self.assertEqual(pop.positions().shape, (0, 3))
        with self.assertRaises(ValueError):
            pop.champion()


# =============================================================================
# Distance & Attractiveness
# =============================================================================

class TestDistance(unittest.TestCase):
    """Pure distance helpers."""

    def test_squared_distance(self):
        self.assertEqual(squared_distance([0, 0], [3, 4]), 25.0)

    def test_squared_distance_continuous_block(self):
        self.assertEqual(squared_distance([0, 0, 0], [1, 1, 10], n=2), 2.0)

    def test_attractiveness(self):
        self.assertEqual(attractiveness(0.0, 5.0, 0.7), 0.7)
        self.assertAlmostEqual(attractiveness(2.0, 1 / np.sqrt(2), 1.0), np.exp(-np.sqrt(2)))
        self.assertEqual(attractiveness(123.0, 0.0, 1.0), 1.0)

    def test_max_pairwise_distance(self):
        X = np.array([[0.0, 0.0], [3.0, 4.0], [1.0, 1.0]])
        self.assertAlmostEqual(max_pairwise_distance(X), 5.0)

    def test_max_pairwise_distance_block(self):
        X = np.array([[0.0, 0.0, 0.0], [3.0, 4.0, 100.0]])
        self.assertAlmostEqual(max_pairwise_distance(X, n=2), 5.0)

    def test_max_pairwise_distance_degenerate(self):
        self.assertEqual(max_pairwise_distance(np.ones((4, 2))), 0.0)
        self.assertEqual(max_pairwise_distance(np.ones((1, 2))), 0.0)

    def test_diversity(self):
        self.assertEqual(diversity(np.ones((5, 3))), 0.0)
        self.assertAlmostEqual(diversity(np.array([[0.0], [2.0]])), 1.0)


# =============================================================================
# Main
# =============================================================================

if __name__ == '__main__':
    unittest.main(verbosity=2)
