"""Unit tests for linesearch module."""

import unittest

import numpy

import descent

from .test_objective import QuadraticObjective


class test_FixedStep(unittest.TestCase):
    """Unit tests for descent.FixedStep"""

    def test_init(self):
        """Test creation with data."""
        ls = descent.FixedStep(0.1)
        self.assertAlmostEqual(ls.step_width, 0.1)

        ls.step_width = 0.2
        self.assertAlmostEqual(ls.step_width, 0.2)

        # test invalid parameters
        with self.assertRaises(ValueError):
            descent.FixedStep(0.0)
        with self.assertRaises(ValueError):
            descent.FixedStep(-1.0)
        with self.assertRaises(ValueError):
            descent.FixedStep(numpy.inf)
        with self.assertRaises(ValueError):
            descent.FixedStep(numpy.nan)
        with self.assertRaises(TypeError):
            descent.FixedStep("0.1")
        with self.assertRaises(ValueError):
            ls.step_width = 0.0

    def test_search(self):
        """Test search method."""
        ls = descent.FixedStep(0.3)
        q = QuadraticObjective()
        rng = numpy.random.default_rng(1)
        for _ in range(100):
            x = rng.uniform(-10, 10, size=4)
            d = rng.uniform(-10, 10, size=4)
            res = ls.search(q, x, d)
            for i in range(4):
                self.assertEqual(res.position[i], x[i] + 0.3 * d[i])
            self.assertEqual(res.value, q.value(res.position))

        # direction of the wrong dimension
        with self.assertRaises(ValueError):
            ls.search(q, [1.0, 2.0], [1.0])

    def test_value_only(self):
        """Test a function without gradient can be used."""
        ls = descent.FixedStep(0.5)
        res = ls.search(descent.Func(lambda x: x[0] ** 2), [2.0], [-2.0])
        numpy.testing.assert_array_equal(res.position, [1.0])
        self.assertEqual(res.value, 1.0)


class test_ExactLineSearch(unittest.TestCase):
    """Unit tests for descent.ExactLineSearch"""

    def test_init(self):
        """Test creation with data."""
        ls = descent.ExactLineSearch(start=0.25, stop=8.0, factor=2.0)
        self.assertAlmostEqual(ls.start, 0.25)
        self.assertAlmostEqual(ls.stop, 8.0)
        self.assertAlmostEqual(ls.factor, 2.0)

        # test invalid parameters
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(0.0, 1.0, 2.0)
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(1.0, 1.0, 2.0)
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(2.0, 1.0, 2.0)
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(1.0, numpy.inf, 2.0)
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(1.0, 2.0, 1.0)
        with self.assertRaises(ValueError):
            descent.ExactLineSearch(1.0, 2.0, 0.5)
        with self.assertRaises(ValueError):
            ls.start = 8.0
        with self.assertRaises(ValueError):
            ls.stop = 0.25

    def test_step_widths(self):
        """Test the candidate step sizes."""
        ls = descent.ExactLineSearch(start=0.25, stop=8.0, factor=2.0)
        self.assertEqual(list(ls.step_widths()), [0.25, 0.5, 1.0, 2.0, 4.0, 8.0])

        ls = descent.ExactLineSearch(start=1.0, stop=10.0, factor=3.0)
        self.assertEqual(list(ls.step_widths()), [1.0, 3.0, 9.0])

    def test_search(self):
        """Test search method."""
        ls = descent.ExactLineSearch(start=0.25, stop=8.0, factor=2.0)
        q = QuadraticObjective()

        # minimum at step 4
        x = numpy.array([-3.0])
        d = numpy.array([1.0])
        res = ls.search(q, x, d)
        numpy.testing.assert_array_equal(res.position, [1.0])
        self.assertEqual(res.value, 0.0)

        # best of the candidates
        x = numpy.array([-2.0, 0.5])
        d = numpy.array([0.7, -0.1])
        res = ls.search(q, x, d)
        for step in ls.step_widths():
            self.assertLessEqual(res.value, q.value(x + step * d))
        self.assertEqual(res.value, q.value(res.position))

    def test_no_improvement(self):
        """Test the starting position is kept for an ascent direction."""
        ls = descent.ExactLineSearch(start=0.25, stop=8.0, factor=2.0)
        q = QuadraticObjective()
        res = ls.search(q, [-3.0], [-1.0])
        numpy.testing.assert_array_equal(res.position, [-3.0])
        self.assertEqual(res.value, 16.0)

    def test_evaluations(self):
        """Test the number of function evaluations."""
        calls = []

        def f(x):
            calls.append(x.copy())
            return float(x[0] ** 2)

        ls = descent.ExactLineSearch(start=0.25, stop=8.0, factor=2.0)
        ls.search(descent.Func(f), [1.0], [1.0])
        self.assertEqual(len(calls), 1 + 6)


class test_ArmijoLineSearch(unittest.TestCase):
    """Unit tests for descent.ArmijoLineSearch"""

    def test_init(self):
        """Test creation with data."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5)
        self.assertAlmostEqual(ls.control, 0.5)
        self.assertAlmostEqual(ls.initial_step, 1.0)
        self.assertAlmostEqual(ls.decay, 0.5)
        self.assertEqual(ls.max_iter, 1000)

        # test invalid parameters
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(0.0, 1.0, 0.5)
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(1.0, 1.0, 0.5)
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(0.5, 0.0, 0.5)
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(0.5, numpy.inf, 0.5)
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(0.5, 1.0, 1.0)
        with self.assertRaises(ValueError):
            descent.ArmijoLineSearch(0.5, 1.0, 0.0)
        with self.assertRaises(ValueError):
            ls.max_iter = 0
        with self.assertRaises(TypeError):
            ls.max_iter = 100.0

    def test_search(self):
        """Test the accepted step is the largest satisfying the Armijo rule."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5)
        f = descent.problems.Rosenbrock()
        rng = numpy.random.default_rng(3)
        for _ in range(100):
            x = f.random_start(rng)
            g = f.gradient(x)
            d = -g
            value = f.value(x)
            t = -ls.control * numpy.dot(g, d)

            res = ls.search(f, x, d)

            step = ls.initial_step
            while f.value(x + step * d) > value - step * t:
                step *= ls.decay
            numpy.testing.assert_array_equal(res.position, x + step * d)
            self.assertEqual(res.value, f.value(res.position))
            self.assertLessEqual(res.value, value - step * t)

    def test_not_descent(self):
        """Test search along a direction that is not a descent direction."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5)
        q = QuadraticObjective()
        with self.assertRaises(ValueError):
            ls.search(q, [-3.0], [-1.0])
        with self.assertRaises(ValueError):
            ls.search(q, [-3.0], [0.0])
        with self.assertRaises(ValueError):
            ls.search(q, [1.0], [1.0])

    def test_not_differentiable(self):
        """Test search requires a gradient."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5)
        with self.assertRaises(TypeError):
            ls.search(descent.Func(lambda x: x[0] ** 2), [1.0], [-1.0])

    def test_failure(self):
        """Test search that never satisfies the Armijo rule."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5, max_iter=10)
        f = descent.DifferentiableFunc(lambda x: 1.0, lambda x: [1.0])
        with self.assertRaises(descent.LineSearchError):
            ls.search(f, [0.0], [-1.0])

    def test_dimensions(self):
        """Test direction of the wrong dimension."""
        ls = descent.ArmijoLineSearch(control=0.5, initial_step=1.0, decay=0.5)
        with self.assertRaises(ValueError):
            ls.search(QuadraticObjective(), [1.0, 2.0], [1.0])


if __name__ == "__main__":
    unittest.main()
