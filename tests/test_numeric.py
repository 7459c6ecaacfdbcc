"""Unit tests for numeric module."""

import unittest

import numpy
from parameterized import parameterized, parameterized_class

import descent


@parameterized_class([{"method": "forward"}, {"method": "central"}])
class test_NumericalDifferentiation(unittest.TestCase):
    """Unit tests for descent.NumericalDifferentiation"""

    def setUp(self):
        self.rng = numpy.random.default_rng(42)

    def test_init(self):
        """Test creation with data."""
        f = descent.Func(lambda x: x[0] ** 2)
        d = descent.NumericalDifferentiation(f, method=self.method)
        self.assertIs(d.function, f)
        self.assertEqual(d.method, self.method)
        self.assertIsInstance(d, descent.DifferentiableFunction)
        self.assertAlmostEqual(d.value([3.0]), 9.0)

    def test_square(self):
        """Test the gradient of a parabola."""
        square = descent.NumericalDifferentiation(
            descent.Func(lambda x: x[0] * x[0]), method=self.method
        )
        self.assertLess(abs(square.gradient([0.0])[0]), 1e-3)
        self.assertGreater(square.gradient([1.0])[0], 1.0)
        self.assertLess(square.gradient([-1.0])[0], 1.0)

        for _ in range(1000):
            x = self.rng.uniform(-10, 10, size=1)
            g = square.gradient(x)
            self.assertEqual(g.shape, (1,))
            self.assertLess(abs(g[0] - 2 * x[0]), 1e-3)

    @parameterized.expand(
        [
            ("sphere", descent.problems.Sphere(3)),
            ("rosenbrock", descent.problems.Rosenbrock()),
        ]
    )
    def test_accuracy(self, name, problem):
        """Test the gradient against analytical gradients."""
        numerical = descent.NumericalDifferentiation(problem, method=self.method)
        for _ in range(1000):
            x = problem.random_start(self.rng)
            analytical = problem.gradient(x)
            approximate = numerical.gradient(x)
            self.assertEqual(analytical.shape, approximate.shape)
            self.assertTrue(numpy.all(numpy.isfinite(approximate)))
            numpy.testing.assert_allclose(approximate, analytical, rtol=0, atol=1e-3)

    def test_position_unchanged(self):
        """Test the input position is not modified."""
        d = descent.NumericalDifferentiation(descent.problems.Sphere(2), self.method)
        x = numpy.array([1.0, -2.0])
        d.gradient(x)
        numpy.testing.assert_array_equal(x, [1.0, -2.0])

    def test_not_finite(self):
        """Test non-finite derivatives and steps are errors."""
        step = descent.NumericalDifferentiation(
            descent.Func(lambda x: numpy.inf if x[0] > 0 else 0.0), self.method
        )
        with self.assertRaises(FloatingPointError):
            step.gradient([0.0])

        square = descent.NumericalDifferentiation(
            descent.Func(lambda x: x[0] ** 2), self.method
        )
        with self.assertRaises(FloatingPointError):
            square.gradient([numpy.inf])

    def test_problem(self):
        """Test a differentiated problem forwards its metadata."""
        problem = descent.problems.Rosenbrock()
        d = descent.NumericalDifferentiation(problem, self.method)
        self.assertEqual(d.dimensions, 2)
        self.assertEqual(d.domain, problem.domain)
        numpy.testing.assert_array_equal(d.minimum[0], [1.0, 1.0])
        self.assertTrue(d.is_legal_position([0.0, 0.0]))
        self.assertEqual(d.random_start().shape, (2,))

        d = descent.NumericalDifferentiation(descent.Func(lambda x: 0.0), self.method)
        with self.assertRaises(AttributeError):
            d.dimensions

    def test_minimize(self):
        """Test gradient descent with a numerical gradient."""
        problem = descent.problems.Sphere(2)
        d = descent.NumericalDifferentiation(problem, self.method)
        gd = descent.GradientDescent()
        for _ in range(20):
            solution = gd.minimize(d, d.random_start(self.rng))
            self.assertIs(solution.status, descent.Status.CONVERGED)
            self.assertLess(numpy.linalg.norm(solution.position - d.minimum[0]), 1e-2)


class test_NumericalDifferentiation_init(unittest.TestCase):
    """Unit tests for invalid descent.NumericalDifferentiation parameters"""

    def test_invalid(self):
        """Test invalid function and method."""
        with self.assertRaises(TypeError):
            descent.NumericalDifferentiation(lambda x: x[0] ** 2)
        with self.assertRaises(ValueError):
            descent.NumericalDifferentiation(descent.Func(lambda x: 0.0), "backward")


if __name__ == "__main__":
    unittest.main()
