r"""
Test problems
=============

Well known `optimization test functions
<http://www.sfu.ca/~ssurjano/optimization.html>`_ with analytical gradients
and known minima. They are used to check that the minimizers converge.

.. autosummary::
    :nosignatures:

    Sphere
    Rosenbrock

.. rubric:: Developer notes

.. autoclass:: Problem
    :member-order: bysource
    :members: dimensions,
        domain,
        minimum,
        random_start,
        is_legal_position

.. autoclass:: Sphere
    :member-order: bysource

.. autoclass:: Rosenbrock
    :member-order: bysource
    :members: a,
        b

"""

import abc

import numpy

from descent.objective import DifferentiableFunction


class Problem(DifferentiableFunction):
    """Abstract base class for a test problem.

    A :class:`Problem` knows its dimension, its open domain, the location of
    its global minimum, and how to draw a feasible starting position.
    Evaluating the value or gradient outside of the domain is an error.

    """

    metadata = ("dimensions", "domain", "minimum", "random_start", "is_legal_position")

    @property
    @abc.abstractmethod
    def dimensions(self):
        """int: Number of dimensions of the domain."""
        pass

    @property
    @abc.abstractmethod
    def domain(self):
        """list: Lower and upper bound of each dimension."""
        pass

    @property
    @abc.abstractmethod
    def minimum(self):
        """tuple: Position and value of the global minimum."""
        pass

    @abc.abstractmethod
    def random_start(self, rng=None):
        """Draw a feasible starting position.

        Parameters
        ----------
        rng : :class:`numpy.random.Generator`
            Random number generator (defaults to ``None``, which creates a
            new unseeded generator).

        Returns
        -------
        :class:`numpy.ndarray`
            The starting position.

        """
        pass

    def is_legal_position(self, position):
        """Test if a position is inside the domain.

        Parameters
        ----------
        position : array_like
            The position.

        Returns
        -------
        bool
            ``True`` if ``position`` has the right dimension and lies strictly
            inside the domain.

        """
        position = numpy.asarray(position, dtype=float)
        if position.shape != (self.dimensions,):
            return False
        return all(lo < x < hi for x, (lo, hi) in zip(position, self.domain))

    def _check(self, position):
        position = numpy.asarray(position, dtype=float)
        if not self.is_legal_position(position):
            raise ValueError(
                "Position {} is not in the domain of {}.".format(
                    position.tolist(), type(self).__name__
                )
            )
        return position


class Sphere(Problem):
    r"""n-dimensional sphere function.

    The sphere function is continuous, convex and unimodal:

    .. math::

        f\left(\mathbf{x}\right) = \sum_i x_i^2

    The global minimum is :math:`f\left(\mathbf{0}\right)=0`. Starting
    positions are drawn uniformly from :math:`[-5.12, 5.12)`.

    Parameters
    ----------
    dimensions : int
        Number of dimensions (defaults to 2).

    Raises
    ------
    ValueError
        If ``dimensions`` is not positive.

    """

    def __init__(self, dimensions=2):
        if dimensions < 1:
            raise ValueError("The number of dimensions must be positive.")
        self._dimensions = int(dimensions)

    @property
    def dimensions(self):
        return self._dimensions

    @property
    def domain(self):
        return [(-numpy.inf, numpy.inf)] * self._dimensions

    @property
    def minimum(self):
        return numpy.zeros(self._dimensions), 0.0

    def random_start(self, rng=None):
        if rng is None:
            rng = numpy.random.default_rng()
        return rng.uniform(-5.12, 5.12, size=self._dimensions)

    def value(self, position):
        x = self._check(position)
        return float(numpy.sum(x**2))

    def gradient(self, position):
        x = self._check(position)
        return 2.0 * x


class Rosenbrock(Problem):
    r"""Two-dimensional Rosenbrock function.

    A non-convex function whose global minimum lies inside a long, narrow,
    parabolic valley:

    .. math::

        f\left(x, y\right) = \left(a-x\right)^2 + b\left(y-x^2\right)^2

    The global minimum is :math:`f\left(a, a^2\right)=0`. Starting positions
    are drawn uniformly from :math:`[-2.048, 2.048)`.

    Parameters
    ----------
    a : float
        The :math:`a` parameter (defaults to 1).
    b : float
        The :math:`b` parameter (defaults to 100).

    """

    def __init__(self, a=1.0, b=100.0):
        self._a = float(a)
        self._b = float(b)

    @property
    def a(self):
        """float: The :math:`a` parameter."""
        return self._a

    @property
    def b(self):
        """float: The :math:`b` parameter."""
        return self._b

    @property
    def dimensions(self):
        return 2

    @property
    def domain(self):
        return [(-numpy.inf, numpy.inf), (-numpy.inf, numpy.inf)]

    @property
    def minimum(self):
        return numpy.array([self._a, self._a**2]), 0.0

    def random_start(self, rng=None):
        if rng is None:
            rng = numpy.random.default_rng()
        return rng.uniform(-2.048, 2.048, size=2)

    def value(self, position):
        x, y = self._check(position)
        return (self._a - x) ** 2 + self._b * (y - x**2) ** 2

    def gradient(self, position):
        x, y = self._check(position)
        a, b = self._a, self._b
        return numpy.array(
            [
                -2.0 * a + 4.0 * b * x**3 - 4.0 * b * x * y + 2.0 * x,
                2.0 * b * (y - x**2),
            ]
        )
