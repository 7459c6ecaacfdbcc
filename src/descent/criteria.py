"""
Convergence criteria
====================

A convergence test determines if a minimizer has reached a point where it
should stop.

The following convergence tests have been implemented:

.. autosummary::
    :nosignatures:

    AllTest
    AnyTest
    GradientTest
    ValueTest

.. rubric:: Developer notes

To implement your own convergence test, create a class that derives from either of
the two abstract base classes below, and define the required properties and methods.
It may be helpful for the class to be composed having a :class:`Tolerance`.

.. autosummary::
    :nosignatures:

    ConvergenceTest
    LogicTest
    Tolerance

.. autoclass:: ConvergenceTest
    :member-order: bysource
    :members: converged

.. autoclass:: Tolerance
    :member-order: bysource
    :members: absolute,
        relative,
        isclose

.. autoclass:: GradientTest
    :member-order: bysource
    :members: tolerance,
        converged

.. autoclass:: ValueTest
    :member-order: bysource
    :members: absolute,
        relative,
        value,
        converged

.. autoclass:: LogicTest
    :member-order: bysource
    :members: converged

.. autoclass:: AllTest
    :member-order: bysource
    :members: converged

.. autoclass:: AnyTest
    :member-order: bysource
    :members: converged

"""

import abc

import numpy

from descent import math


class ConvergenceTest(abc.ABC):
    r"""Abstract base class for optimization convergence tests.

    A :class:`ConvergenceTest` defines a test to determine if a function
    :math:`f\left(\mathbf{x}\right)` has converged to a desired point.

    """

    @abc.abstractmethod
    def converged(self, result):
        """Check if the function is converged.

        Parameters
        ----------
        result : :class:`~descent.objective.Evaluation`
            The result to check for convergence.

        Returns
        -------
        bool
            True if the result is converged.
        """
        pass


class Tolerance:
    r"""Tolerance for convergence tests.

    A tolerance can be used to check if one value is close to another in either
    an absolute or a relative sense. The test for closeness is based on the
    NumPy method :func:`numpy.isclose`, which can use both an absolute tolerance
    :math:`\varepsilon_{\rm a}` and a relative tolerance :math:`\varepsilon_{\rm r}`.

    A value :math:`a` is close to a value :math:`b` if and only if:

    .. math::

        \lvert a-b\rvert\le\varepsilon_{\rm a}+\varepsilon_{\rm r}\lvert b\rvert

    Parameters
    ----------
    absolute : float
        The absolute tolerance. Must be non-negative.
    relative : float
        The relative tolerance. Must be between 0 and 1.

    """

    def __init__(self, absolute, relative):
        self.absolute = absolute
        self.relative = relative

    @property
    def absolute(self):
        """float: The absolute tolerance. Must be non-negative."""
        return self._absolute

    @absolute.setter
    def absolute(self, value):
        if value < 0:
            raise ValueError("Absolute tolerances must be non-negative.")
        self._absolute = value

    @property
    def relative(self):
        """float: The relative tolerance. Must be between 0 and 1."""
        return self._relative

    @relative.setter
    def relative(self, value):
        if value < 0 or value > 1:
            raise ValueError("Relative tolerances must be between 0 and 1.")
        self._relative = value

    def isclose(self, a, b):
        """Check if the two values are equivalent within a tolerance.

        The test is performed using :func:`numpy.isclose`.

        Parameters
        ----------
        a : float
            The first value to compare.
        b : float
            The second value to compare.

        Returns
        -------
        bool
            ``True`` if values are close.

        """
        return bool(numpy.isclose(a, b, atol=self.absolute, rtol=self.relative))


class GradientTest(ConvergenceTest):
    r"""Gradient test for convergence using absolute tolerance.

    This test is useful for finding minima / maxima where the gradient should
    be zero. The result is converged if and only if, for all :math:`i`:

    .. math::

        \left\lvert\frac{\partial f}{\partial x_i}\right\rvert \le t

    This identifies flat regions (including saddle points and plateaus), so
    it does not guarantee that a minimum has been found.

    Parameters
    ----------
    tolerance : float
        The absolute tolerance :math:`t`.

    """

    def __init__(self, tolerance):
        self.tolerance = tolerance

    @property
    def tolerance(self):
        """float: The absolute tolerance. Must be positive and finite."""
        return self._tolerance

    @tolerance.setter
    def tolerance(self, value):
        if not numpy.isfinite(value) or value <= 0:
            raise ValueError("The gradient tolerance must be positive and finite.")
        self._tolerance = float(value)

    def converged(self, result):
        """Check if the function is converged using the absolute gradient test.

        Parameters
        ----------
        result : :class:`~descent.objective.Evaluation`
            The location of the function at which to check for convergence.

        Returns
        -------
        bool
            True if the function is converged.

        Raises
        ------
        ValueError
            If the gradient of the result was not computed.

        """
        if result.gradient is None:
            raise ValueError("The result does not have a gradient.")
        return math.is_saddle_point(result.gradient, self.tolerance)


class ValueTest(ConvergenceTest):
    r"""Value test for convergence.

    The result is converged if and only if the value of the function :math:`f`
    is close to the ``value`` according to :meth:`Tolerance.isclose`. Absolute
    and/or relative tolerances may be used.

    Parameters
    ----------
    value : float
        The value to check.
    absolute : float
        The absolute tolerance (defaults to ``1e-8``).
    relative : float
        The relative tolerance (defaults to ``1e-5``).

    """

    def __init__(self, value, absolute=1e-8, relative=1e-5):
        self._tolerance = Tolerance(absolute=absolute, relative=relative)
        self.value = value

    @property
    def value(self):
        """float: The value to check."""
        return self._value

    @value.setter
    def value(self, value):
        self._value = value

    @property
    def absolute(self):
        """float: The absolute tolerance."""
        return self._tolerance.absolute

    @absolute.setter
    def absolute(self, value):
        self._tolerance.absolute = value

    @property
    def relative(self):
        """float: The relative tolerance."""
        return self._tolerance.relative

    @relative.setter
    def relative(self, value):
        self._tolerance.relative = value

    def converged(self, result):
        """Check if the function is converged using the value test.

        Parameters
        ----------
        result : :class:`~descent.objective.Evaluation`
            The result to check for convergence.

        Returns
        -------
        bool
            True if the function is converged.

        """
        return self._tolerance.isclose(result.value, self.value)


class LogicTest(ConvergenceTest):
    r"""Abstract base class for logical convergence tests.

    Parameters
    ----------
    tests : args
        The :class:`ConvergenceTest`\s to be used.

    Raises
    ------
    TypeError
        If all inputs are not :class:`ConvergenceTest`\s.

    """

    def __init__(self, *tests):
        if not all([isinstance(t, ConvergenceTest) for t in tests]):
            raise TypeError("All inputs to a LogicTest must be ConvergenceTests.")
        self.tests = tests


class AnyTest(LogicTest):
    r"""Logic test if any specified test returns convergence.

    Parameters
    ----------
    tests : args
        The :class:`ConvergenceTest`\s to be used.

    """

    def converged(self, result):
        """Check if the function has converged by any of the specified tests.

        Parameters
        ----------
        result : :class:`~descent.objective.Evaluation`
            The result to check for convergence.

        Returns
        -------
        bool
            True if the function is converged by any test.

        """
        return any(t.converged(result) for t in self.tests)


class AllTest(LogicTest):
    r"""Logic test if all specified tests return convergence.

    Parameters
    ----------
    tests : args
        The :class:`ConvergenceTest`\s to be used.

    """

    def converged(self, result):
        """Check if the function is converged by all of the specified tests.

        Parameters
        ----------
        result : :class:`~descent.objective.Evaluation`
            The result to check for convergence.

        Returns
        -------
        bool
            True if the function is converged by all tests.

        """
        return all(t.converged(result) for t in self.tests)

