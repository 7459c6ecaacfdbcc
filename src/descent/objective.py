r"""
Objective functions
===================

An objective function is the scalar quantity :math:`f` to be minimized by
adjusting a position :math:`\mathbf{x}=\left[x_1,\ldots,x_n\right]`.

A :class:`Function` can only compute its value
:math:`f\left(\mathbf{x}\right)`. A :class:`DifferentiableFunction` can also
compute its gradient:

    .. math::

        \nabla f\left(\mathbf{x}\right) = \left[\frac{\partial f}{\partial x_1},
                                                \ldots,
                                                \frac{\partial f}{\partial x_n}\right]

A :class:`Summation` is a function that decomposes into independent terms,

    .. math::

        f\left(\mathbf{x}\right) = \sum_{i=0}^{N-1} f_i\left(\mathbf{x}\right)

which allows a minimizer to evaluate only a subset of the terms at a time
(e.g., a mini-batch in :class:`~descent.method.StochasticGradientDescent`).
Functions must be pure: evaluating the same position twice must give the
same result.

Plain Python callables can be adapted with :class:`Func` and
:class:`DifferentiableFunc`:

.. autosummary::
    :nosignatures:

    Func
    DifferentiableFunc
    FunctionSum
    PartialSummation

.. rubric:: Developer notes

To implement your own objective function, create a class that derives from one
of the abstract base classes below and define the required methods.

.. autosummary::
    :nosignatures:

    Function
    DifferentiableFunction
    Summation
    DifferentiableSummation

The result of evaluating a function is stored in an :class:`Evaluation`, and
the result of a minimization in a :class:`Solution`.

.. autoclass:: Function
    :member-order: bysource
    :members: value

.. autoclass:: DifferentiableFunction
    :member-order: bysource
    :members: gradient,
        probe

.. autoclass:: Summation
    :member-order: bysource
    :members: terms,
        term_value,
        partial_value,
        value

.. autoclass:: DifferentiableSummation
    :member-order: bysource
    :members: term_gradient,
        partial_gradient,
        gradient

.. autoclass:: Evaluation
    :member-order: bysource
    :members: position,
        value,
        gradient

.. autoclass:: Solution
    :member-order: bysource
    :members: iterations,
        status,
        converged

.. autoclass:: Status

"""

import abc
import enum
import numbers

import numpy

from descent import math


class Status(enum.Enum):
    """Reason a minimizer stopped.

    Attributes
    ----------
    RUNNING
        The minimizer has not stopped yet.
    CONVERGED
        The convergence test was satisfied.
    ITERATION_LIMIT_REACHED
        The maximum number of iterations was performed.

    """

    RUNNING = "running"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration limit reached"


class Function(abc.ABC):
    r"""Abstract base class for a function to be minimized.

    A :class:`Function` maps a position :math:`\mathbf{x}` to a scalar
    :math:`f\left(\mathbf{x}\right)`. Its domain may be restricted; respecting
    the domain is the caller's responsibility unless the function checks it.

    """

    @abc.abstractmethod
    def value(self, position):
        r"""Evaluate the function.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position :math:`\mathbf{x}`.

        Returns
        -------
        float
            The value :math:`f\left(\mathbf{x}\right)`.

        """
        pass


class DifferentiableFunction(Function):
    r"""Abstract base class for a function with an analytical gradient."""

    @abc.abstractmethod
    def gradient(self, position):
        r"""Evaluate the gradient of the function.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position :math:`\mathbf{x}`.

        Returns
        -------
        :class:`numpy.ndarray`
            The partial derivatives :math:`\partial f/\partial x_i`, with the
            same length as ``position``.

        """
        pass

    def probe(self, position):
        """Evaluate the value and the gradient of the function.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position.

        Returns
        -------
        tuple
            The value and the gradient.

        """
        return self.value(position), self.gradient(position)


class Func(Function):
    """Function defined by a callable.

    Parameters
    ----------
    value : callable
        Callable taking a position and returning a float.

    Examples
    --------
    A parabola::

        f = Func(lambda x: x[0] ** 2)

    """

    def __init__(self, value):
        if not callable(value):
            raise TypeError("The value of a Func must be callable.")
        self._value = value

    def value(self, position):
        return float(self._value(position))


class DifferentiableFunc(DifferentiableFunction):
    """Differentiable function defined by callables.

    Parameters
    ----------
    value : callable
        Callable taking a position and returning a float.
    gradient : callable
        Callable taking a position and returning the gradient.

    """

    def __init__(self, value, gradient):
        if not callable(value) or not callable(gradient):
            raise TypeError("The value and gradient of a DifferentiableFunc must be callable.")
        self._value = value
        self._gradient = gradient

    def value(self, position):
        return float(self._value(position))

    def gradient(self, position):
        return numpy.asarray(self._gradient(position), dtype=float)


class Summation(Function):
    r"""Abstract base class for a function that is a sum of terms.

    The terms are indexed :math:`0,\ldots,N-1`. The value of the function is
    computed by summing :meth:`term_value` over all terms.

    """

    @abc.abstractmethod
    def terms(self):
        """Number of terms in the sum.

        Returns
        -------
        int
            The number of terms :math:`N`.

        """
        pass

    @abc.abstractmethod
    def term_value(self, position, index):
        """Evaluate one term of the sum.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position.
        index : int
            The term index.

        Returns
        -------
        float
            The value of the term.

        """
        pass

    def partial_value(self, position, indices):
        """Evaluate the sum over a subset of the terms.

        The terms are summed in the order of ``indices``. Repeated indices
        are counted as many times as they appear.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position.
        indices : iterable of int
            The term indices to sum.

        Returns
        -------
        float
            The partial sum.

        """
        value = 0.0
        for i in indices:
            value += self.term_value(position, i)
        return value

    def value(self, position):
        return self.partial_value(position, range(self.terms()))


class DifferentiableSummation(Summation, DifferentiableFunction):
    """Abstract base class for a sum of differentiable terms.

    The gradient of the sum is the sum of the term gradients.

    """

    @abc.abstractmethod
    def term_gradient(self, position, index):
        """Evaluate the gradient of one term of the sum.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position.
        index : int
            The term index.

        Returns
        -------
        :class:`numpy.ndarray`
            The gradient of the term.

        """
        pass

    def partial_gradient(self, position, indices):
        """Evaluate the gradient of the sum over a subset of the terms.

        Parameters
        ----------
        position : :class:`numpy.ndarray`
            The position.
        indices : iterable of int
            The term indices to sum.

        Returns
        -------
        :class:`numpy.ndarray`
            The gradient of the partial sum.

        Raises
        ------
        ValueError
            If a term gradient does not match the dimension of ``position``.

        """
        size = len(position)
        gradient = numpy.zeros(size, dtype=float)
        for i in indices:
            gradient += math.check_dimensions(
                self.term_gradient(position, i), size, "term gradient"
            )
        return gradient

    def gradient(self, position):
        return self.partial_gradient(position, range(self.terms()))


class PartialSummation(DifferentiableFunction):
    """A :class:`Summation` restricted to a subset of its terms.

    The value (and, if the summation is differentiable, the gradient) is the
    partial sum over ``indices``. This is the function seen by a line search
    during one mini-batch step of stochastic gradient descent.

    Parameters
    ----------
    summation : :class:`Summation`
        The full summation.
    indices : array_like
        Term indices to keep. Repeated indices are allowed.

    Raises
    ------
    TypeError
        If ``summation`` is not a :class:`Summation`.
    IndexError
        If an index is outside the range of terms.

    """

    def __init__(self, summation, indices):
        if not isinstance(summation, Summation):
            raise TypeError("A PartialSummation requires a Summation.")
        indices = tuple(int(i) for i in indices)
        n = summation.terms()
        for i in indices:
            if i < 0 or i >= n:
                raise IndexError("Term index {} is not in [0, {}).".format(i, n))
        self._summation = summation
        self._indices = indices

    @property
    def summation(self):
        """:class:`Summation`: The full summation."""
        return self._summation

    @property
    def indices(self):
        """tuple: The kept term indices."""
        return self._indices

    def value(self, position):
        return self._summation.partial_value(position, self._indices)

    def gradient(self, position):
        if not isinstance(self._summation, DifferentiableSummation):
            raise TypeError("The terms of the summation are not differentiable.")
        return self._summation.partial_gradient(position, self._indices)


class FunctionSum(DifferentiableSummation):
    """Sum of individual functions.

    Each term of the sum is a :class:`Function`. The gradient is available
    only if all of the terms are :class:`DifferentiableFunction`\\s.

    Parameters
    ----------
    functions : iterable of :class:`Function`
        The functions to sum.

    Raises
    ------
    TypeError
        If any of the terms is not a :class:`Function`.

    """

    def __init__(self, functions):
        functions = tuple(functions)
        if not all(isinstance(f, Function) for f in functions):
            raise TypeError("All terms of a FunctionSum must be Functions.")
        self._functions = functions

    @property
    def functions(self):
        """tuple: The summed functions."""
        return self._functions

    def terms(self):
        return len(self._functions)

    def term_value(self, position, index):
        return self._functions[index].value(position)

    def term_gradient(self, position, index):
        f = self._functions[index]
        if not isinstance(f, DifferentiableFunction):
            raise TypeError("Term {} is not differentiable.".format(index))
        return f.gradient(position)


class Evaluation:
    """Position together with the value of a function there.

    An :class:`Evaluation` is immutable: the position (and gradient) are
    stored as read-only copies.

    Parameters
    ----------
    position : array_like
        The position.
    value : float
        The value of the function at ``position``.
    gradient : array_like
        The gradient of the function at ``position`` (defaults to ``None``).

    Raises
    ------
    ValueError
        If ``gradient`` does not have the same length as ``position``.

    """

    def __init__(self, position, value, gradient=None):
        position = math.as_position(position)
        position.flags.writeable = False
        if gradient is not None:
            gradient = math.check_dimensions(gradient, position.size, "gradient").copy()
            gradient.flags.writeable = False
        self._position = position
        self._value = float(value)
        self._gradient = gradient

    @property
    def position(self):
        """:class:`numpy.ndarray`: The position (read-only)."""
        return self._position

    @property
    def value(self):
        """float: The value of the function at :attr:`position`."""
        return self._value

    @property
    def gradient(self):
        """:class:`numpy.ndarray`: The gradient at :attr:`position`, or ``None``
        if it was not computed."""
        return self._gradient

    def __iter__(self):
        yield self._position
        yield self._value

    def __repr__(self):
        return "{}(position={}, value={})".format(
            type(self).__name__, self._position.tolist(), self._value
        )


class Solution(Evaluation):
    """Result of a minimization.

    Parameters
    ----------
    position : array_like
        The final position.
    value : float
        The value of the function at ``position``.
    iterations : int
        Number of iterations performed.
    status : :class:`Status`
        Why the minimization stopped.
    gradient : array_like
        The gradient at ``position`` (defaults to ``None``).

    """

    def __init__(self, position, value, iterations, status, gradient=None):
        super().__init__(position, value, gradient)
        if not isinstance(iterations, numbers.Integral) or iterations < 0:
            raise ValueError("The number of iterations must be a non-negative integer.")
        self._iterations = int(iterations)
        self._status = status

    @property
    def iterations(self):
        """int: Number of iterations performed."""
        return self._iterations

    @property
    def status(self):
        """:class:`Status`: Why the minimization stopped."""
        return self._status

    @property
    def converged(self):
        """bool: ``True`` if the minimizer met its convergence test."""
        return self._status is Status.CONVERGED
