r"""
Numerical differentiation
=========================

A :class:`NumericalDifferentiation` makes any :class:`~descent.objective.Function`
differentiable by approximating each partial derivative with a finite
difference. The step for coordinate :math:`x_i` is scaled with its magnitude,

    .. math::

        h_i = \eta \max\left(\lvert x_i\rvert, 1\right)

so that the step is never smaller than :math:`\eta` (in particular at
:math:`x_i=0`).

Forward differences use :math:`\eta=\sqrt{\epsilon}`, where :math:`\epsilon`
is the machine epsilon, and cost one extra evaluation per coordinate:

    .. math::

        \frac{\partial f}{\partial x_i} \approx
            \frac{f\left(\mathbf{x}+h_i\mathbf{e}_i\right)-f\left(\mathbf{x}\right)}{h_i}

Central differences use :math:`\eta=\epsilon^{1/3}` and cost two evaluations
per coordinate, but the truncation error is second order in :math:`h_i`:

    .. math::

        \frac{\partial f}{\partial x_i} \approx
            \frac{f\left(\mathbf{x}+h_i\mathbf{e}_i\right)
                 -f\left(\mathbf{x}-h_i\mathbf{e}_i\right)}{2h_i}

.. autoclass:: NumericalDifferentiation
    :member-order: bysource
    :members: function,
        method,
        value,
        gradient

"""

import sys

import numpy

from descent import math, problems
from descent.objective import DifferentiableFunction, Function

_EPSILON = sys.float_info.epsilon


class NumericalDifferentiation(DifferentiableFunction):
    """Finite-difference gradient of a function.

    Parameters
    ----------
    function : :class:`~descent.objective.Function`
        The function to differentiate.
    method : str
        Either ``"forward"`` or ``"central"`` differences (defaults to
        ``"forward"``).

    Raises
    ------
    TypeError
        If ``function`` is not a :class:`~descent.objective.Function`.
    ValueError
        If ``method`` is not recognized.

    Examples
    --------
    Differentiate a parabola::

        square = NumericalDifferentiation(Func(lambda x: x[0] ** 2))

        >>> square.gradient([1.0])
        array([2.00000001])

    """

    methods = ("forward", "central")

    def __init__(self, function, method="forward"):
        if not isinstance(function, Function):
            raise TypeError("NumericalDifferentiation requires a Function.")
        if method not in self.methods:
            raise ValueError(
                "Finite difference method must be one of {}.".format(self.methods)
            )
        self._function = function
        self._method = method

    @property
    def function(self):
        """:class:`~descent.objective.Function`: The differentiated function."""
        return self._function

    @property
    def method(self):
        """str: The finite difference method."""
        return self._method

    def value(self, position):
        return self._function.value(position)

    def gradient(self, position):
        """Approximate the gradient by finite differences.

        Parameters
        ----------
        position : array_like
            The position.

        Returns
        -------
        :class:`numpy.ndarray`
            The approximate gradient.

        Raises
        ------
        FloatingPointError
            If a step size or partial derivative is not finite.

        """
        x0 = math.as_position(position)
        x = x0.copy()
        if self._method == "forward":
            eta = numpy.sqrt(_EPSILON)
            current = self._function.value(x)
        else:
            eta = numpy.cbrt(_EPSILON)

        gradient = numpy.empty_like(x)
        for i, x_i in enumerate(x0):
            h = eta * max(abs(x_i), 1.0)
            if not numpy.isfinite(h):
                raise FloatingPointError(
                    "Finite difference step for coordinate {} is not finite.".format(i)
                )

            x[i] = x_i + h
            forward = self._function.value(x)
            if self._method == "forward":
                d_i = (forward - current) / h
            else:
                x[i] = x_i - h
                backward = self._function.value(x)
                d_i = (forward - backward) / (2.0 * h)
            x[i] = x_i

            if not numpy.isfinite(d_i):
                raise FloatingPointError(
                    "Partial derivative for coordinate {} is not finite.".format(i)
                )
            gradient[i] = d_i

        return gradient

    # metadata of a wrapped test problem
    def __getattr__(self, name):
        if name in problems.Problem.metadata and isinstance(
            self.__dict__.get("_function"), problems.Problem
        ):
            return getattr(self._function, name)
        raise AttributeError(
            "'{}' object has no attribute '{}'".format(type(self).__name__, name)
        )
