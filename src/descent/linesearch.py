r"""
Line searches
=============

Given a :class:`~descent.objective.Function` :math:`f`, a position
:math:`\mathbf{x}` and a search direction :math:`\mathbf{d}`, a line search
chooses a step size :math:`\gamma \ge 0` and moves to

    .. math::

        \mathbf{x}' = \mathbf{x} + \gamma\mathbf{d}

The following line searches have been implemented:

.. autosummary::
    :nosignatures:

    FixedStep
    ExactLineSearch
    ArmijoLineSearch

.. rubric:: Developer notes

To implement your own line search, create a class that derives from
:class:`LineSearch` and define the required methods.

.. autoclass:: LineSearch
    :member-order: bysource
    :members: search

.. autoclass:: LineSearchError

.. autoclass:: FixedStep
    :member-order: bysource
    :members: step_width,
        search

.. autoclass:: ExactLineSearch
    :member-order: bysource
    :members: start,
        stop,
        factor,
        step_widths,
        search

.. autoclass:: ArmijoLineSearch
    :member-order: bysource
    :members: control,
        initial_step,
        decay,
        max_iter,
        search

"""

import abc
import numbers

import numpy

from descent import math
from descent.logging import get_logger
from descent.objective import DifferentiableFunction, Evaluation

logger = get_logger(__name__)


class LineSearchError(RuntimeError):
    """Raised when a line search cannot find an acceptable step size."""

    pass


def _check_finite_positive(value, name):
    if not isinstance(value, numbers.Real):
        raise TypeError("The {} must be a real number.".format(name))
    if not numpy.isfinite(value) or value <= 0:
        raise ValueError("The {} must be positive and finite.".format(name))
    return float(value)


def _check_fraction(value, name):
    if not isinstance(value, numbers.Real):
        raise TypeError("The {} must be a real number.".format(name))
    if not 0 < value < 1:
        raise ValueError("The {} must be between 0 and 1.".format(name))
    return float(value)


class LineSearch(abc.ABC):
    """Abstract base class for a line search."""

    @abc.abstractmethod
    def search(self, function, position, direction):
        """Take a step along a direction.

        Parameters
        ----------
        function : :class:`~descent.objective.Function`
            The function being minimized.
        position : array_like
            The starting position.
        direction : array_like
            The search direction, with the same length as ``position``.

        Returns
        -------
        :class:`~descent.objective.Evaluation`
            The new position and the value of ``function`` there.

        """
        pass

    @staticmethod
    def _setup(position, direction):
        x = math.as_position(position)
        d = math.check_dimensions(direction, x.size, "direction")
        return x, d


class FixedStep(LineSearch):
    r"""Fixed step size.

    No search is performed: the step size :math:`\gamma` is constant, and the
    function is only evaluated at the new position.

    Parameters
    ----------
    step_width : float
        The step size :math:`\gamma`.

    """

    def __init__(self, step_width):
        self.step_width = step_width

    @property
    def step_width(self):
        r"""float: The step size :math:`\gamma`. Must be positive and finite."""
        return self._step_width

    @step_width.setter
    def step_width(self, value):
        self._step_width = _check_finite_positive(value, "step width")

    def search(self, function, position, direction):
        x, d = self._setup(position, direction)
        x += self.step_width * d
        return Evaluation(x, function.value(x))

    def __repr__(self):
        return "FixedStep(step_width={})".format(self.step_width)


class ExactLineSearch(LineSearch):
    r"""Brute-force line search over a geometric grid of step sizes.

    The function is evaluated for each candidate step size

    .. math::

        \gamma_k = \gamma_0 \rho^k \le \gamma_{\max}, \quad k = 0, 1, \ldots

    and the position with the lowest value is returned. The starting position
    is included as a candidate (:math:`\gamma=0`), so the search never moves
    to a position with a higher value.

    Parameters
    ----------
    start : float
        The smallest step size :math:`\gamma_0`.
    stop : float
        The largest step size :math:`\gamma_{\max}`.
    factor : float
        The growth factor :math:`\rho`.

    Raises
    ------
    ValueError
        If ``start`` is not smaller than ``stop``.

    """

    def __init__(self, start, stop, factor):
        self.start = start
        self.stop = stop
        self.factor = factor

    @property
    def start(self):
        r"""float: The smallest step size :math:`\gamma_0`. Must be positive,
        finite, and smaller than :attr:`stop`."""
        return self._start

    @start.setter
    def start(self, value):
        value = _check_finite_positive(value, "start step width")
        stop = getattr(self, "_stop", None)
        if stop is not None and value >= stop:
            raise ValueError("The start step width must be smaller than the stop.")
        self._start = value

    @property
    def stop(self):
        r"""float: The largest step size :math:`\gamma_{\max}`. Must be finite
        and larger than :attr:`start`."""
        return self._stop

    @stop.setter
    def stop(self, value):
        value = _check_finite_positive(value, "stop step width")
        if value <= self.start:
            raise ValueError("The stop step width must be larger than the start.")
        self._stop = value

    @property
    def factor(self):
        r"""float: The growth factor :math:`\rho`. Must be finite and larger
        than 1."""
        return self._factor

    @factor.setter
    def factor(self, value):
        value = _check_finite_positive(value, "growth factor")
        if value <= 1:
            raise ValueError("The growth factor must be larger than 1.")
        self._factor = value

    def step_widths(self):
        """Generate the candidate step sizes.

        Yields
        ------
        float
            The step sizes in increasing order.

        """
        k = 0
        step = self.start
        while step <= self.stop:
            yield step
            k += 1
            step = self.start * self.factor**k

    def search(self, function, position, direction):
        x, d = self._setup(position, direction)
        best = Evaluation(x, function.value(x))
        for step in self.step_widths():
            candidate = x + step * d
            value = function.value(candidate)
            if value < best.value:
                best = Evaluation(candidate, value)
        return best

    def __repr__(self):
        return "ExactLineSearch(start={}, stop={}, factor={})".format(
            self.start, self.stop, self.factor
        )


class ArmijoLineSearch(LineSearch):
    r"""Backtracking line search using the Armijo rule.

    Given the directional derivative
    :math:`m = \nabla f\left(\mathbf{x}\right) \cdot \mathbf{d}`, the target
    slope is :math:`t = -c m` for a control parameter :math:`c`. The step size
    starts at :math:`\gamma_0` and is multiplied by the decay factor
    :math:`\tau` until the sufficient decrease condition

    .. math::

        f\left(\mathbf{x} + \gamma\mathbf{d}\right)
            \le f\left(\mathbf{x}\right) - \gamma t

    is satisfied. The direction must be a descent direction (:math:`t > 0`).

    Armijo's original choice of parameters is :math:`c=0.5`,
    :math:`\gamma_0=1`, and :math:`\tau=0.5`.

    Parameters
    ----------
    control : float
        The control parameter :math:`c`.
    initial_step : float
        The initial step size :math:`\gamma_0`.
    decay : float
        The decay factor :math:`\tau`.
    max_iter : int
        The maximum number of step sizes to try (defaults to 1000).

    """

    def __init__(self, control, initial_step, decay, max_iter=1000):
        self.control = control
        self.initial_step = initial_step
        self.decay = decay
        self.max_iter = max_iter

    @property
    def control(self):
        """float: The control parameter :math:`c`. Must be between 0 and 1."""
        return self._control

    @control.setter
    def control(self, value):
        self._control = _check_fraction(value, "control parameter")

    @property
    def initial_step(self):
        r"""float: The initial step size :math:`\gamma_0`. Must be positive
        and finite."""
        return self._initial_step

    @initial_step.setter
    def initial_step(self, value):
        self._initial_step = _check_finite_positive(value, "initial step width")

    @property
    def decay(self):
        r"""float: The decay factor :math:`\tau`. Must be between 0 and 1."""
        return self._decay

    @decay.setter
    def decay(self, value):
        self._decay = _check_fraction(value, "decay factor")

    @property
    def max_iter(self):
        """int: The maximum number of step sizes to try."""
        return self._max_iter

    @max_iter.setter
    def max_iter(self, value):
        if not isinstance(value, numbers.Integral):
            raise TypeError("The maximum number of iterations must be an integer.")
        if value < 1:
            raise ValueError("The maximum number of iterations must be positive.")
        self._max_iter = int(value)

    def search(self, function, position, direction):
        """Take the largest step satisfying the Armijo rule.

        Parameters
        ----------
        function : :class:`~descent.objective.DifferentiableFunction`
            The function being minimized.
        position : array_like
            The starting position.
        direction : array_like
            The search direction, with the same length as ``position``.

        Returns
        -------
        :class:`~descent.objective.Evaluation`
            The new position and the value of ``function`` there.

        Raises
        ------
        TypeError
            If ``function`` is not differentiable.
        ValueError
            If ``direction`` is not a descent direction.
        LineSearchError
            If no step size is accepted within :attr:`max_iter` tries.

        """
        if not isinstance(function, DifferentiableFunction):
            raise TypeError("The Armijo line search requires a DifferentiableFunction.")
        x, d = self._setup(position, direction)

        initial_value, gradient = function.probe(x)
        gradient = math.check_dimensions(gradient, x.size, "gradient")
        m = float(numpy.dot(gradient, d))
        t = -self.control * m
        if not t > 0:
            raise ValueError("The search direction must be a descent direction.")

        step = self.initial_step
        for _ in range(self.max_iter):
            candidate = x + step * d
            value = function.value(candidate)
            if value <= initial_value - step * t:
                logger.debug("Accepted step width %s", step)
                return Evaluation(candidate, value)
            step *= self.decay

        logger.warning("No step width satisfied the Armijo rule after %d tries", self.max_iter)
        raise LineSearchError(
            "Armijo line search did not converge in {} iterations.".format(self.max_iter)
        )

    def __repr__(self):
        return "ArmijoLineSearch(control={}, initial_step={}, decay={})".format(
            self.control, self.initial_step, self.decay
        )
