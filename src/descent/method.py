r"""
Minimizers
==========

A minimizer iteratively moves a position down the gradient of a function until
a convergence test is met or an iteration budget is exhausted.

The following minimizers have been implemented:

.. autosummary::
    :nosignatures:

    GradientDescent
    StochasticGradientDescent

.. rubric:: Developer notes

To implement your own minimizer, create a class that derives from
:class:`Minimizer` and define the required methods.

.. autoclass:: Minimizer
    :member-order: bysource
    :members: minimize,
        max_iter

.. autoclass:: GradientDescent
    :member-order: bysource
    :members: minimize,
        line_search,
        gradient_tolerance,
        stop

.. autoclass:: StochasticGradientDescent
    :member-order: bysource
    :members: minimize,
        line_search,
        mini_batch,
        seed

"""

import abc
import numbers

import numpy

from descent import math
from descent.criteria import AnyTest, ConvergenceTest, GradientTest
from descent.linesearch import ArmijoLineSearch, FixedStep, LineSearch
from descent.logging import get_logger
from descent.objective import (
    DifferentiableFunction,
    DifferentiableSummation,
    Evaluation,
    PartialSummation,
    Solution,
    Status,
)

logger = get_logger(__name__)


class Minimizer(abc.ABC):
    """Abstract base class for a minimization algorithm.

    Parameters
    ----------
    max_iter : int
        The maximum number of iterations. ``None`` means no limit.

    """

    def __init__(self, max_iter=None):
        self.max_iter = max_iter

    @abc.abstractmethod
    def minimize(self, function, position):
        """Minimize a function.

        Parameters
        ----------
        function : :class:`~descent.objective.Function`
            The function to minimize.
        position : array_like
            The initial position.

        Returns
        -------
        :class:`~descent.objective.Solution`
            The final position and its value.

        """
        pass

    @property
    def max_iter(self):
        """int: The maximum number of iterations. ``None`` means no limit."""
        return self._max_iter

    @max_iter.setter
    def max_iter(self, value):
        if value is not None:
            if not isinstance(value, numbers.Integral):
                raise TypeError("The maximum number of iterations must be an integer.")
            if value < 1:
                raise ValueError("The maximum number of iterations must be positive.")
            value = int(value)
        self._max_iter = value

    def _reached_max_iter(self, iteration):
        return self.max_iter is not None and iteration >= self.max_iter

    @staticmethod
    def _check_line_search(value):
        if not isinstance(value, LineSearch):
            raise TypeError("The line search must be a LineSearch object.")
        return value


class GradientDescent(Minimizer):
    r"""Gradient descent.

    For a :class:`~descent.objective.DifferentiableFunction`
    :math:`f\left(\mathbf{x}\right)`, each iteration steps along the negative
    gradient,

    .. math::

        \mathbf{x}_{n+1} = \mathbf{x}_n-\gamma_n\nabla f\left(\mathbf{x}_n\right)

    where the step size :math:`\gamma_n` is chosen by a
    :class:`~descent.linesearch.LineSearch`.

    The minimization stops when every component of the gradient is within
    ``gradient_tolerance`` of zero (see
    :class:`~descent.criteria.GradientTest`), when the optional ``stop`` test
    is satisfied, or when ``max_iter`` iterations have been performed. Without
    ``max_iter``, the minimization only ends when the convergence test is met.

    Parameters
    ----------
    line_search : :class:`~descent.linesearch.LineSearch`
        The line search (defaults to ``None``, which is
        ``ArmijoLineSearch(0.5, 1.0, 0.5)``).
    gradient_tolerance : float
        Absolute tolerance on the gradient components (defaults to ``1e-4``).
    max_iter : int
        The maximum number of iterations (defaults to ``None``, no limit).
    stop : :class:`~descent.criteria.ConvergenceTest`
        Additional convergence test (defaults to ``None``).

    Examples
    --------
    Minimize the Rosenbrock function::

        f = descent.problems.Rosenbrock()
        gd = descent.GradientDescent(max_iter=100000)
        solution = gd.minimize(f, [-3.0, -4.0])

    """

    def __init__(self, line_search=None, gradient_tolerance=1e-4, max_iter=None, stop=None):
        super().__init__(max_iter)
        if line_search is None:
            line_search = ArmijoLineSearch(0.5, 1.0, 0.5)
        self.line_search = line_search
        self._gradient_test = GradientTest(gradient_tolerance)
        self.stop = stop

    @property
    def line_search(self):
        """:class:`~descent.linesearch.LineSearch`: The line search."""
        return self._line_search

    @line_search.setter
    def line_search(self, value):
        self._line_search = self._check_line_search(value)

    @property
    def gradient_tolerance(self):
        """float: Absolute tolerance on the gradient. Must be positive and finite."""
        return self._gradient_test.tolerance

    @gradient_tolerance.setter
    def gradient_tolerance(self, value):
        self._gradient_test.tolerance = value

    @property
    def stop(self):
        """:class:`~descent.criteria.ConvergenceTest`: Additional convergence test."""
        return self._stop

    @stop.setter
    def stop(self, value):
        if value is not None and not isinstance(value, ConvergenceTest):
            raise TypeError("The stopping criterion must be a ConvergenceTest.")
        self._stop = value

    def minimize(self, function, position):
        r"""Minimize a function by gradient descent.

        Parameters
        ----------
        function : :class:`~descent.objective.DifferentiableFunction`
            The function to minimize.
        position : array_like
            The initial position.

        Returns
        -------
        :class:`~descent.objective.Solution`
            The final position and its value. The status is
            :attr:`~descent.objective.Status.CONVERGED` if the convergence test
            was met, or :attr:`~descent.objective.Status.ITERATION_LIMIT_REACHED`.

        Raises
        ------
        TypeError
            If ``function`` is not differentiable.
        ValueError
            If the gradient does not have the dimension of ``position``.

        """
        if not isinstance(function, DifferentiableFunction):
            raise TypeError("Gradient descent requires a DifferentiableFunction.")
        if self.stop is not None:
            test = AnyTest(self._gradient_test, self.stop)
        else:
            test = self._gradient_test

        x = math.as_position(position)
        value = function.value(x)
        logger.info(
            "Starting gradient descent: gradient_tolerance = %s, max_iter = %s, "
            "line_search = %s",
            self.gradient_tolerance,
            self.max_iter,
            self.line_search,
        )
        logger.info("Starting with f = %s", value)

        status = Status.RUNNING
        iteration = 0
        while status is Status.RUNNING:
            gradient = math.check_dimensions(function.gradient(x), x.size, "gradient")
            current = Evaluation(x, value, gradient)
            if test.converged(current):
                logger.info("Gradient is flat, stopping after %d iterations", iteration)
                status = Status.CONVERGED
                break

            step = self.line_search.search(function, x, -gradient)
            x = numpy.array(step.position)
            value = step.value
            iteration += 1
            logger.debug("Iteration %6d: f = %s, x = %s", iteration, value, x)

            if self._reached_max_iter(iteration):
                logger.info("Reached maximum number of iterations, stopping")
                status = Status.ITERATION_LIMIT_REACHED
                gradient = None

        return Solution(x, value, iteration, status, gradient)


class StochasticGradientDescent(Minimizer):
    r"""Stochastic (mini-batch) gradient descent.

    The function must be a :class:`~descent.objective.DifferentiableSummation`
    :math:`f\left(\mathbf{x}\right)=\sum_i f_i\left(\mathbf{x}\right)`. Each
    iteration (epoch) visits every term once:

    1. The term indices are shuffled.
    2. The shuffled indices are split into consecutive mini-batches of
       ``mini_batch`` terms (the last may be smaller).
    3. For each mini-batch :math:`B`, a step is taken along
       :math:`-\sum_{i\in B}\nabla f_i`. The line search only sees the
       partial sum over :math:`B`
       (see :class:`~descent.objective.PartialSummation`). A mini-batch
       whose partial gradient is exactly zero is skipped.
    4. The full function is evaluated at the end of the epoch.

    Stochastic gradients are noisy, so there is no gradient-based convergence
    test: the minimization ends after ``max_iter`` epochs. Without
    ``max_iter``, it never ends.

    Each call to :meth:`minimize` creates its own random number generator from
    ``seed``, so two runs with the same seed give identical results.

    Parameters
    ----------
    line_search : :class:`~descent.linesearch.LineSearch`
        The line search (defaults to ``None``, which is ``FixedStep(0.01)``).
    max_iter : int
        The maximum number of epochs (defaults to ``None``, no limit).
    mini_batch : int
        The number of terms in a mini-batch (defaults to 1).
    seed : int
        Seed for shuffling the terms (defaults to ``None``, which draws fresh
        entropy for every run).

    """

    def __init__(self, line_search=None, max_iter=None, mini_batch=1, seed=None):
        super().__init__(max_iter)
        if line_search is None:
            line_search = FixedStep(0.01)
        self.line_search = line_search
        self.mini_batch = mini_batch
        self.seed = seed

    @property
    def line_search(self):
        """:class:`~descent.linesearch.LineSearch`: The line search."""
        return self._line_search

    @line_search.setter
    def line_search(self, value):
        self._line_search = self._check_line_search(value)

    @property
    def mini_batch(self):
        """int: The number of terms in a mini-batch. Must be positive."""
        return self._mini_batch

    @mini_batch.setter
    def mini_batch(self, value):
        if not isinstance(value, numbers.Integral):
            raise TypeError("The mini-batch size must be an integer.")
        if value < 1:
            raise ValueError("The mini-batch size must be positive.")
        self._mini_batch = int(value)

    @property
    def seed(self):
        """int: Seed for shuffling the terms. Must be non-negative if set."""
        return self._seed

    @seed.setter
    def seed(self, value):
        if value is not None:
            if not isinstance(value, numbers.Integral):
                raise TypeError("The seed must be an integer.")
            if value < 0:
                raise ValueError("The seed must be non-negative.")
            value = int(value)
        self._seed = value

    def minimize(self, function, position):
        """Minimize a summation by stochastic gradient descent.

        Parameters
        ----------
        function : :class:`~descent.objective.DifferentiableSummation`
            The function to minimize.
        position : array_like
            The initial position.

        Returns
        -------
        :class:`~descent.objective.Solution`
            The position after the last epoch and its value.

        Raises
        ------
        TypeError
            If ``function`` is not a differentiable summation.
        ValueError
            If a gradient does not have the dimension of ``position``.

        """
        if not isinstance(function, DifferentiableSummation):
            raise TypeError(
                "Stochastic gradient descent requires a DifferentiableSummation."
            )
        rng = numpy.random.default_rng(self.seed)
        terms = function.terms()

        x = math.as_position(position)
        value = function.value(x)
        logger.info(
            "Starting stochastic gradient descent: terms = %d, mini_batch = %d, "
            "max_iter = %s, line_search = %s",
            terms,
            self.mini_batch,
            self.max_iter,
            self.line_search,
        )
        logger.info("Starting with f = %s", value)

        iteration = 0
        while not self._reached_max_iter(iteration):
            order = rng.permutation(terms)
            for start in range(0, terms, self.mini_batch):
                batch = PartialSummation(function, order[start : start + self.mini_batch])
                gradient = math.check_dimensions(
                    batch.gradient(x), x.size, "partial gradient"
                )
                # a zero partial gradient has no descent direction
                if not numpy.any(gradient):
                    continue
                step = self.line_search.search(batch, x, -gradient)
                x = numpy.array(step.position)

            value = function.value(x)
            iteration += 1
            logger.debug("Epoch %6d: f = %s, x = %s", iteration, value, x)

        logger.info("Reached maximum number of epochs, stopping")
        return Solution(x, value, iteration, Status.ITERATION_LIMIT_REACHED)
