"""
=======
descent
=======

First-order numerical minimization of scalar functions of a real vector.

.. currentmodule:: descent

Objectives
==========

.. autosummary::
    :toctree: generated/

    Function
    DifferentiableFunction
    Func
    DifferentiableFunc
    Summation
    DifferentiableSummation
    PartialSummation
    FunctionSum
    NumericalDifferentiation

Line searches
=============

.. autosummary::
    :toctree: generated/

    FixedStep
    ExactLineSearch
    ArmijoLineSearch

Algorithms
==========

.. autosummary::
    :toctree: generated/

    GradientDescent
    StochasticGradientDescent

Results
=======

.. autosummary::
    :toctree: generated/

    Evaluation
    Solution
    Status

Developer classes
=================

.. autosummary::
    :toctree: generated/

    LineSearch
    LineSearchError
    Minimizer

.. automodule:: descent.criteria

.. automodule:: descent.problems

"""

from . import criteria, logging, math, problems
from .linesearch import (
    ArmijoLineSearch,
    ExactLineSearch,
    FixedStep,
    LineSearch,
    LineSearchError,
)
from .method import GradientDescent, Minimizer, Status, StochasticGradientDescent
from .numeric import NumericalDifferentiation
from .objective import (
    DifferentiableFunc,
    DifferentiableFunction,
    DifferentiableSummation,
    Evaluation,
    Func,
    Function,
    FunctionSum,
    PartialSummation,
    Solution,
    Summation,
)

__version__ = "0.3.0"
