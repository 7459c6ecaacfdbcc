"""
============================
Math functions (`descent.math`)
============================

.. currentmodule:: descent.math

.. autosummary::
    :toctree: generated/

    as_position
    check_dimensions
    is_saddle_point

"""

import numpy


def as_position(x):
    r"""Convert a sequence of numbers to a position vector.

    The result is always a new 1-d array of floats, so callers can modify it
    without touching ``x``.

    Parameters
    ----------
    x : array_like
        Coordinates of the position.

    Returns
    -------
    :class:`numpy.ndarray`
        1-d array of floats.

    Raises
    ------
    ValueError
        If ``x`` is not 1-dimensional.

    """
    x = numpy.array(x, dtype=float)
    if x.ndim != 1:
        raise ValueError("A position must be 1-dimensional.")
    return x


def check_dimensions(x, size, name="vector"):
    """Check that a vector has the expected number of components.

    Parameters
    ----------
    x : :class:`numpy.ndarray`
        The vector to check.
    size : int
        Expected number of components.
    name : str
        Name of the vector used in the error message.

    Returns
    -------
    :class:`numpy.ndarray`
        ``x`` as a 1-d float array.

    Raises
    ------
    ValueError
        If ``x`` does not have shape ``(size,)``.

    """
    x = numpy.asarray(x, dtype=float)
    if x.shape != (size,):
        raise ValueError(
            "The {} has shape {} but the position has {} dimensions.".format(
                name, x.shape, size
            )
        )
    return x


def is_saddle_point(gradient, tolerance):
    r"""Test if all gradient components lie within a tolerance.

    This is the flat-region heuristic used to stop gradient descent:

    .. math::

        \left\lvert\frac{\partial f}{\partial x_i}\right\rvert \le t
        \quad \forall i

    It does not certify a minimum.

    Parameters
    ----------
    gradient : array_like
        The gradient.
    tolerance : float
        The absolute tolerance :math:`t`.

    Returns
    -------
    bool
        ``True`` if the region is flat.

    """
    return bool(numpy.all(numpy.abs(gradient) <= tolerance))

